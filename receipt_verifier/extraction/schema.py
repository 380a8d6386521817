"""Receipt field models for structured extraction.

Extractors produce a plain mapping of canonical field name to value
(``ExtractedFields``). ``ReceiptFields`` is the typed view of that mapping
used at the API boundary.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# A value is either text or an amount; nothing else is ever stored.
FieldValue = str | Decimal
ExtractedFields = dict[str, FieldValue]

# Canonical field names
PAYER_NAME = "payer_name"
PAYER_PHONE = "payer_phone"
PAYER_ACC_TYPE = "payer_acc_type"
CREDITED_PARTY_NAME = "credited_party_name"
CREDITED_PARTY_ACC_NO = "credited_party_acc_no"
TRANSACTION_STATUS = "transaction_status"
BANK_ACC_NO = "bank_acc_no"
RECIPIENT_NAME = "to"
RECEIPT_NO = "receiptNo"
DATE = "date"
SETTLED_AMOUNT = "settled_amount"
DISCOUNT_AMOUNT = "discount_amount"
VAT_AMOUNT = "vat_amount"
TOTAL_AMOUNT = "total_amount"
AMOUNT_IN_WORD = "amount_in_word"
PAYMENT_MODE = "payment_mode"
PAYMENT_REASON = "payment_reason"
PAYMENT_CHANNEL = "payment_channel"

FIELD_NAMES: tuple[str, ...] = (
    PAYER_NAME,
    PAYER_PHONE,
    PAYER_ACC_TYPE,
    CREDITED_PARTY_NAME,
    CREDITED_PARTY_ACC_NO,
    TRANSACTION_STATUS,
    BANK_ACC_NO,
    RECIPIENT_NAME,
    RECEIPT_NO,
    DATE,
    SETTLED_AMOUNT,
    DISCOUNT_AMOUNT,
    VAT_AMOUNT,
    TOTAL_AMOUNT,
    AMOUNT_IN_WORD,
    PAYMENT_MODE,
    PAYMENT_REASON,
    PAYMENT_CHANNEL,
)


def is_amount_field(field_name: str) -> bool:
    """Return True for fields holding a Decimal amount (``*amount``)."""
    return field_name.endswith("amount")


class ReceiptFields(BaseModel):
    """Structured telebirr receipt data.

    Every field is optional: a field the extractor did not find is None.
    """

    model_config = ConfigDict(populate_by_name=True)

    # Payer
    payer_name: str | None = Field(None, description="Name of the paying customer")
    payer_phone: str | None = Field(None, description="Payer telebirr number")
    payer_acc_type: str | None = Field(None, description="Payer account type")

    # Credited party
    credited_party_name: str | None = Field(None, description="Name of the credited party")
    credited_party_acc_no: str | None = Field(None, description="Credited party account number")
    bank_acc_no: str | None = Field(None, description="Destination bank account number")
    to: str | None = Field(None, description="Recipient name attached to the bank account")

    # Transaction
    transaction_status: str | None = Field(None, description="Transaction status")
    receipt_no: str | None = Field(None, alias="receiptNo", description="Receipt number")
    date: str | None = Field(None, description="Payment date as printed on the receipt")
    payment_mode: str | None = Field(None, description="Payment mode")
    payment_reason: str | None = Field(None, description="Payment reason")
    payment_channel: str | None = Field(None, description="Payment channel")

    # Amounts
    settled_amount: Decimal | None = Field(None, description="Settled amount")
    discount_amount: Decimal | None = Field(None, description="Discount amount")
    vat_amount: Decimal | None = Field(None, description="VAT amount")
    total_amount: Decimal | None = Field(None, description="Total paid amount")
    amount_in_word: str | None = Field(None, description="Total amount spelled out")

    @classmethod
    def from_fields(cls, fields: ExtractedFields) -> "ReceiptFields":
        """Build the typed view from an extracted mapping.

        Args:
            fields: Mapping produced by an extractor

        Returns:
            ReceiptFields with unknown keys ignored
        """
        known = {name: value for name, value in fields.items() if name in FIELD_NAMES}
        return cls.model_validate(known)

    def to_fields(self) -> dict[str, Any]:
        """Return the canonical mapping, omitting fields that were not found."""
        return self.model_dump(by_alias=True, exclude_none=True)
