"""Label vocabularies mapping receipt labels to canonical field names.

Receipts render labels in one of two ways:

- ``የክፍያ ቀን/Payment date`` in a single cell. The English half is matched by
  case-insensitive substring containment against ``ENGLISH_LABELS``.
- Amharic and English run together in one cell (``የክፍያ ቀን<br>Payment date``).
  The strict-normalized token is looked up exactly in ``BILINGUAL_LABELS``.

Both tables are read-only and shared by every extraction call.
"""

from types import MappingProxyType

from receipt_verifier.extraction import schema

# Checked in order, first match wins.
ENGLISH_LABELS = MappingProxyType(
    {
        "Receipt No": schema.RECEIPT_NO,
        "Payment date": schema.DATE,
        "Settled Amount": schema.SETTLED_AMOUNT,
        "Total Paid Amount": schema.TOTAL_AMOUNT,
        "Discount Amount": schema.DISCOUNT_AMOUNT,
        "Payer Name": schema.PAYER_NAME,
        "Payer telebirr no": schema.PAYER_PHONE,
        "Payer account type": schema.PAYER_ACC_TYPE,
        "Credited Party name": schema.CREDITED_PARTY_NAME,
        "Credited party account no": schema.CREDITED_PARTY_ACC_NO,
        "transaction status": schema.TRANSACTION_STATUS,
        "Payment Mode": schema.PAYMENT_MODE,
        "Payment channel": schema.PAYMENT_CHANNEL,
        "Payment Reason": schema.PAYMENT_REASON,
        "Total Amount in word": schema.AMOUNT_IN_WORD,
        "VAT": schema.VAT_AMOUNT,
    }
)

# Short keys that must match a whole word, not any label containing the letters
WHOLE_WORD_LABELS = frozenset({"VAT"})

BILINGUAL_LABELS = MappingProxyType(
    {
        "የከፋይስምpayername": schema.PAYER_NAME,
        "የከፋይቴሌብርቁ.payertelebirrno.": schema.PAYER_PHONE,
        "የከፋይአካውንትአይነትpayeraccounttype": schema.PAYER_ACC_TYPE,
        "የገንዘብተቀባይስምcreditedpartyname": schema.CREDITED_PARTY_NAME,
        "የገንዘብተቀባይቴሌብርቁ.creditedpartyaccountno": schema.CREDITED_PARTY_ACC_NO,
        "የክፍያውሁኔታtransactionstatus": schema.TRANSACTION_STATUS,
        "የባንክአካውንትቁጥርbankaccountnumber": schema.BANK_ACC_NO,
        "የክፍያቁጥርreceiptno.": schema.RECEIPT_NO,
        "የክፍያቀንpaymentdate": schema.DATE,
        "የተከፈለውመጠንsettledamount": schema.SETTLED_AMOUNT,
        "ቅናሽdiscountamount": schema.DISCOUNT_AMOUNT,
        "15%ቫትvat": schema.VAT_AMOUNT,
        "ጠቅላላየተክፈለtotalpaidamount": schema.TOTAL_AMOUNT,
        "የገንዘቡልክበፊደልtotalamountinword": schema.AMOUNT_IN_WORD,
        "የክፍያዘዴpaymentmode": schema.PAYMENT_MODE,
        "የክፍያምክንያትpaymentreason": schema.PAYMENT_REASON,
        "የክፍያመንገድpaymentchannel": schema.PAYMENT_CHANNEL,
    }
)

# Values assumed by the row scan when the receipt does not print them
DEFAULT_TRANSACTION_STATUS = "Completed"
DEFAULT_PAYMENT_MODE = "telebirr"
DEFAULT_PAYMENT_REASON = "Buy Package Mini APP"

DEFAULT_FIELDS = MappingProxyType(
    {
        schema.TRANSACTION_STATUS: DEFAULT_TRANSACTION_STATUS,
        schema.PAYMENT_MODE: DEFAULT_PAYMENT_MODE,
        schema.PAYMENT_REASON: DEFAULT_PAYMENT_REASON,
    }
)
