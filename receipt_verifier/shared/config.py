"""Shared configuration management for the receipt verifier.

Based on Pydantic Settings v2 best practices:
https://docs.pydantic.dev/latest/concepts/pydantic_settings/
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support.

    All settings can be overridden via environment variables with the prefix 'APP_'.
    Example: APP_EXTRACTION_STRATEGY=row_scan
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Service configuration
    service_name: str = Field(
        default="telebirr-receipt-verifier",
        description="Service identifier for metrics and logs",
    )
    service_version: str = Field(
        default="0.1.0",
        description="Service version",
    )

    # Extraction configuration
    extraction_strategy: Literal["row_scan", "cell_scan", "fallback"] = Field(
        default="fallback",
        description=(
            "Extraction strategy: row_scan (slash-separated labels), "
            "cell_scan (combined bilingual labels), fallback (row_scan, then cell_scan)"
        ),
    )
    fallback_required_fields: list[str] = Field(
        default=["receiptNo", "date", "settled_amount"],
        description="Fields whose absence after row_scan triggers the cell_scan fallback",
    )
    currency_unit: str = Field(
        default="Birr",
        description="Currency word stripped from amount cells before parsing",
    )
    details_section_title: str = Field(
        default="Transaction details",
        description="Row text introducing the receipt number/date/settled amount table",
    )
    total_amount_marker: str = Field(
        default="Total Paid Amount",
        description="Cell text marking the row whose third cell holds the total amount",
    )
    markup_encoding: str = Field(
        default="utf-8",
        description="Encoding used to decode receipt markup supplied as bytes",
    )

    # Receipt retrieval configuration
    receipt_base_url: str = Field(
        default="https://transactioninfo.ethiotelecom.et/receipt/",
        description="Base URL the receipt number is appended to",
    )
    receipt_timeout_seconds: float = Field(
        default=30.0,
        description="HTTP timeout for receipt retrieval",
        gt=0,
    )
    receipt_retry_attempts: int = Field(
        default=3,
        description="Attempts for transient transport failures during retrieval",
        ge=1,
    )


def get_settings() -> Settings:
    """Factory function to get settings instance.

    Returns:
        Configured Settings instance
    """
    return Settings()
