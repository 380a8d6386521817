"""Receipt retrieval from the telebirr transaction-info site.

Fetches the raw receipt HTML given a receipt number or a full URL.
Transport failures are retried; HTTP error statuses are not.

Based on HTTPX documentation:
https://www.python-httpx.org/
"""

import logging

import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from receipt_verifier.shared.config import Settings

logger = logging.getLogger(__name__)


class ReceiptRetrievalError(RuntimeError):
    """Raised when a receipt cannot be retrieved.

    Attributes:
        status_code: HTTP status of the response, if one was received
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ReceiptLoader:
    """HTTP client returning receipt markup for a receipt number or URL."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None) -> None:
        """Initialize receipt loader.

        Args:
            settings: Application settings
            client: Preconfigured HTTP client (a new one is created if omitted)
        """
        self.settings = settings
        self._client = client or httpx.Client(
            timeout=settings.receipt_timeout_seconds, follow_redirects=True
        )

    def build_url(self, receipt_no: str | None = None, url: str | None = None) -> str:
        """Resolve the address to fetch.

        Args:
            receipt_no: Receipt number appended to the configured base URL
            url: Full receipt URL, used when no receipt number is given

        Returns:
            Receipt URL

        Raises:
            ReceiptRetrievalError: If neither argument is provided
        """
        if receipt_no:
            return f"{self.settings.receipt_base_url}{receipt_no}"
        if url:
            return url
        raise ReceiptRetrievalError("either receipt number or full URL must be provided")

    def load(self, receipt_no: str | None = None, url: str | None = None) -> str:
        """Fetch receipt markup.

        Args:
            receipt_no: Receipt number (takes precedence over url)
            url: Full receipt URL

        Returns:
            Raw receipt HTML

        Raises:
            ReceiptRetrievalError: On missing arguments, transport failure
                or a non-200 response
        """
        target = self.build_url(receipt_no, url)

        try:
            response = self._get_with_retry(target)
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch receipt from {target}: {e}")
            raise ReceiptRetrievalError(f"failed to fetch receipt: {e}") from e

        if response.status_code != httpx.codes.OK:
            logger.warning(f"Receipt fetch returned status {response.status_code} for {target}")
            raise ReceiptRetrievalError(
                f"failed to fetch receipt: status code {response.status_code}",
                status_code=response.status_code,
            )

        return response.text

    def _get_with_retry(self, target: str) -> httpx.Response:
        """GET with retry logic for transient transport errors.

        Raises:
            httpx.HTTPError: After all retry attempts exhausted
        """
        retrying = Retrying(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_exponential_jitter(initial=0.5, max=10),
            stop=stop_after_attempt(self.settings.receipt_retry_attempts),
            reraise=True,
        )
        return retrying(self._client.get, target)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> "ReceiptLoader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
