"""FastAPI application for receipt extraction and verification.

Provides:
- Health and readiness checks for Kubernetes
- Field extraction from submitted receipt HTML
- Verification of a fetched or submitted receipt against expected values
- Prometheus metrics for monitoring

Based on FastAPI best practices:
https://fastapi.tiangolo.com/
"""

import logging
import time

from fastapi import FastAPI, HTTPException, Request, Response, status
from pydantic import BaseModel, Field

from receipt_verifier.api import metrics
from receipt_verifier.extraction.base import MalformedMarkupError
from receipt_verifier.extraction.factory import create_extractor
from receipt_verifier.extraction.schema import ExtractedFields, ReceiptFields
from receipt_verifier.loader.client import ReceiptLoader, ReceiptRetrievalError
from receipt_verifier.shared.config import get_settings
from receipt_verifier.verification.receipt import ReceiptVerifier

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Telebirr Receipt Verifier",
    description="Extracts transaction fields from telebirr receipts and verifies them",
    version=settings.service_version,
)

extractor = create_extractor(settings)
receipt_loader = ReceiptLoader(settings)


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Middleware to collect request metrics.

    Tracks:
    - Request count by method, endpoint, and status
    - Request duration by method and endpoint
    """
    # Skip metrics for /metrics endpoint itself
    if request.url.path == "/metrics":
        return await call_next(request)

    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time

    metrics.http_requests_total.labels(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code,
    ).inc()

    metrics.http_request_duration_seconds.labels(
        method=request.method,
        endpoint=request.url.path,
    ).observe(duration)

    return response


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    service: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool


class ExtractRequest(BaseModel):
    """Receipt extraction request."""

    html: str = Field(..., description="Raw receipt HTML")


class ExtractResponse(BaseModel):
    """Receipt extraction response."""

    strategy: str
    fields: ReceiptFields


class VerifyRequest(BaseModel):
    """Receipt verification request.

    Exactly one source is used, in order of precedence: html, receipt_no, url.
    """

    receipt_no: str | None = Field(None, description="Receipt number to fetch")
    url: str | None = Field(None, description="Full receipt URL to fetch")
    html: str | None = Field(None, description="Raw receipt HTML (skips fetching)")
    expected: dict[str, str | int | float] = Field(
        default_factory=dict, description="Expected field values"
    )
    exclude: list[str] = Field(
        default_factory=list, description="Expected fields to skip when checking all fields"
    )
    only: list[str] | None = Field(
        None, description="Check only these fields instead of all expected fields"
    )


class VerifyResponse(BaseModel):
    """Receipt verification response."""

    verified: bool
    fields: ReceiptFields


def _extract(markup: str) -> ExtractedFields:
    """Run the configured extractor, recording metrics.

    Raises:
        HTTPException: 422 if the markup cannot be parsed
    """
    start = time.time()
    try:
        fields = extractor.extract(markup)
    except MalformedMarkupError as e:
        metrics.receipt_extractions_total.labels(
            strategy=extractor.strategy_name, status="malformed"
        ).inc()
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Malformed receipt markup: {e}",
        ) from e
    metrics.receipt_extraction_duration_seconds.observe(time.time() - start)
    metrics.receipt_extractions_total.labels(
        strategy=extractor.strategy_name, status="success"
    ).inc()
    return fields


def _fetch(receipt_no: str | None, url: str | None) -> str:
    """Fetch receipt markup, recording metrics.

    Raises:
        HTTPException: 502 if the receipt cannot be retrieved
    """
    try:
        markup = receipt_loader.load(receipt_no=receipt_no, url=url)
    except ReceiptRetrievalError as e:
        metrics.receipt_fetch_total.labels(status="failed").inc()
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e)) from e
    metrics.receipt_fetch_total.labels(status="success").inc()
    return markup


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check() -> HealthResponse:
    """Health check endpoint for liveness probe.

    Returns:
        Health status information
    """
    return HealthResponse(
        status="healthy", version=settings.service_version, service=settings.service_name
    )


@app.get("/ready", response_model=ReadinessResponse, tags=["Health"])
def readiness_check() -> ReadinessResponse:
    """Readiness check endpoint for Kubernetes readiness probe.

    Returns:
        Readiness status
    """
    return ReadinessResponse(ready=True)


@app.get("/metrics", tags=["Monitoring"])
def get_metrics() -> Response:
    """Prometheus metrics endpoint.

    Returns:
        Prometheus metrics in text format
    """
    metrics_data, content_type = metrics.get_metrics()
    return Response(content=metrics_data, media_type=content_type)


@app.post("/api/v1/receipts/extract", response_model=ExtractResponse, tags=["Receipts"])
def extract_receipt(request: ExtractRequest) -> ExtractResponse:
    """Extract structured fields from receipt HTML.

    ## Error Handling

    - Returns 422 if the markup cannot be parsed
    - An unrecognized document is not an error: its fields come back empty

    Args:
        request: Receipt HTML

    Returns:
        Strategy used and the extracted fields
    """
    fields = _extract(request.html)
    return ExtractResponse(
        strategy=extractor.strategy_name, fields=ReceiptFields.from_fields(fields)
    )


@app.post("/api/v1/receipts/verify", response_model=VerifyResponse, tags=["Receipts"])
def verify_receipt(request: VerifyRequest) -> VerifyResponse:
    """Verify a receipt against expected field values.

    The receipt is taken from `html` when given, otherwise fetched by
    `receipt_no` or `url`. With `only`, just those fields are compared;
    otherwise every expected field except `exclude` is compared.

    ## Error Handling

    - Returns 400 if no receipt source is provided
    - Returns 502 if the receipt cannot be fetched
    - Returns 422 if the markup cannot be parsed

    Args:
        request: Receipt source, expected values and field selection

    Returns:
        Verification outcome and the extracted fields
    """
    if request.html is not None:
        markup = request.html
    elif request.receipt_no or request.url:
        markup = _fetch(request.receipt_no, request.url)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide one of html, receipt_no or url",
        )

    fields = _extract(markup)
    verifier = ReceiptVerifier(fields, request.expected)
    if request.only is not None:
        verified = verifier.verify_only(request.only)
    else:
        verified = verifier.verify_all(request.exclude)

    metrics.receipt_verifications_total.labels(
        result="verified" if verified else "rejected"
    ).inc()
    logger.info(f"Receipt verification {'succeeded' if verified else 'failed'}")

    return VerifyResponse(verified=verified, fields=ReceiptFields.from_fields(fields))
