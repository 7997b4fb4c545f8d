"""FastAPI application exposing the merge-and-compress pipeline."""

from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, File, Form, Query, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.responses import HTMLResponse, JSONResponse, Response

from pdfcombine import (
    CompressionFailedError,
    ExternalCompressor,
    GhostscriptCompressor,
    InputDocument,
    InvalidDocumentError,
    OutputArtifact,
    PdfCombineError,
    Settings,
    ValidationError,
    estimate_output_size,
    load_settings,
    parse_compression_level,
    run_pipeline,
)
from pdfcombine.core.utils import get_logger
from pdfcombine.pipeline import check_file_count, check_file_size

app = FastAPI(title="pdfcombine API", version="0.1.0")
DOCS_PREFIX = "/api"

LOGGER = get_logger("pdfcombine.backend", load_settings().log_level)

_STATUS_CODES: dict[type[PdfCombineError], int] = {
    ValidationError: 400,
    InvalidDocumentError: 400,
    CompressionFailedError: 500,
}


def get_settings() -> Settings:
    """Settings for the current request."""

    try:
        return load_settings()
    except RuntimeError as exc:
        raise PdfCombineError("Server configuration is invalid.", details=str(exc)) from exc


def get_compressor(settings: Settings = Depends(get_settings)) -> ExternalCompressor:
    """External compressor used by the current request."""

    return GhostscriptCompressor.from_settings(settings)


def _error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    payload: dict[str, str] = {"error": error}
    if details:
        payload["details"] = details
    return JSONResponse(payload, status_code=status_code)


@app.exception_handler(PdfCombineError)
async def handle_pipeline_error(_: Request, exc: PdfCombineError) -> JSONResponse:
    status_code = _STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        LOGGER.error("PDF processing error: %s (%s)", exc.message, exc.details)
    else:
        LOGGER.info("Rejected request: %s (%s)", exc.message, exc.details)
    return _error_response(status_code, exc.message, exc.details)


def _summarize_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    details = _summarize_validation_errors(exc)
    LOGGER.info("Rejected malformed request: %s", details)
    return _error_response(400, "Invalid request.", details)


@app.exception_handler(Exception)
async def handle_unexpected_error(_: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unexpected error while handling request")
    return _error_response(500, "Failed to process PDFs", str(exc) or type(exc).__name__)


def _safe_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    candidate = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return candidate or None


def _describe_upload(upload: UploadFile, index: int) -> str:
    filename = _safe_filename(upload.filename)
    if filename:
        return f"'{filename}' (file {index})"
    return f"file {index}"


def _artifact_headers(artifact: OutputArtifact) -> dict[str, str]:
    return {
        "Content-Disposition": f'attachment; filename="{artifact.filename}"',
        "Content-Length": str(artifact.content_length),
        "X-Compression-Method": artifact.method.value,
        "X-Compression-Level": str(int(artifact.level)),
        "X-Page-Count": str(artifact.page_count),
    }


@app.get("/health", response_class=JSONResponse)
async def health(compressor: ExternalCompressor = Depends(get_compressor)) -> dict[str, object]:
    """Lightweight health endpoint for uptime checks."""
    available = await run_in_threadpool(compressor.probe)
    return {"status": "ok", "ghostscript": available}


@app.get(
    f"{DOCS_PREFIX}/openapi.json",
    include_in_schema=False,
    name="prefixed_openapi",
)
async def prefixed_openapi() -> JSONResponse:
    """Expose the OpenAPI schema under the gateway's ``/api`` prefix."""

    return JSONResponse(app.openapi())


@app.get(f"{DOCS_PREFIX}/docs", include_in_schema=False)
async def prefixed_swagger_ui(request: Request) -> HTMLResponse:
    """Serve Swagger UI from the same ``/api`` prefix used by the gateway."""

    return get_swagger_ui_html(
        openapi_url=str(request.url_for("prefixed_openapi")),
        title=f"{app.title} - Swagger UI",
    )


@app.post(
    "/merge",
    response_class=Response,
    summary="Merge PDFs and optionally compress the result",
    response_description="The merged PDF document.",
)
async def merge_documents_endpoint(
    files: List[UploadFile] | None = File(None, description="PDF files to merge, in order."),
    compression_level: str | None = Form(
        None,
        alias="compressionLevel",
        description="0 for none, 1 for medium, 2 for high compression.",
    ),
    settings: Settings = Depends(get_settings),
    compressor: ExternalCompressor = Depends(get_compressor),
) -> Response:
    """Merge the uploaded PDFs in upload order.

    Count and size limits are checked before any upload is read when the
    multipart parser reports sizes. The pipeline itself runs
    on the thread pool so a slow Ghostscript call only holds up its own
    request. Temporary files never outlive the request.
    """

    level = parse_compression_level(compression_level)
    uploads = list(files or [])
    check_file_count(len(uploads), settings)
    for index, upload in enumerate(uploads, start=1):
        if upload.size is not None:
            check_file_size(upload.size, _describe_upload(upload, index), settings)

    try:
        documents = [
            InputDocument(data=await upload.read(), filename=_safe_filename(upload.filename))
            for upload in uploads
        ]
        artifact = await run_in_threadpool(
            run_pipeline,
            documents,
            level,
            compressor=compressor,
            settings=settings,
        )
    except PdfCombineError:
        raise
    except Exception as exc:
        LOGGER.exception("Unexpected error while processing PDFs")
        return _error_response(500, "Failed to process PDFs", str(exc) or type(exc).__name__)

    return Response(
        content=artifact.data,
        media_type="application/pdf",
        headers=_artifact_headers(artifact),
    )


@app.get("/estimate", response_class=JSONResponse, summary="Estimate compressed output size")
async def estimate_endpoint(
    total_bytes: int = Query(..., alias="totalBytes", ge=0),
    compression_level: str | None = Query(None, alias="compressionLevel"),
) -> dict[str, object]:
    """Rough output size for the selected files; the real size may differ."""

    estimate = estimate_output_size(total_bytes, parse_compression_level(compression_level))
    return {
        "originalSize": estimate.original_size,
        "estimatedSize": estimate.estimated_size,
        "reductionPercent": round(estimate.reduction_percent, 1),
        "compressionLevel": int(estimate.level),
    }


__all__ = ["app", "get_compressor", "get_settings"]
