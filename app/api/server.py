"""HTTP boundary for the document classifier."""

import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, File, Request, Response, UploadFile, status
from fastapi.responses import PlainTextResponse

from app.config.settings import Settings
from app.logging.logger import Log
from app.processor.exceptions import (
    BackendFailureError,
    ClassificationError,
    IncompleteConversationError,
    IndexingFailedError,
    InvalidInputError,
    PollTimeoutError,
    RunFailedError,
)
from app.processor.models import UploadedDocument
from app.processor.processor import (
    Processor,
    build_processor,
    error_text,
    report_error,
)

ERROR_STATUS_CODES: dict[type[ClassificationError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    BackendFailureError: status.HTTP_502_BAD_GATEWAY,
    IndexingFailedError: status.HTTP_502_BAD_GATEWAY,
    RunFailedError: status.HTTP_502_BAD_GATEWAY,
    IncompleteConversationError: status.HTTP_502_BAD_GATEWAY,
    PollTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
}


def status_code_for(exc: ClassificationError) -> int:
    for error_type, code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(settings: Settings, processor: Processor | None = None) -> FastAPI:
    """Create the FastAPI app serving ``POST /api/classify`` and ``GET /health``."""
    if processor is None:
        processor = build_processor(settings)
    max_upload_bytes = settings.max_upload_size_mb * 1024 * 1024

    app = FastAPI(title="Insurance Document Classifier")
    app.state.processor = processor

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        started = time.monotonic()
        with Log.request_scope(request_id):
            response = await call_next(request)
            elapsed_ms = (time.monotonic() - started) * 1000
            Log.info(
                f"{request.method} {request.url.path} "
                f"-> {response.status_code} in {elapsed_ms:.0f}ms"
            )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "provider": settings.assistants_provider}

    @app.post("/api/classify", response_class=PlainTextResponse)
    def classify(
        file: UploadFile = File(..., description="PDF document to classify"),
    ) -> PlainTextResponse:
        # Sync handler: runs in the threadpool while the backend polls block.
        content = file.file.read(max_upload_bytes + 1)
        if len(content) > max_upload_bytes:
            Log.warning(
                f"Rejected upload '{file.filename}': "
                f"larger than {settings.max_upload_size_mb}MB"
            )
            return PlainTextResponse(
                error_text(f"File too large. Maximum size is {settings.max_upload_size_mb}MB"),
                status_code=413,
            )

        document = UploadedDocument(filename=file.filename or "upload.pdf", content=content)
        try:
            result = processor.classify(document)
        except ClassificationError as exc:
            return PlainTextResponse(report_error(exc), status_code=status_code_for(exc))
        return PlainTextResponse(result.label)

    return app
