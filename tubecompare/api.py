import logging
from typing import Any, Optional

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .archive import Archive
from .comparator import Comparator
from .config import Settings
from .errors import (
    InvalidInputError,
    NotFoundError,
    StorageError,
    TubeCompareError,
    UpstreamError,
)
from .youtube import DEFAULT_ERROR_MESSAGE, YouTubeClient

logger = logging.getLogger(__name__)


def _error(status: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message})


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[YouTubeClient] = None,
    archive: Optional[Archive] = None,
) -> FastAPI:
    """
    Wire the HTTP surface. Settings are read from the environment only when
    not passed in, so a missing API key fails here, before serving.
    """
    if settings is None:
        settings = Settings.from_env()

    comparator = Comparator(client or YouTubeClient(settings.youtube_api_key), settings.max_results)
    archive = archive or Archive(settings.data_dir)

    app = FastAPI(title="TubeCompare API", version="0.1")
    app.state.settings = settings
    app.state.comparator = comparator
    app.state.archive = archive

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError):
        return _error(400, exc.message)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(422, "Invalid request")

    @app.exception_handler(UpstreamError)
    async def upstream_failure(request: Request, exc: UpstreamError):
        logger.error("YouTube API error (%s, status=%s): %s", exc.kind, exc.status, exc.message)
        return _error(500, exc.message or DEFAULT_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def unexpected(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/compare")
    async def compare(term1: Optional[str] = None, term2: Optional[str] = None):
        try:
            result = await comparator.compare(term1, term2)
        except TubeCompareError:
            raise
        except Exception as e:
            # answered here so the response still passes through CORS
            logger.exception("Compare failed for %r vs %r", term1, term2)
            return _error(500, str(e) or "Internal server error")
        return result.to_json_dict()

    @app.post("/api/save-json")
    def save_json(data: Any = Body(...)):
        try:
            filename = archive.save(data)
        except StorageError:
            return _error(500, "Failed to save JSON")
        return {"filename": filename}

    @app.get("/api/load-json/{filename}")
    def load_json(filename: str):
        try:
            return archive.load(filename)
        except InvalidInputError:
            logger.warning("Rejected filename %r", filename)
            return _error(400, "Failed to load JSON")
        except NotFoundError:
            logger.warning("No saved comparison named %r", filename)
            return _error(404, "Failed to load JSON")
        except StorageError:
            logger.exception("Failed to load %r", filename)
            return _error(500, "Failed to load JSON")

    @app.get("/api/list-json")
    def list_json():
        try:
            return archive.list()
        except StorageError:
            logger.exception("Failed to list %s", archive.data_dir)
            return _error(500, "Failed to list JSON files")

    return app
