import logging
from typing import Any, Callable, Dict, List, Optional

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from .errors import UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "YouTube API error"


def _http_error_message(e: HttpError) -> str:
    # HttpError.reason is the API's error.message when the body is JSON,
    # the HTTP reason phrase otherwise
    return getattr(e, "reason", None) or DEFAULT_ERROR_MESSAGE


class YouTubeClient:
    """
    Thin wrapper over the YouTube Data API v3 search and videos endpoints.

    A new service object is built for every call: the httplib2 transport
    behind google-api-python-client can't be shared between threads, and
    both term pipelines run in worker threads at the same time.
    """

    def __init__(self, api_key: str, service_factory: Optional[Callable[[], Any]] = None):
        self.api_key = api_key
        self._service_factory = service_factory

    def _service(self):
        if self._service_factory is not None:
            return self._service_factory()
        return build("youtube", "v3", developerKey=self.api_key, cache_discovery=False)

    def _execute(self, request) -> Dict[str, Any]:
        try:
            response = request.execute()
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            raise UpstreamError(_http_error_message(e), UpstreamError.HTTP_STATUS, int(status) if status else None) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            raise UpstreamError(f"{DEFAULT_ERROR_MESSAGE}: {e}", UpstreamError.TRANSPORT) from e

        response = response or {}
        error = response.get("error")
        if error is not None:
            message = error.get("message") if isinstance(error, dict) else str(error)
            code = error.get("code") if isinstance(error, dict) else None
            raise UpstreamError(message or DEFAULT_ERROR_MESSAGE, UpstreamError.API_ERROR, code)
        return response

    def search(self, term: str, max_results: int = 50) -> Dict[str, Any]:
        logger.debug("search q=%r maxResults=%d", term, max_results)
        youtube = self._service()
        request = youtube.search().list(
            part="id,snippet",
            q=term,
            type="video",
            maxResults=max_results,
            order="relevance",
        )
        return self._execute(request)

    def video_stats(self, video_ids: List[str]) -> Dict[str, Any]:
        logger.debug("videos.list for %d ids", len(video_ids))
        youtube = self._service()
        request = youtube.videos().list(
            part="statistics,snippet",
            id=",".join(video_ids),
        )
        return self._execute(request)
