"""
Pytest configuration and fixtures for tubecompare tests.
"""

from typing import Dict, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest

from tubecompare.archive import Archive
from tubecompare.config import Settings
from tubecompare.youtube import YouTubeClient

# video_id -> (title, viewCount, likeCount); counts are strings like the real API
Catalog = Dict[str, Tuple[str, Optional[str], Optional[str]]]


def search_response(video_ids: List[str], catalog: Catalog, total: Optional[int] = None) -> dict:
    return {
        "kind": "youtube#searchListResponse",
        "pageInfo": {"totalResults": len(video_ids) if total is None else total, "resultsPerPage": 50},
        "items": [
            {
                "id": {"kind": "youtube#video", "videoId": vid},
                "snippet": {"title": catalog[vid][0], "publishedAt": "2023-01-01T00:00:00Z"},
            }
            for vid in video_ids
        ],
    }


def videos_response(video_ids: List[str], catalog: Catalog) -> dict:
    items = []
    for vid in video_ids:
        if vid not in catalog:
            continue
        title, views, likes = catalog[vid]
        statistics = {}
        if views is not None:
            statistics["viewCount"] = views
        if likes is not None:
            statistics["likeCount"] = likes
        items.append({
            "id": vid,
            "snippet": {"title": title, "publishedAt": "2023-01-01T00:00:00Z"},
            "statistics": statistics,
        })
    return {"kind": "youtube#videoListResponse", "items": items}


def make_service(searches: Dict[str, dict], catalog: Catalog) -> MagicMock:
    """
    Mock of the googleapiclient resource chain:
    service.search().list(**kw).execute() / service.videos().list(**kw).execute()
    """
    service = MagicMock()

    def search_list(**kwargs):
        request = MagicMock()
        request.execute.return_value = searches[kwargs["q"]]
        return request

    def videos_list(**kwargs):
        request = MagicMock()
        request.execute.return_value = videos_response(kwargs["id"].split(","), catalog)
        return request

    service.search.return_value.list.side_effect = search_list
    service.videos.return_value.list.side_effect = videos_list
    return service


@pytest.fixture
def catalog() -> Catalog:
    return {
        "cat1": ("Funny cats", "100", "10"),
        "cat2": ("Cats vs cucumbers", "200", "20"),
        "cat3": ("Cat compilation", "300", "30"),
    }


@pytest.fixture
def cats_and_dogs_service(catalog):
    searches = {
        "cats": search_response(["cat1", "cat2", "cat3"], catalog, total=1000000),
        "dogs": search_response([], catalog, total=0),
    }
    return make_service(searches, catalog)


@pytest.fixture
def mock_settings(tmp_path):
    return Settings(youtube_api_key="test_api_key", data_dir=tmp_path / "data")


@pytest.fixture
def archive(tmp_path):
    return Archive(tmp_path / "data")


@pytest.fixture
def client_for():
    def _client(service):
        return YouTubeClient("test_api_key", service_factory=lambda: service)
    return _client
