import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from .errors import InvalidInputError
from .models import ComparisonResult, TermStats, VideoRecord, parse_count
from .youtube import YouTubeClient

logger = logging.getLogger(__name__)

MISSING_TERMS_MESSAGE = "Both term1 and term2 are required"


def extract_search_items(search_response: Dict[str, Any]) -> Tuple[int, List[Dict[str, str]]]:
    """
    Pull (totalResults, items) out of a search.list response.
    Items without a videoId (channels, playlists, broken entries) are dropped.
    """
    total = parse_count((search_response.get("pageInfo") or {}).get("totalResults"))

    items = []
    for item in search_response.get("items", []) or []:
        video_id = (item.get("id") or {}).get("videoId")
        if not video_id:
            continue
        snippet = item.get("snippet") or {}
        items.append({
            "video_id": video_id,
            "title": snippet.get("title") or "",
            "published_at": snippet.get("publishedAt") or "",
        })
    return total, items


def merge_statistics(search_items: List[Dict[str, str]], stats_response: Dict[str, Any]) -> List[VideoRecord]:
    # keep relevance order from search; ids the videos call didn't return are gone
    by_id = {}
    for item in stats_response.get("items", []) or []:
        if item.get("id"):
            by_id[item["id"]] = item

    videos = []
    for meta in search_items:
        item = by_id.get(meta["video_id"])
        if item is None:
            continue
        stats = item.get("statistics") or {}
        snippet = item.get("snippet") or {}
        videos.append(VideoRecord(
            video_id=meta["video_id"],
            title=snippet.get("title") or meta["title"],
            view_count=parse_count(stats.get("viewCount")),
            like_count=parse_count(stats.get("likeCount")),
            published_at=snippet.get("publishedAt") or meta["published_at"],
        ))
    return videos


class Comparator:
    def __init__(self, client: YouTubeClient, max_results: int = 50):
        self.client = client
        self.max_results = max_results

    async def term_stats(self, term: str) -> Tuple[int, TermStats]:
        """Search, then fetch statistics for the hits. Returns (totalResults, stats)."""
        search_response = await asyncio.to_thread(self.client.search, term, self.max_results)
        total, items = extract_search_items(search_response)

        if not items:
            return total, TermStats.empty()

        ids = [i["video_id"] for i in items]
        stats_response = await asyncio.to_thread(self.client.video_stats, ids)
        return total, TermStats.from_videos(merge_statistics(items, stats_response))

    async def compare(self, term1: Optional[str], term2: Optional[str]) -> ComparisonResult:
        if not term1 or not term2:
            raise InvalidInputError(MISSING_TERMS_MESSAGE)

        logger.info("Comparing %r vs %r", term1, term2)
        # gather propagates the first failure; nothing partial gets returned
        (total1, stats1), (total2, stats2) = await asyncio.gather(
            self.term_stats(term1),
            self.term_stats(term2),
        )

        return ComparisonResult(
            term1=term1,
            term2=term2,
            total_results1=total1,
            total_results2=total2,
            stats1=stats1,
            stats2=stats2,
        )
