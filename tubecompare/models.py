from typing import Any, List, Sequence

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class VideoRecord(_Model):
    video_id: str
    title: str = ""
    view_count: int = 0
    like_count: int = 0
    published_at: str = ""


class TermStats(_Model):
    total_views: int = 0
    total_likes: int = 0
    count: int = 0
    videos: List[VideoRecord] = []

    @classmethod
    def from_videos(cls, videos: Sequence[VideoRecord]) -> "TermStats":
        videos = list(videos)
        return cls(
            total_views=sum(v.view_count for v in videos),
            total_likes=sum(v.like_count for v in videos),
            count=len(videos),
            videos=videos,
        )

    @classmethod
    def empty(cls) -> "TermStats":
        return cls()


class ComparisonResult(_Model):
    term1: str
    term2: str
    total_results1: int
    total_results2: int
    stats1: TermStats
    stats2: TermStats


def parse_count(value: Any) -> int:
    """YouTube sends counters as strings; anything unusable counts as 0."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return 0
    return n if n > 0 else 0
