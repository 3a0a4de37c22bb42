from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Generic, List, Optional, Literal, Tuple, TypeVar
from datetime import datetime

T = TypeVar("T")

EMBED_URL = "https://www.youtube.com/embed/{video_id}?rel=0&modestbranding=1"


class ChannelConfig(BaseModel):
    name: str
    channel_id: Optional[str] = None
    handle: Optional[str] = Field(None, description="e.g. @channel, resolved to a UC id at fetch time")
    enabled: bool = True

    @model_validator(mode="after")
    def _needs_identifier(self):
        if not self.channel_id and not self.handle:
            raise ValueError(f"channel {self.name!r} needs a channel_id or a handle")
        return self


class VideoItem(BaseModel):
    video_id: str
    title: str
    description: str = ""
    # True when videos.list returned liveStreamingDetails (live, scheduled or premiere)
    is_live_type: bool = False
    actual_end_time: Optional[str] = None


class ClassifiedVideo(BaseModel):
    model_config = ConfigDict(frozen=True)

    video_id: str
    title: str
    verdict: Literal["included", "excluded"]

    @property
    def embed_url(self) -> str:
        return EMBED_URL.format(video_id=self.video_id)


class Classification(BaseModel):
    """Included/excluded partition of one run, in channel then API order."""
    model_config = ConfigDict(frozen=True)

    included: Tuple[ClassifiedVideo, ...] = ()
    excluded: Tuple[ClassifiedVideo, ...] = ()

    def combine(self, other: "Classification") -> "Classification":
        return Classification(
            included=self.included + other.included,
            excluded=self.excluded + other.excluded,
        )

    def is_empty(self) -> bool:
        return not self.included and not self.excluded


class ContentBlock(BaseModel):
    kind: Literal["embed", "heading_2", "bulleted_list_item"]
    text: str

    def to_notion(self) -> dict:
        if self.kind == "embed":
            return {"object": "block", "type": "embed", "embed": {"url": self.text}}
        return {
            "object": "block",
            "type": self.kind,
            self.kind: {"rich_text": [{"type": "text", "text": {"content": self.text[:2000]}}]},
        }


class Outcome(BaseModel, Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value=None):
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, cause):
        return cls(ok=False, error=str(cause))


class RunSummary(BaseModel):
    started_at: datetime
    channels_checked: int = 0
    channels_failed: int = 0
    included: int = 0
    excluded: int = 0
    batches_appended: int = 0
    batches_failed: int = 0
    page_id: Optional[str] = None
    email_sent: bool = False
    aborted: bool = False
    failed_channels: List[str] = []
