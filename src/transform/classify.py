from functools import reduce
from typing import Iterable, List
from ..models import Classification, ClassifiedVideo, VideoItem

# Matched as lower-cased substrings of the description.
VOCAL_KEYWORDS = ("vocal", "ボーカル")


def is_included(item: VideoItem) -> bool:
    # Ordinary upload
    if not item.is_live_type:
        return True
    # Live or scheduled, not finished yet
    if not item.actual_end_time:
        return False
    # Finished premiere / live archive: only vocal content
    description = (item.description or "").lower()
    return any(keyword in description for keyword in VOCAL_KEYWORDS)


def classify_video(item: VideoItem) -> ClassifiedVideo:
    return ClassifiedVideo(
        video_id=item.video_id,
        title=item.title,
        verdict="included" if is_included(item) else "excluded",
    )


def classify_videos(items: List[VideoItem]) -> Classification:
    classified = [classify_video(i) for i in items]
    return Classification(
        included=tuple(c for c in classified if c.verdict == "included"),
        excluded=tuple(c for c in classified if c.verdict == "excluded"),
    )


def combine(classifications: Iterable[Classification]) -> Classification:
    """Folds per-channel partitions into one, preserving channel order."""
    return reduce(Classification.combine, classifications, Classification())
