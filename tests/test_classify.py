import pytest

from src.models import Classification, ClassifiedVideo, VideoItem
from src.transform.classify import classify_video, classify_videos, combine, is_included


def finished_live(description):
    return VideoItem(
        video_id="live1",
        title="Premiere",
        description=description,
        is_live_type=True,
        actual_end_time="2024-05-02T10:00:00Z",
    )


@pytest.mark.parametrize("description", ["", "live stream", "VOCAL", None])
def test_ordinary_upload_is_always_included(description):
    item = VideoItem(video_id="v", title="t", description=description or "")
    assert is_included(item)


def test_live_without_end_time_is_excluded():
    item = VideoItem(video_id="v", title="t", description="vocal cover", is_live_type=True)
    assert not is_included(item)


@pytest.mark.parametrize(
    "description, expected",
    [
        ("great vocal cover", True),
        ("Great VOCAL Cover", True),
        ("ボーカル担当: someone", True),
        ("unvocalized", True),  # substring, not whole word
        ("karaoke night", False),
        ("", False),
    ],
)
def test_finished_live_needs_vocal_keyword(description, expected):
    assert is_included(finished_live(description)) is expected


def test_classify_video_keeps_id_and_title():
    classified = classify_video(VideoItem(video_id="abc", title="T1"))
    assert classified == ClassifiedVideo(video_id="abc", title="T1", verdict="included")
    assert classified.embed_url == "https://www.youtube.com/embed/abc?rel=0&modestbranding=1"


def test_upload_and_vocal_premiere_are_both_included():
    items = [
        VideoItem(video_id="abc", title="T1"),
        finished_live("great vocal cover"),
    ]

    result = classify_videos(items)

    assert [v.title for v in result.included] == ["T1", "Premiere"]
    assert result.excluded == ()


def test_currently_live_item_is_excluded_only():
    result = classify_videos([VideoItem(video_id="x", title="On air", is_live_type=True)])

    assert result.included == ()
    assert [v.title for v in result.excluded] == ["On air"]


def test_combine_preserves_channel_order():
    first = classify_videos([VideoItem(video_id="a", title="A"), VideoItem(video_id="b", title="B", is_live_type=True)])
    second = classify_videos([VideoItem(video_id="c", title="C")])

    result = combine([first, second])

    assert [v.video_id for v in result.included] == ["a", "c"]
    assert [v.video_id for v in result.excluded] == ["b"]


def test_combine_of_nothing_is_empty():
    result = combine([])
    assert result == Classification()
    assert result.is_empty()
