from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from src.config import Credentials, Settings
from src.models import ChannelConfig

JST = timezone(timedelta(hours=9))


def make_video(video_id, title="Title", description="", live=None):
    """Builds a videos.list item; `live` is the liveStreamingDetails dict or None."""
    raw = {
        "id": video_id,
        "snippet": {"title": title, "description": description},
        "contentDetails": {"duration": "PT4M"},
    }
    if live is not None:
        raw["liveStreamingDetails"] = live
    return raw


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = str(payload)
    return response


@pytest.fixture
def now():
    return datetime(2024, 5, 2, 21, 0, 0, tzinfo=JST)


@pytest.fixture
def channel():
    return ChannelConfig(name="Test Channel", channel_id="UCtest")


@pytest.fixture
def settings():
    return Settings(youtube_api_key="key", dry_run=False)


@pytest.fixture
def credentials():
    return Credentials(notion_token="secret_token", database_id="db-id")


@pytest.fixture
def youtube():
    """A YouTube client whose search and videos calls return nothing until configured."""
    client = MagicMock()
    client.search.return_value.list.return_value.execute.return_value = {"items": []}
    client.videos.return_value.list.return_value.execute.return_value = {"items": []}
    return client


def serve_videos(client, videos):
    client.search.return_value.list.return_value.execute.return_value = {
        "items": [{"id": {"kind": "youtube#video", "videoId": v["id"]}} for v in videos]
    }
    client.videos.return_value.list.return_value.execute.return_value = {"items": videos}
