import datetime
from typing import List, Optional
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from ..models import ChannelConfig, Outcome, VideoItem

MAX_RESULTS = 50
WINDOW = datetime.timedelta(hours=24)
VIDEO_PARTS = "snippet,contentDetails,liveStreamingDetails"


def build_client(api_key: str):
    return build("youtube", "v3", developerKey=api_key, cache_discovery=False)


def window_start(now: datetime.datetime) -> str:
    """RFC 3339 UTC timestamp 24h before `now`, e.g. 2024-02-05T10:00:00Z"""
    if now.tzinfo is None:
        now = now.astimezone()
    start = now.astimezone(datetime.timezone.utc) - WINDOW
    return start.strftime("%Y-%m-%dT%H:%M:%SZ")


def resolve_channel_id(youtube, handle: str) -> Optional[str]:
    """Resolves a YouTube handle (e.g. @OpenAI) to its internal UC ID"""
    # forHandle requires the '@' prefix
    if not handle.startswith("@"):
        handle = f"@{handle}"
    response = youtube.channels().list(part="id", forHandle=handle).execute()
    items = response.get("items", [])
    if items:
        return items[0]["id"]
    return None


def to_video_item(raw: dict) -> VideoItem:
    snippet = raw.get("snippet", {})
    live = raw.get("liveStreamingDetails")
    return VideoItem(
        video_id=raw["id"],
        title=snippet.get("title", ""),
        description=snippet.get("description") or "",
        is_live_type=live is not None,
        actual_end_time=(live or {}).get("actualEndTime"),
    )


def search_channel(youtube, channel_id: str, published_after: str) -> List[str]:
    response = youtube.search().list(
        part="id",
        channelId=channel_id,
        maxResults=MAX_RESULTS,
        order="date",
        publishedAfter=published_after,
        type="video",
    ).execute()
    return [r["id"]["videoId"] for r in response.get("items", []) if r.get("id", {}).get("videoId")]


def fetch_details(youtube, video_ids: List[str]) -> List[VideoItem]:
    response = youtube.videos().list(part=VIDEO_PARTS, id=",".join(video_ids)).execute()
    return [to_video_item(v) for v in response.get("items", [])]


def fetch_channel(youtube, channel: ChannelConfig, now: datetime.datetime) -> Outcome:
    """Videos published by one channel in the 24h before `now`.

    Never raises: API and network errors come back as a failed Outcome so the
    caller can move on to the next channel.
    """
    try:
        channel_id = channel.channel_id
        if not channel_id and channel.handle:
            print(f"  - Resolving channel ID for {channel.handle}...")
            channel_id = resolve_channel_id(youtube, channel.handle)
            if not channel_id:
                return Outcome.failure(f"could not resolve handle {channel.handle}")

        print(f"  - Fetching updates from: {channel.name} (ID: {channel_id})...")
        video_ids = search_channel(youtube, channel_id, window_start(now))
        if not video_ids:
            return Outcome.success([])

        return Outcome.success(fetch_details(youtube, video_ids))
    except HttpError as e:
        print(f"YouTube API Error ({channel.name}): {e}")
        return Outcome.failure(e)
    except Exception as e:
        print(f"Error fetching channel {channel.name}: {e}")
        return Outcome.failure(e)


def fetch_channels(youtube, channels: List[ChannelConfig], now: datetime.datetime):
    """Yields (channel, Outcome) for every enabled channel, in config order."""
    for channel in channels:
        if not channel.enabled:
            continue
        yield channel, fetch_channel(youtube, channel, now)
