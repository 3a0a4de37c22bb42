import os
import yaml
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .models import ChannelConfig

CHANNELS_CONFIG = "config/channels.yaml"


class Credentials(BaseModel):
    notion_token: str
    database_id: str


class SmtpSettings(BaseModel):
    host: str = ""
    port: int = 587
    user: str = ""
    password: str = ""
    sender: str = ""
    recipient: str = ""


class Settings(BaseModel):
    youtube_api_key: str = ""
    channels_config: str = CHANNELS_CONFIG
    dry_run: bool = False
    run_at: str = "21:00"
    smtp: SmtpSettings = SmtpSettings()


def _flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).lower() == "true"


def _port(value: str, default: int = 587) -> int:
    try:
        return int(value)
    except ValueError:
        if value:
            print(f"WARNING: SMTP_PORT={value!r} is not a number, using {default}.")
        return default


def load_credentials() -> Credentials:
    # Not validated: an empty token surfaces later as a 401 from Notion.
    load_dotenv()
    return Credentials(
        notion_token=os.getenv("NOTION_TOKEN", ""),
        database_id=os.getenv("NOTION_DATABASE_ID", ""),
    )


def load_settings() -> Settings:
    load_dotenv()
    smtp_user = os.getenv("SMTP_USER", "")
    return Settings(
        youtube_api_key=os.getenv("YOUTUBE_API_KEY", ""),
        channels_config=os.getenv("CHANNELS_CONFIG", CHANNELS_CONFIG),
        dry_run=_flag("DRY_RUN"),
        run_at=os.getenv("RUN_AT", "21:00"),
        smtp=SmtpSettings(
            host=os.getenv("SMTP_HOST", ""),
            port=_port(os.getenv("SMTP_PORT", "")),
            user=smtp_user,
            password=os.getenv("SMTP_PASSWORD", ""),
            sender=os.getenv("NOTIFICATION_FROM", smtp_user),
            recipient=os.getenv("NOTIFICATION_EMAIL", ""),
        ),
    )


def load_channels(path: Optional[str] = None) -> List[ChannelConfig]:
    path = path or CHANNELS_CONFIG
    if not os.path.exists(path):
        print(f"WARNING: Channel config {path} not found. No channels to check.")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        print(f"Error reading channel config {path}: {e}")
        return []

    if not isinstance(config, dict):
        print(f"Error reading channel config {path}: expected a mapping with a 'channels' list")
        return []

    channels = []
    for entry in config.get("channels", []) or []:
        try:
            channels.append(ChannelConfig.model_validate(entry))
        except ValidationError as e:
            name = entry.get("name", entry) if isinstance(entry, dict) else entry
            print(f"Skipping {name}: {e}")
    return channels
