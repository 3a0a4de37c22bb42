import requests
from typing import Iterable, List
from ..models import ClassifiedVideo, ContentBlock, Outcome

EXCLUDED_HEADING = "除外リスト"
TITLE_PROPERTY = "Name"
DATE_PROPERTY = "日付"


def build_included_blocks(videos: Iterable[ClassifiedVideo]) -> List[ContentBlock]:
    return [ContentBlock(kind="embed", text=v.embed_url) for v in videos]


def build_excluded_blocks(videos: Iterable[ClassifiedVideo]) -> List[ContentBlock]:
    bullets = [ContentBlock(kind="bulleted_list_item", text=v.title) for v in videos]
    if not bullets:
        return []
    return [ContentBlock(kind="heading_2", text=EXCLUDED_HEADING)] + bullets


class NotionLoader:
    def __init__(self, token: str, database_id: str):
        self.database_id = self._format_uuid(database_id)
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": "2022-06-28",
            "Content-Type": "application/json"
        }
        self.base_url = "https://api.notion.com/v1"

    def _format_uuid(self, uuid_str: str) -> str:
        if len(uuid_str) == 32 and "-" not in uuid_str:
            return f"{uuid_str[:8]}-{uuid_str[8:12]}-{uuid_str[12:16]}-{uuid_str[16:20]}-{uuid_str[20:]}"
        return uuid_str

    def find_day_page(self, day_title: str) -> Outcome:
        """Outcome with the first page titled `day_title`, or None when there is none."""
        url = f"{self.base_url}/databases/{self.database_id}/query"
        payload = {
            "filter": {
                "property": TITLE_PROPERTY,
                "title": {
                    "equals": day_title
                }
            }
        }
        try:
            response = requests.post(url, headers=self.headers, json=payload, timeout=30)
            if response.status_code != 200:
                print(f"Error finding page: {response.status_code} {response.text}")
                return Outcome.failure(f"query returned {response.status_code}")

            results = response.json().get("results", [])
            if results:
                return Outcome.success(results[0]["id"])
            return Outcome.success(None)
        except Exception as e:
            print(f"Error querying Notion: {e}")
            return Outcome.failure(e)

    def create_day_page(self, day_title: str) -> Outcome:
        properties = {
            TITLE_PROPERTY: {"title": [{"text": {"content": day_title}}]},
            DATE_PROPERTY: {"date": {"start": day_title}},
        }
        payload = {
            "parent": {"database_id": self.database_id},
            "properties": properties
        }
        try:
            resp = requests.post(f"{self.base_url}/pages", headers=self.headers, json=payload, timeout=30)
            if resp.status_code in (200, 201):
                return Outcome.success(resp.json()["id"])
            print(f"Error creating Notion page ({resp.status_code}): {resp.text}")
            return Outcome.failure(f"create returned {resp.status_code}")
        except Exception as e:
            print(f"Error creating Notion page ({day_title}): {e}")
            return Outcome.failure(e)

    def resolve_day_page(self, day_title: str) -> Outcome:
        """Finds the page for `day_title`, creating it when the lookup comes back empty or fails."""
        found = self.find_day_page(day_title)
        if found.ok and found.value:
            return found
        if not found.ok:
            print(f"  - Lookup failed ({found.error}), creating page for {day_title}")
        return self.create_day_page(day_title)

    def append_blocks(self, page_id: str, blocks: List[ContentBlock]) -> Outcome:
        url = f"{self.base_url}/blocks/{page_id}/children"
        payload = {"children": [b.to_notion() for b in blocks]}
        try:
            resp = requests.patch(url, headers=self.headers, json=payload, timeout=30)
            if resp.status_code == 200:
                return Outcome.success(len(blocks))
            print(f"Error appending blocks ({resp.status_code}): {resp.text}")
            return Outcome.failure(f"append returned {resp.status_code}")
        except Exception as e:
            print(f"Error appending blocks to {page_id}: {e}")
            return Outcome.failure(e)
