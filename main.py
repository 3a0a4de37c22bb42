import sys
import time
import schedule
from datetime import datetime

from src.config import Credentials, Settings, load_credentials, load_settings, load_channels
from src.models import Classification, RunSummary
from src.extract.youtube import build_client, fetch_channels, window_start
from src.transform.classify import classify_videos, combine
from src.load.notion import NotionLoader, build_included_blocks, build_excluded_blocks
from src.notify.mailer import send_completion_email
from src.trigger import ensure_schedule


def extract_and_classify(youtube, channels, now: datetime, summary: RunSummary) -> Classification:
    print("\n[Phase 1] Extraction & Classification")
    print(f"  - Target Date/Time Threshold: items published after {window_start(now)}")

    per_channel = []
    for channel, outcome in fetch_channels(youtube, channels, now):
        summary.channels_checked += 1
        if not outcome.ok:
            summary.channels_failed += 1
            summary.failed_channels.append(channel.name)
            continue
        result = classify_videos(outcome.value)
        print(f"    -> {len(result.included)} included, {len(result.excluded)} excluded")
        per_channel.append(result)

    return combine(per_channel)


def load_to_notion(loader, classification: Classification, day_title: str, summary: RunSummary) -> bool:
    """Appends the day's blocks. Returns False when the day page could not be resolved."""
    print("\n[Phase 2] Loading to Notion")
    page = loader.resolve_day_page(day_title)
    if not page.ok:
        print(f"  - Failed to resolve day page {day_title}: {page.error}. Aborting run.")
        return False
    summary.page_id = page.value
    print(f"  - Day page {day_title}: {page.value}")

    batches = [
        ("included", build_included_blocks(classification.included)),
        ("excluded", build_excluded_blocks(classification.excluded)),
    ]
    for label, blocks in batches:
        if not blocks:
            continue
        print(f"    - Appending {len(blocks)} {label} blocks...", end=" ")
        outcome = loader.append_blocks(page.value, blocks)
        print("[ok]" if outcome.ok else "[error]")
        if outcome.ok:
            summary.batches_appended += 1
        else:
            summary.batches_failed += 1
    return True


def print_summary(summary: RunSummary, dry_run: bool):
    print("\n=========================")
    print("--- Pipeline Summary ---")
    print("=========================")
    print(f"Channels checked: {summary.channels_checked}")
    print(f"Channels failed:  {summary.channels_failed}")
    if summary.failed_channels:
        print(f"  ({', '.join(summary.failed_channels)})")
    print(f"Included:         {summary.included}")
    print(f"Excluded:         {summary.excluded}")
    print(f"Page:             {summary.page_id}")
    print(f"Batches appended: {summary.batches_appended}")
    print(f"Batches failed:   {summary.batches_failed}")
    print(f"Email sent:       {summary.email_sent}")
    if summary.aborted:
        print("Run aborted before notification.")
    if dry_run:
        print("[DRY_RUN] Nothing was written.")
    print("=========================")


def run(now=None, settings=None, credentials=None, channels=None, youtube=None, loader=None) -> RunSummary:
    """One pass of the pipeline. External failures are reported in the summary, never raised."""
    now = now or datetime.now().astimezone()
    try:
        settings = settings or load_settings()
        credentials = credentials or load_credentials()
        if channels is None:
            channels = load_channels(settings.channels_config)
    except Exception as e:
        print(f"Error loading configuration: {e}")
        settings = settings or Settings()
        credentials = credentials or Credentials(notion_token="", database_id="")
        channels = channels or []

    summary = RunSummary(started_at=now)
    print(f"--- YouTube Notion Digest Started (DRY_RUN={settings.dry_run}) ---")

    classification = Classification()
    if youtube is None:
        try:
            youtube = build_client(settings.youtube_api_key)
        except Exception as e:
            print(f"Error building YouTube client: {e}")
    if youtube is not None:
        classification = extract_and_classify(youtube, channels, now, summary)
    summary.included = len(classification.included)
    summary.excluded = len(classification.excluded)
    print(f"  - Total: {summary.included} included, {summary.excluded} excluded")

    if classification.is_empty():
        print("No new items to process. Exiting.")
        print_summary(summary, settings.dry_run)
        return summary

    day_title = now.strftime("%Y-%m-%d")

    if settings.dry_run:
        print(f"\n[DRY_RUN] Would update Notion page {day_title}:")
        for v in classification.included:
            print(f"    - [included] {v.title[:40]}... {v.embed_url}")
        for v in classification.excluded:
            print(f"    - [excluded] {v.title[:40]}...")
        print_summary(summary, settings.dry_run)
        return summary

    if loader is None:
        loader = NotionLoader(credentials.notion_token, credentials.database_id)
    if not load_to_notion(loader, classification, day_title, summary):
        summary.aborted = True
        print_summary(summary, settings.dry_run)
        return summary

    print("\n[Phase 3] Notification")
    summary.email_sent = send_completion_email(settings.smtp).ok
    print_summary(summary, settings.dry_run)
    print("\n--- Pipeline Finished ---")
    return summary


def main():
    # Scheduled by serve(): an exception here would end the scheduler loop.
    try:
        run()
    except Exception as e:
        print(f"Error during run: {e}")


def install_trigger():
    settings = load_settings()
    job = ensure_schedule(main, at=settings.run_at)
    print(f"Scheduled daily run at {settings.run_at} (next: {job.next_run})")
    return job


def serve():
    install_trigger()
    print("Running scheduler... (Ctrl+C to stop)")
    while True:
        schedule.run_pending()
        time.sleep(60)


if __name__ == "__main__":
    if "--serve" in sys.argv[1:]:
        serve()
    else:
        main()
