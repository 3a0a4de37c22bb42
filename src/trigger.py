import schedule

JOB_TAG = "youtube-notion-digest"


def ensure_schedule(job, at: str = "21:00", tag: str = JOB_TAG, scheduler=None):
    """Installs `job` to fire once a day at `at` (local time).

    Any job already carrying `tag` is removed first, so calling this again
    with a different time replaces the trigger instead of adding another.
    """
    if scheduler is None:
        scheduler = schedule.default_scheduler
    scheduler.clear(tag)
    return scheduler.every().day.at(at).do(job).tag(tag)
