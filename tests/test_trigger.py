import datetime

import schedule

from src.trigger import JOB_TAG, ensure_schedule


def job():
    pass


def test_installs_one_daily_job():
    scheduler = schedule.Scheduler()

    installed = ensure_schedule(job, at="21:00", scheduler=scheduler)

    assert scheduler.get_jobs(JOB_TAG) == [installed]
    assert installed.unit == "days"
    assert installed.interval == 1
    assert installed.at_time == datetime.time(21, 0)


def test_is_idempotent():
    scheduler = schedule.Scheduler()

    ensure_schedule(job, scheduler=scheduler)
    ensure_schedule(job, scheduler=scheduler)

    assert len(scheduler.get_jobs(JOB_TAG)) == 1


def test_replaces_time_and_leaves_other_jobs():
    scheduler = schedule.Scheduler()
    other = scheduler.every().hour.do(job).tag("other")

    ensure_schedule(job, at="21:00", scheduler=scheduler)
    replaced = ensure_schedule(job, at="06:30", scheduler=scheduler)

    assert scheduler.get_jobs(JOB_TAG) == [replaced]
    assert replaced.at_time == datetime.time(6, 30)
    assert other in scheduler.jobs
