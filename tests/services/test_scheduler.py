from eventhost import scheduler


def test_scheduler_registers_reminder_job():
    sched = scheduler.init_scheduler()
    try:
        assert scheduler.init_scheduler() is sched
        job = sched.get_job("send_due_reminders")
        assert job is not None
        assert job.name == "Send Pre-Event Reminder Emails"
    finally:
        scheduler.shutdown_scheduler()

    assert scheduler.get_scheduler() is None
