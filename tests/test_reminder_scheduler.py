import asyncio
import time
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from models.prospect import Prospect
from utils import notification_center as center_module
from utils.errors import NotificationCenterError, NotificationSubmissionError, PermissionDeniedError
from utils.notification_center import (
    AuthorizationStatus,
    CalendarTrigger,
    LocalNotificationCenter,
    deny_prompt,
    grant_prompt,
)
from utils.reminder_scheduler import ReminderScheduler, ReminderState


@pytest.fixture
def prospect():
    return Prospect(name="Raymond Chen", email_address="ahrchen@gmail.com")


def recording_scheduler(center):
    states = []
    scheduler = ReminderScheduler(center, on_state_change=lambda _id, s: states.append(s))
    return scheduler, states


@pytest.mark.asyncio
async def test_authorized_schedules_directly(prospect):
    prompted = []

    async def prompt(options):
        prompted.append(options)
        return True

    center = LocalNotificationCenter(status=AuthorizationStatus.AUTHORIZED, prompt=prompt)
    scheduler, states = recording_scheduler(center)

    request = await scheduler.schedule(prospect)

    assert prompted == []
    assert states == [ReminderState.UNREQUESTED, ReminderState.SCHEDULING, ReminderState.SCHEDULED]
    assert request.content.title == "Contact Raymond Chen"
    assert request.content.subtitle == "ahrchen@gmail.com"
    assert request.content.sound is True
    assert request.trigger == CalendarTrigger(hour=9, minute=0, repeats=False)
    assert center.pending_requests() == [request]


@pytest.mark.asyncio
async def test_permission_requested_when_not_determined(prospect):
    center = LocalNotificationCenter(prompt=grant_prompt)
    scheduler, states = recording_scheduler(center)

    await scheduler.schedule(prospect)

    assert ReminderState.REQUESTING_PERMISSION in states
    assert states[-1] is ReminderState.SCHEDULED
    assert await center.authorization_status() is AuthorizationStatus.AUTHORIZED


@pytest.mark.asyncio
async def test_denied_permission_fails_without_submission(prospect):
    center = LocalNotificationCenter(status=AuthorizationStatus.DENIED, prompt=deny_prompt)
    scheduler, states = recording_scheduler(center)

    with pytest.raises(PermissionDeniedError):
        await scheduler.schedule(prospect)

    assert states[-1] is ReminderState.FAILED
    assert ReminderState.SCHEDULING not in states
    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_submission_error_is_surfaced(prospect):
    class RejectingCenter(LocalNotificationCenter):
        async def add(self, request):
            raise NotificationCenterError("quota exceeded")

    center = RejectingCenter(status=AuthorizationStatus.AUTHORIZED)
    scheduler, states = recording_scheduler(center)

    with pytest.raises(NotificationSubmissionError):
        await scheduler.schedule(prospect)
    assert states[-1] is ReminderState.FAILED


@pytest.mark.asyncio
async def test_repeated_calls_schedule_independent_reminders(prospect):
    center = LocalNotificationCenter(status=AuthorizationStatus.AUTHORIZED)
    scheduler = ReminderScheduler(center)

    first = await scheduler.schedule(prospect)
    second = await scheduler.schedule(prospect)

    assert first.identifier != second.identifier
    assert len(center.pending_requests()) == 2
    assert prospect.is_contacted is False


@pytest.mark.asyncio
async def test_background_task_keeps_caller_responsive(prospect):
    release = asyncio.Event()

    async def slow_prompt(options):
        await release.wait()
        return True

    center = LocalNotificationCenter(prompt=slow_prompt)
    task = ReminderScheduler(center).schedule_in_background(prospect)

    await asyncio.sleep(0)
    assert not task.done()

    release.set()
    request = await task
    assert center.pending_requests() == [request]


def test_next_fire_date_before_and_after_nine():
    trigger = CalendarTrigger(hour=9)

    early = datetime(2024, 5, 1, 7, 30)
    assert trigger.next_fire_date(early) == datetime(2024, 5, 1, 9, 0)

    late = datetime(2024, 5, 1, 9, 0)
    assert trigger.next_fire_date(late) == datetime(2024, 5, 2, 9, 0)

    month_end = datetime(2024, 5, 31, 18, 0)
    assert trigger.next_fire_date(month_end) == datetime(2024, 6, 1, 9, 0)


@pytest.fixture
def berlin_local_time(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("tzset nicht verfügbar")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_next_fire_date_across_dst_change_with_zoneinfo():
    berlin = ZoneInfo("Europe/Berlin")
    # Nacht vom 30. auf den 31. März 2024: Umstellung auf Sommerzeit
    now = datetime(2024, 3, 30, 18, 0, tzinfo=berlin)

    fire = CalendarTrigger(hour=9).next_fire_date(now)

    assert (fire.day, fire.hour, fire.minute) == (31, 9, 0)
    assert fire.utcoffset() == timedelta(hours=2)


def test_default_next_fire_date_is_nine_local_after_dst_change(berlin_local_time, monkeypatch):
    class FrozenDatetime(datetime):
        @classmethod
        def now(cls, tz=None):
            return datetime(2024, 3, 30, 18, 0)

    monkeypatch.setattr(center_module, "datetime", FrozenDatetime)

    fire = CalendarTrigger(hour=9).next_fire_date()

    assert (fire.day, fire.hour, fire.minute) == (31, 9, 0)
    assert fire.utcoffset() == timedelta(hours=2)
