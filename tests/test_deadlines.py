"""Тесты напоминаний о сроках задач."""

import asyncio
from datetime import timedelta

import pytest

from synergysphere.models import NotificationTypes, TaskStatus
from synergysphere.services import DeadlineNotifier, DeadlineScheduler, NotificationService
from synergysphere.services.deadlines import deadline_message
from synergysphere.utils.datetime_utils import utcnow


@pytest.fixture
def now():
    return utcnow()


@pytest.fixture
def service(notification_repo):
    return NotificationService(notification_repo)


@pytest.fixture
def notifier(tasks, service):
    return DeadlineNotifier(tasks, service)


@pytest.fixture
async def schedule(tasks, project_id, alice, bob, now):
    """Набор задач вокруг окна в 3 дня"""
    return {
        "soon": await tasks.create("Soon", project_id=project_id, created_by_id=alice.id,
                                   assignee_id=bob.id, due_date=now + timedelta(hours=1)),
        "later": await tasks.create("Later", project_id=project_id, created_by_id=alice.id,
                                    assignee_id=alice.id, due_date=now + timedelta(days=2, hours=12)),
        "far": await tasks.create("Far", project_id=project_id, created_by_id=alice.id,
                                  assignee_id=bob.id, due_date=now + timedelta(days=5)),
        "done": await tasks.create("Done", project_id=project_id, created_by_id=alice.id,
                                   assignee_id=bob.id, status=TaskStatus.DONE,
                                   due_date=now + timedelta(hours=2)),
        "unassigned": await tasks.create("Nobody", project_id=project_id, created_by_id=alice.id,
                                         due_date=now + timedelta(hours=3)),
        "overdue": await tasks.create("Overdue", project_id=project_id, created_by_id=alice.id,
                                      assignee_id=bob.id, due_date=now - timedelta(days=1)),
    }


async def test_find_upcoming_filters_window_and_status(notifier, schedule, now):
    upcoming = await notifier.find_upcoming(3, now=now)

    assert {t.title for t in upcoming} == {"Soon", "Later", "Nobody"}
    by_title = {t.title: t for t in upcoming}
    assert by_title["Soon"].days_until_due == 1
    assert by_title["Later"].days_until_due == 3
    assert by_title["Soon"].project_name == "Apollo"


async def test_find_upcoming_for_one_assignee(notifier, schedule, bob, now):
    upcoming = await notifier.find_upcoming(3, assignee_id=bob.id, now=now)

    assert [t.title for t in upcoming] == ["Soon"]


async def test_notify_upcoming_creates_one_reminder_per_task(notifier, service, schedule, alice, bob, now):
    created = await notifier.notify_upcoming(3, now=now)

    assert sorted(n.task_id for n in created) == sorted([schedule["soon"].id, schedule["later"].id])
    assert all(n.type == NotificationTypes.TASK_DUE_SOON for n in created)

    bob_notes = await service.list_notifications(bob.id)
    assert [n.message for n in bob_notes] == ['Task "Soon" is due tomorrow in project "Apollo"']
    alice_notes = await service.list_notifications(alice.id)
    assert [n.message for n in alice_notes] == ['Task "Later" is due in 3 days in project "Apollo"']

    # Повторный запуск не плодит дубликаты
    assert await notifier.notify_upcoming(3, now=now) == []


def test_deadline_message_variants(now):
    from synergysphere.models import UpcomingTask

    def upcoming(days, project_name="Apollo"):
        return UpcomingTask(id="t1", title="Ship", due_date=now, status=TaskStatus.TODO,
                            project_id="p1", days_until_due=days, project_name=project_name)

    assert deadline_message(upcoming(0)) == 'Task "Ship" is due today in project "Apollo"'
    assert deadline_message(upcoming(1, None)) == 'Task "Ship" is due tomorrow'
    assert deadline_message(upcoming(2, None)) == 'Task "Ship" is due in 2 days'


async def test_scheduler_run_once_reports_created(notifier, schedule):
    scheduler = DeadlineScheduler(lambda: notifier, interval_minutes=5, days_ahead=3)

    assert await scheduler.run_once() == 2


async def test_scheduler_run_once_swallows_job_errors():
    def broken_factory():
        raise RuntimeError("database is down")

    scheduler = DeadlineScheduler(broken_factory, interval_minutes=5, days_ahead=3)

    assert await scheduler.run_once() == 0


async def test_scheduler_start_and_shutdown(notifier):
    scheduler = DeadlineScheduler(lambda: notifier, interval_minutes=5, days_ahead=3)

    scheduler.start()
    assert scheduler.scheduler.running
    assert scheduler.scheduler.get_job(DeadlineScheduler.JOB_ID) is not None

    scheduler.shutdown()
    # Остановка выполняется на следующей итерации цикла событий
    await asyncio.sleep(0)
    assert not scheduler.scheduler.running
