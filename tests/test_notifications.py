import json
from datetime import date, timedelta

from backend.application import SiteService
from backend.core.notifications import (
    badge_label,
    derive,
    mark_all_read,
    mark_read,
    unread_count,
    visible,
)
from backend.core.store import InMemoryStore
from backend.domain import Material, Notification, Project

from conftest import NOW, NOW_MS

HOUR_MS = 60 * 60 * 1000


def _project(project_id: int, name: str, deadline: date) -> Project:
    return Project(id=project_id, name=name, deadline=deadline, progress=0, sq_ft=600, workers=2)


def test_new_project_notification_within_a_day():
    fresh = _project(NOW_MS - HOUR_MS, "Fresh", date(2025, 12, 1))
    old = _project(NOW_MS - 25 * HOUR_MS, "Old", date(2025, 12, 1))

    result = derive([fresh, old], [], NOW)

    assert result == [
        Notification(id=fresh.id + 1000, type="success", message="New project added: Fresh", time="Just now")
    ]


def test_deadline_window():
    base = NOW_MS - 48 * HOUR_MS
    projects = [
        _project(base, "Tomorrow", date(2025, 3, 11)),
        _project(base + 1, "Two days", date(2025, 3, 12)),
        _project(base + 2, "Three days", date(2025, 3, 13)),
        _project(base + 3, "Too far", date(2025, 3, 14)),
        _project(base + 4, "Overdue", date(2025, 3, 10)),
    ]

    messages = {item.id: item.message for item in derive(projects, [], NOW)}

    assert messages == {
        base + 2000: "Deadline approaching for Tomorrow (1 days left)",
        base + 1 + 2000: "Deadline approaching for Two days (2 days left)",
        base + 2 + 2000: "Deadline approaching for Three days (3 days left)",
    }


def test_deadline_exactly_three_days_away_is_included(clock):
    project = _project(NOW_MS - 48 * HOUR_MS, "Edge", date(2025, 3, 13))
    clock.moment = clock.moment.replace(hour=0, minute=0)
    [notification] = derive([project], [], clock())
    assert notification.message == "Deadline approaching for Edge (3 days left)"
    assert notification.type == "warning"


def test_out_of_stock_ids_follow_position():
    materials = [
        Material(name="Cement", status="In Stock", quantity=200),
        Material(name="Steel", status="Out of Stock", quantity=0),
        Material(name="Glass", status="Out of Stock", quantity=0),
    ]
    result = derive([], materials, NOW)
    assert [(item.id, item.message) for item in result] == [
        (3001, "Out of stock: Steel"),
        (3002, "Out of stock: Glass"),
    ]

    reordered = derive([], [materials[2], materials[0], materials[1]], NOW)
    assert [(item.id, item.message) for item in reordered] == [
        (3000, "Out of stock: Glass"),
        (3002, "Out of stock: Steel"),
    ]


def test_derive_is_deterministic():
    projects = [_project(NOW_MS - HOUR_MS, "Site X", NOW.date() + timedelta(days=2))]
    materials = [Material(name="Steel", status="Out of Stock", quantity=0)]
    assert derive(projects, materials, NOW) == derive(projects, materials, NOW)


def test_ledger_operations():
    notifications = [
        Notification(id=3001, type="warning", message="Out of stock: Steel", time="Today"),
        Notification(id=5000, type="success", message="New project added: A", time="Just now"),
    ]

    ledger = mark_read([], 3001)
    assert mark_read(ledger, 3001) == ledger == [3001]
    assert unread_count(notifications, ledger) == 1
    assert visible(notifications, ledger, show_all=False) == [notifications[1]]
    assert visible(notifications, ledger, show_all=True) == notifications

    ledger = mark_all_read(notifications)
    assert unread_count(notifications, ledger) == 0
    assert unread_count([], ledger) == 0


def test_badge_label():
    assert badge_label(0) == ""
    assert badge_label(3) == "3"
    assert badge_label(9) == "9"
    assert badge_label(10) == "9+"


def test_service_publishes_unread_count(service):
    published: list[int] = []
    service.state.subscribe(published.append)

    service.add_project("Site X", NOW.date() + timedelta(days=2), 600)
    service.refresh_notifications()
    assert service.unread_count() == 3

    service.mark_notification_read(3001)
    service.mark_notification_read(3001)
    assert service.unread_count() == 2
    assert service.ledger.ids() == [3001]

    service.mark_all_read()
    assert published == [3, 2, 2, 0]
    assert service.visible_notifications() == []

    assert service.toggle_show_read() is True
    assert len(service.visible_notifications()) == 3


def test_read_ledger_survives_reload_and_restock(store, service, clock):
    service.refresh_notifications()
    service.mark_notification_read(3001)
    service.toggle_material_status(1)

    reloaded = type(service)(store, clock=clock)
    assert reloaded.current_notifications() == []
    assert reloaded.ledger.ids() == [3001]
    assert reloaded.unread_count() == 0

    reloaded.toggle_material_status(1)
    reloaded.refresh_notifications()
    assert reloaded.unread_count() == 0


def test_out_of_range_project_id_does_not_break_derivation(clock):
    huge = 10**20
    stored = {"id": huge, "name": "Far Future", "deadline": "2025-12-01", "progress": 0, "sqFt": 600, "workers": 2}
    store = InMemoryStore({"projects": json.dumps([stored])})

    service = SiteService(store, clock=clock)

    ids = [item.id for item in service.current_notifications()]
    assert huge + 1000 in ids
    assert service.list_projects()[0].id == huge
