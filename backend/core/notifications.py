"""Notification derivation and the read-ledger rules.

``derive`` is a pure function of the current projects, materials and clock.
Identifiers are arithmetic so that a re-derivation yields the same ids:

* ``project.id + 1000``: project created in the last 24 hours;
* ``project.id + 2000``: deadline within the next three days;
* ``position + 3000``: material out of stock, keyed by list position.

Position keys move when the material list is reordered, and ledger entries
are never purged, so a read id can later match an unrelated event.
"""
from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Iterable, Sequence

from backend.domain import OUT_OF_STOCK, Material, Notification, Project

NEW_PROJECT_OFFSET = 1000
DEADLINE_OFFSET = 2000
OUT_OF_STOCK_OFFSET = 3000

NEW_PROJECT_WINDOW_MS = 24 * 60 * 60 * 1000
DEADLINE_WINDOW_DAYS = 3
DAY_SECONDS = 24 * 60 * 60


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def deadline_instant(deadline: date) -> datetime:
    return datetime.combine(deadline, time.min, tzinfo=timezone.utc)


def days_left(deadline: date, now: datetime) -> float:
    return (deadline_instant(deadline) - _as_utc(now)).total_seconds() / DAY_SECONDS


def derive(projects: Iterable[Project], materials: Sequence[Material], now: datetime) -> list[Notification]:
    now = _as_utc(now)
    now_ms = int(now.timestamp() * 1000)
    notifications: list[Notification] = []

    for project in projects:
        if now_ms - project.id < NEW_PROJECT_WINDOW_MS:
            notifications.append(
                Notification(
                    id=project.id + NEW_PROJECT_OFFSET,
                    type="success",
                    message=f"New project added: {project.name}",
                    time="Just now",
                )
            )

        remaining = days_left(project.deadline, now)
        if 0 <= remaining <= DEADLINE_WINDOW_DAYS:
            notifications.append(
                Notification(
                    id=project.id + DEADLINE_OFFSET,
                    type="warning",
                    message=f"Deadline approaching for {project.name} ({math.ceil(remaining)} days left)",
                    time="Today",
                )
            )

    for index, material in enumerate(materials):
        if material.status == OUT_OF_STOCK:
            notifications.append(
                Notification(
                    id=index + OUT_OF_STOCK_OFFSET,
                    type="warning",
                    message=f"Out of stock: {material.name}",
                    time="Today",
                )
            )

    return notifications


def unread(notifications: Iterable[Notification], ledger: Iterable[int]) -> list[Notification]:
    seen = set(ledger)
    return [item for item in notifications if item.id not in seen]


def unread_count(notifications: Iterable[Notification], ledger: Iterable[int]) -> int:
    return len(unread(notifications, ledger))


def visible(notifications: Sequence[Notification], ledger: Iterable[int], show_all: bool) -> list[Notification]:
    if show_all:
        return list(notifications)
    return unread(notifications, ledger)


def mark_read(ledger: Sequence[int], notification_id: int) -> list[int]:
    if notification_id in ledger:
        return list(ledger)
    return [*ledger, notification_id]


def mark_all_read(notifications: Iterable[Notification]) -> list[int]:
    return [item.id for item in notifications]


def badge_label(count: int) -> str:
    if count <= 0:
        return ""
    if count > 9:
        return "9+"
    return str(count)
