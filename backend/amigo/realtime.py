"""
Change notification.

Committed row changes are announced per table on the ``table-changed``
signal. Consumers treat a signal as "re-fetch that collection"; no diff is
carried. Auth state changes go out on ``auth-changed``.
"""
from __future__ import annotations

import threading
from collections import defaultdict
from typing import Callable, Dict

from blinker import Namespace
from sqlalchemy import event
from sqlalchemy.orm import Session


_signals = Namespace()

table_changed = _signals.signal("table-changed")
auth_changed = _signals.signal("auth-changed")

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

_PENDING_KEY = "amigo.changed_tables"


class ChangeVersions:
    """Monotonic per-table version counters."""

    def __init__(self):
        self._lock = threading.Lock()
        self._versions: Dict[str, int] = defaultdict(int)

    def bump(self, table: str) -> int:
        with self._lock:
            self._versions[table] += 1
            return self._versions[table]

    def get(self, table: str) -> int:
        return self._versions.get(table, 0)

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._versions)


versions = ChangeVersions()


def subscribe(table: str, callback: Callable[[str], None]) -> Callable[[], None]:
    """Call ``callback(table)`` after every committed change to ``table``.

    Returns a function that removes the subscription.
    """

    def receiver(sender, **kwargs):
        if sender == table:
            callback(table)

    table_changed.connect(receiver, weak=False)
    return lambda: table_changed.disconnect(receiver)


def on_auth_change(callback: Callable[[str, str], None]) -> Callable[[], None]:
    """Call ``callback(event, user_id)`` on sign-in and sign-out."""

    def receiver(sender, **kwargs):
        callback(kwargs["event"], sender)

    auth_changed.connect(receiver, weak=False)
    return lambda: auth_changed.disconnect(receiver)


def notify_auth_change(user_id: str, auth_event: str) -> None:
    auth_changed.send(user_id, event=auth_event)


@event.listens_for(Session, "after_flush")
def _collect_changed_tables(session, flush_context):
    pending = session.info.setdefault(_PENDING_KEY, set())
    for instance in list(session.new) + list(session.dirty) + list(session.deleted):
        table = getattr(instance, "__tablename__", None)
        if table:
            pending.add(table)


@event.listens_for(Session, "after_commit")
def _announce_changed_tables(session):
    pending = session.info.pop(_PENDING_KEY, set())
    for table in sorted(pending):
        versions.bump(table)
        table_changed.send(table)


@event.listens_for(Session, "after_rollback")
def _discard_changed_tables(session):
    session.info.pop(_PENDING_KEY, None)


class FeedCache:
    """
    First page of the feed, dropped whenever posts, likes, comments or
    users (author names) change.
    """

    WATCHED_TABLES = ("posts", "likes", "comments", "users")

    def __init__(self):
        self._entries: Dict[str, object] = {}
        self._unsubscribers = [
            subscribe(table, self.invalidate) for table in self.WATCHED_TABLES
        ]

    def get(self, key: str):
        return self._entries.get(key)

    def set(self, key: str, value) -> None:
        self._entries[key] = value

    def invalidate(self, table: str = None) -> None:
        self._entries.clear()

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
