# solhub_admin/core/realtime.py
"""
Row-level change feed and the laboratory list reconciler that consumes it.

The feed publishes ``ChangeEvent`` objects for watched tables once the
transaction that produced them commits. Subscribers are plain callables;
``LaboratoryListReconciler`` is the one the list stream plugs in.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from itertools import count
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from sqlalchemy import event
from sqlalchemy.orm import Session

from .constants import ALL, ChangeKind
from .utils import parse_datetime

logger = logging.getLogger(__name__)

PENDING_KEY = "change_feed_pending"


@dataclass
class ChangeEvent:
    kind: ChangeKind
    table: str
    record: Dict[str, Any] = field(default_factory=dict)
    old_record: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if not isinstance(self.kind, ChangeKind):
            self.kind = ChangeKind(self.kind)

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "table": self.table,
            "record": self.record,
            "old_record": self.old_record,
        }


class Subscription:
    def __init__(self, feed, sub_id, table, callback):
        self._feed = feed
        self.id = sub_id
        self.table = table
        self.callback = callback

    def unsubscribe(self):
        self._feed.unsubscribe(self)


class ChangeFeed:
    """In-process change feed keyed by table name"""

    def __init__(self, watched_tables: Iterable[str] = ()):
        self.watched_tables = set(watched_tables)
        self._lock = Lock()
        self._ids = count(1)
        self._subscriptions: Dict[int, Subscription] = {}
        self._installed = False

    def subscribe(self, table: str, callback: Callable[[ChangeEvent], None]) -> Subscription:
        with self._lock:
            subscription = Subscription(self, next(self._ids), table, callback)
            self._subscriptions[subscription.id] = subscription
        logger.debug(f"Subscribed {subscription.id} to {table}")
        return subscription

    def unsubscribe(self, subscription: Subscription):
        with self._lock:
            self._subscriptions.pop(subscription.id, None)
        logger.debug(f"Unsubscribed {subscription.id} from {subscription.table}")

    def subscriber_count(self, table: Optional[str] = None) -> int:
        with self._lock:
            return sum(1 for s in self._subscriptions.values() if table is None or s.table == table)

    def publish(self, change: ChangeEvent):
        with self._lock:
            targets = [s for s in self._subscriptions.values() if s.table == change.table]
        for subscription in targets:
            try:
                subscription.callback(change)
            except Exception:
                logger.exception(f"Change feed subscriber {subscription.id} failed on {change.table}")

    # SQLAlchemy integration

    def install(self, db=None):
        """Publish committed row changes of watched tables from every ORM session"""
        if self._installed:
            return
        event.listen(Session, "before_flush", self._collect_deletes)
        event.listen(Session, "after_flush", self._collect_writes)
        event.listen(Session, "after_commit", self._publish_pending)
        event.listen(Session, "after_rollback", self._discard_pending)
        self._installed = True

    def _watched(self, obj) -> bool:
        return getattr(obj, "__tablename__", None) in self.watched_tables and hasattr(obj, "to_dict")

    def _queue(self, session, kind, obj):
        record = obj.to_dict()
        session.info.setdefault(PENDING_KEY, []).append(
            ChangeEvent(
                kind=kind,
                table=obj.__tablename__,
                record=record,
                old_record=record if kind is ChangeKind.DELETE else None,
            )
        )

    def _collect_deletes(self, session, flush_context, instances):
        # Snapshot before the row is gone
        for obj in session.deleted:
            if self._watched(obj):
                self._queue(session, ChangeKind.DELETE, obj)

    def _collect_writes(self, session, flush_context):
        for obj in session.new:
            if self._watched(obj):
                self._queue(session, ChangeKind.INSERT, obj)
        for obj in session.dirty:
            if self._watched(obj) and session.is_modified(obj, include_collections=False):
                self._queue(session, ChangeKind.UPDATE, obj)

    def _publish_pending(self, session):
        pending = session.info.pop(PENDING_KEY, [])
        for change in pending:
            self.publish(change)

    def _discard_pending(self, session):
        session.info.pop(PENDING_KEY, None)


def _created_key(record: Mapping[str, Any]) -> datetime:
    value = record.get("created_at")
    if not value:
        return datetime.min
    try:
        return parse_datetime(value)
    except ValueError:
        return datetime.min


class LaboratoryListReconciler:
    """
    Keep a client-side laboratory list consistent with a stream of change events.

    ``status_filter`` is called on every event so the caller can change the
    filter without resubscribing. ``None`` or ``"all"`` disables filtering.
    """

    def __init__(
        self,
        snapshot: Iterable[Mapping[str, Any]] = (),
        status_filter: Optional[Callable[[], Optional[str]]] = None,
    ):
        self._status_filter = status_filter or (lambda: None)
        self._items: List[Dict[str, Any]] = [dict(record) for record in snapshot]
        self._sort()

    @property
    def items(self) -> List[Dict[str, Any]]:
        return list(self._items)

    def ids(self) -> List[str]:
        return [item["id"] for item in self._items]

    def matches(self, record: Mapping[str, Any]) -> bool:
        status = self._status_filter()
        return status in (None, ALL) or record.get("status") == status

    def _sort(self):
        self._items.sort(key=_created_key, reverse=True)

    def _index_of(self, record_id) -> Optional[int]:
        for index, item in enumerate(self._items):
            if item.get("id") == record_id:
                return index
        return None

    def apply(self, change: ChangeEvent) -> bool:
        """Apply one event; returns True when the list changed"""
        record = dict(change.record or {})
        record_id = record.get("id")
        if not record_id:
            logger.warning(f"Discarding {change.kind.value} event on {change.table} without id")
            return False

        index = self._index_of(record_id)

        if change.kind is ChangeKind.INSERT:
            if index is not None or not self.matches(record):
                return False
            self._items.append(record)
            self._sort()
            return True

        if change.kind is ChangeKind.UPDATE:
            if index is not None:
                if self.matches(record):
                    self._items[index] = record
                else:
                    del self._items[index]
                return True
            if self.matches(record):
                self._items.append(record)
                self._sort()
                return True
            return False

        if index is None:
            return False
        del self._items[index]
        return True

    def apply_all(self, changes: Iterable[ChangeEvent]) -> List[Dict[str, Any]]:
        for change in changes:
            self.apply(change)
        return self.items
