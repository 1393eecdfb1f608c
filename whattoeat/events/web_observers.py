"""Web-facing observer for store and lottery events.

Subscribes to an EventBus and keeps a bounded in-memory buffer of recent
events that the web layer serves at /api/events, so a page can poll for
changes instead of reloading.

  * Each event gets an auto-increment integer id (cursor); clients ask only
    for newer events with since=<last_id_seen>.
  * A Lock guards the buffer since FastAPI runs sync endpoints in a
    threadpool.
  * MAX_EVENTS caps memory use.
"""
from __future__ import annotations
from typing import List, Dict, Any, Optional
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    EventBus, FOOD_ADDED, FOOD_DELETED, LOTTERY_STARTED, LOTTERY_FRAME, LOTTERY_RESULT
)

MAX_EVENTS = 300
OBSERVED_EVENTS = (FOOD_ADDED, FOOD_DELETED, LOTTERY_STARTED, LOTTERY_FRAME, LOTTERY_RESULT)


class EventLog:
    def __init__(self, max_events: int = MAX_EVENTS):
        self.max_events = max_events
        self._lock = Lock()
        self._events: List[Dict[str, Any]] = []
        self._next_id = 1
        self._bus: Optional[EventBus] = None

    def record(self, event_name: str, payload: Any):  # signature expected by EventBus
        with self._lock:
            evt: Dict[str, Any] = {
                'id': self._next_id,
                'type': event_name,
                'ts': datetime.now(timezone.utc).isoformat(),
            }
            # Flatten payload fields the UI cares about
            if isinstance(payload, dict):
                food = payload.get('food')
                if food is not None and hasattr(food, 'to_dict'):
                    evt['food'] = food.to_dict()
                if 'id' in payload:
                    evt['food_id'] = payload['id']
                for k in ('removed', 'count', 'eligible', 'max_ticks', 'tick', 'icon'):
                    if k in payload:
                        evt[k] = payload[k]
            self._events.append(evt)
            self._next_id += 1
            if len(self._events) > self.max_events:
                del self._events[: len(self._events) - self.max_events]

    def start(self, bus: EventBus) -> "EventLog":
        """Idempotent start: subscribe once per bus."""
        if self._bus is bus:
            return self
        for name in OBSERVED_EVENTS:
            bus.subscribe(name, self.record)
        self._bus = bus
        return self

    def stop(self):
        if self._bus is None:
            return
        for name in OBSERVED_EVENTS:
            self._bus.unsubscribe(name, self.record)
        self._bus = None

    def get_events(self, since: int | None = None) -> Dict[str, Any]:
        """Return events newer than 'since' (exclusive), plus next_cursor for the next poll."""
        with self._lock:
            if since is None:
                data = list(self._events)
            else:
                data = [e for e in self._events if e['id'] > since]
            next_cursor = self._events[-1]['id'] if self._events else since or 0
        return {'events': data, 'next_cursor': next_cursor}


__all__ = ['EventLog', 'MAX_EVENTS']
