"""Event helper utilities.

Quick import:
    from whattoeat.events.event_helpers import (
        publish_food_added, publish_food_deleted,
        publish_lottery_started, publish_lottery_frame, publish_lottery_result,
    )
"""
from __future__ import annotations
from typing import Any, Optional

from .Event_Bus import (
    EventBus,
    FOOD_ADDED, FOOD_DELETED, LOTTERY_STARTED, LOTTERY_FRAME, LOTTERY_RESULT,
)

__all__ = [
    'publish_food_added', 'publish_food_deleted',
    'publish_lottery_started', 'publish_lottery_frame', 'publish_lottery_result',
]


def publish_food_added(bus: Optional[EventBus], food: Any, count: int):
    if bus is not None:
        bus.publish(FOOD_ADDED, {'food': food, 'count': count})


def publish_food_deleted(bus: Optional[EventBus], food_id: int, removed: bool, count: int):
    if bus is not None:
        bus.publish(FOOD_DELETED, {'id': food_id, 'removed': removed, 'count': count})


def publish_lottery_started(bus: Optional[EventBus], eligible: int, max_ticks: int):
    if bus is not None:
        bus.publish(LOTTERY_STARTED, {'eligible': eligible, 'max_ticks': max_ticks})


def publish_lottery_frame(bus: Optional[EventBus], tick: int, food: Any, icon: str):
    if bus is not None:
        bus.publish(LOTTERY_FRAME, {'tick': tick, 'food': food, 'icon': icon})


def publish_lottery_result(bus: Optional[EventBus], food: Any, icon: str):
    """Publish the settled lottery result.

    Payload structure:
        {'food': FoodItem, 'icon': str}
    """
    if bus is not None:
        bus.publish(LOTTERY_RESULT, {'food': food, 'icon': icon})
