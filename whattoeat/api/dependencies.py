"""
API dependencies: hand the application-owned objects to the routes.

Usage:
    @router.get("/example")
    def example(store: FoodStore = Depends(get_store)):
        ...
"""
from fastapi import Request

from whattoeat.events.web_observers import EventLog
from whattoeat.logic.clock import ClockStatus
from whattoeat.logic.lottery.draw import Lottery
from whattoeat.logic.store.food_store import FoodStore


def get_store(request: Request) -> FoodStore:
    return request.app.state.store


def get_lottery(request: Request) -> Lottery:
    return request.app.state.lottery


def get_clock(request: Request) -> ClockStatus:
    return request.app.state.clock


def get_event_log(request: Request) -> EventLog:
    return request.app.state.event_log
