from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional
import logging
import random

from whattoeat.api.routes import foods, lottery, pages
from whattoeat.events.Event_Bus import EventBus
from whattoeat.events.web_observers import EventLog
from whattoeat.infra.Food_Repository import FoodRepository
from whattoeat.infra.Local_Storage import LocalStorage
from whattoeat.infra.paths import FOODS_FILE
from whattoeat.logic.clock import ClockStatus
from whattoeat.logic.lottery.draw import Lottery
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.config import (
    RANDOM_SEED, CLOCK_REFRESH_MS,
    LOTTERY_MAX_TICKS, LOTTERY_TICK_MS, LOTTERY_SETTLE_MS, LOTTERY_COOLDOWN_MS,
)
from whattoeat.utilities.exceptions import WhatToEatError

# Logging
logger = logging.getLogger("whattoeat_app")


def build_store(foods_file: Path = FOODS_FILE, clock: Optional[Callable[[], datetime]] = None,
                rng: Optional[random.Random] = None, event_bus: Optional[EventBus] = None) -> FoodStore:
    """Wire storage -> repository -> store for one data file."""
    repository = FoodRepository(LocalStorage(foods_file))
    return FoodStore(repository, clock=clock, rng=rng or random.Random(RANDOM_SEED), event_bus=event_bus)


async def _handle_app_error(request: Request, exc: WhatToEatError):
    if exc.http_status >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    content = {"error": exc.message, "code": exc.code}
    if exc.details:
        content["details"] = dict(exc.details)
    return JSONResponse(status_code=exc.http_status, content=content)


def create_app(store: Optional[FoodStore] = None, event_bus: Optional[EventBus] = None,
               max_ticks: int = LOTTERY_MAX_TICKS, tick_ms: int = LOTTERY_TICK_MS,
               settle_ms: int = LOTTERY_SETTLE_MS, cooldown_ms: int = LOTTERY_COOLDOWN_MS,
               clock_refresh_ms: int = CLOCK_REFRESH_MS) -> FastAPI:
    """Build the application around one FoodStore instance.

    Without `store` a store over FOODS_FILE is created. The store, lottery,
    clock status and event log live on `app.state` for the routes;
    the HTML page and its form posts come from `routes.pages`.
    """
    bus = event_bus or EventBus()
    if store is None:
        store = build_store(event_bus=bus)

    app = FastAPI(title="What To Eat API")
    app.state.store = store
    app.state.event_log = EventLog().start(bus)
    app.state.lottery = Lottery(store, max_ticks=max_ticks, rng=random.Random(RANDOM_SEED), event_bus=bus)
    app.state.lottery_timing = {"tick_ms": tick_ms, "settle_ms": settle_ms, "cooldown_ms": cooldown_ms}
    app.state.lottery_task = None
    app.state.clock = ClockStatus(store, refresh_ms=clock_refresh_ms)

    app.add_exception_handler(WhatToEatError, _handle_app_error)
    app.include_router(foods.router)
    app.include_router(lottery.router)
    app.include_router(pages.router)

    @app.on_event("startup")
    async def _start_clock():
        app.state.clock.start()
        logger.info("Food store ready with %d foods (filter=%s)", len(store), store.current_filter)

    @app.on_event("shutdown")
    async def _stop_background():
        app.state.clock.stop()
        task = app.state.lottery_task
        if task is not None and not task.done():
            task.cancel()

    return app


app = create_app()
