"""Lottery: the animated random pick of one eligible food.

States:
    IDLE -> start() -> RUNNING -> tick() x max_ticks -> FINISHING
    FINISHING -> settle() (final pick) -> complete() -> IDLE

start() outside IDLE is a no-op returning False. The eligible list is
captured at start; later store changes do not affect a running draw.
"""
import asyncio
import logging
import random
from enum import Enum
from typing import Callable, List, Optional

from whattoeat.domain.FoodItem import FoodItem
from whattoeat.events.Event_Bus import EventBus
from whattoeat.events.event_helpers import (
    publish_lottery_started, publish_lottery_frame, publish_lottery_result,
)
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.config import (
    LOTTERY_MAX_TICKS, LOTTERY_TICK_MS, LOTTERY_SETTLE_MS, LOTTERY_COOLDOWN_MS,
)
from whattoeat.utilities.constants import FOOD_ICONS, MSG_NO_ELIGIBLE
from whattoeat.utilities.exceptions import EmptySelectionError

logger = logging.getLogger(__name__)


class LotteryState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHING = "finishing"


class LotteryFrame:
    """One card shown by the lottery; `final` frames also show the tags."""

    def __init__(self, tick: int, food: FoodItem, icon: str, final: bool = False):
        self.tick = tick
        self.food = food
        self.icon = icon
        self.final = final

    def to_dict(self):
        data = {"tick": self.tick, "icon": self.icon, "name": self.food.name, "final": self.final}
        if self.final:
            data["food"] = self.food.to_dict()
        return data

    def __repr__(self) -> str:
        return f"LotteryFrame(tick={self.tick}, food={self.food.name!r}, final={self.final})"


class Lottery:
    def __init__(self, store: FoodStore, max_ticks: int = LOTTERY_MAX_TICKS,
                 rng: Optional[random.Random] = None, event_bus: Optional[EventBus] = None):
        if max_ticks < 1:
            raise ValueError(f"max_ticks must be at least 1: {max_ticks}")
        self.store = store
        self.max_ticks = max_ticks
        self._rng = rng or random.Random()
        self._event_bus = event_bus
        self.state = LotteryState.IDLE
        self.ticks = 0
        self.eligible: List[FoodItem] = []
        self.last_frame: Optional[LotteryFrame] = None
        self.result: Optional[LotteryFrame] = None

    @property
    def is_running(self) -> bool:
        return self.state is not LotteryState.IDLE

    def _icon(self) -> str:
        return self._rng.choice(FOOD_ICONS)

    def start(self) -> bool:
        """Begin a draw over the items eligible for the current period.

        Returns False (and changes nothing) when a draw is already in
        progress. Raises EmptySelectionError when nothing is eligible.
        """
        if self.state is not LotteryState.IDLE:
            logger.debug("Lottery start ignored, state is %s", self.state.value)
            return False
        eligible = self.store.items_for_current_period()
        if not eligible:
            raise EmptySelectionError(MSG_NO_ELIGIBLE, details={"period": self.store.current_period().value})
        self.eligible = eligible
        self.ticks = 0
        self.last_frame = None
        self.result = None
        self.state = LotteryState.RUNNING
        logger.info("Lottery started over %d eligible foods", len(eligible))
        publish_lottery_started(self._event_bus, len(eligible), self.max_ticks)
        return True

    def tick(self) -> LotteryFrame:
        """Show one random preview; the last tick moves the draw to FINISHING."""
        if self.state is not LotteryState.RUNNING:
            raise RuntimeError(f"tick() requires a running lottery, state is {self.state.value}")
        self.ticks += 1
        frame = LotteryFrame(self.ticks, self.store.pick_random(self.eligible), self._icon())
        self.last_frame = frame
        if self.ticks >= self.max_ticks:
            self.state = LotteryState.FINISHING
        publish_lottery_frame(self._event_bus, frame.tick, frame.food, frame.icon)
        return frame

    def settle(self) -> LotteryFrame:
        """Make the final pick. Only valid once, while FINISHING."""
        if self.state is not LotteryState.FINISHING or self.result is not None:
            raise RuntimeError(f"settle() requires an unsettled finishing lottery, state is {self.state.value}")
        frame = LotteryFrame(self.ticks, self.store.pick_random(self.eligible), self._icon(), final=True)
        self.result = frame
        self.last_frame = frame
        logger.info("Lottery result: %s", frame.food)
        publish_lottery_result(self._event_bus, frame.food, frame.icon)
        return frame

    def complete(self):
        """End the cooldown after a settled draw and accept new starts."""
        if self.state is not LotteryState.FINISHING or self.result is None:
            raise RuntimeError(f"complete() requires a settled lottery, state is {self.state.value}")
        self.state = LotteryState.IDLE

    def abort(self):
        self.state = LotteryState.IDLE
        self.eligible = []

    async def run(self, tick_ms: int = LOTTERY_TICK_MS, settle_ms: int = LOTTERY_SETTLE_MS,
                  cooldown_ms: int = LOTTERY_COOLDOWN_MS,
                  on_frame: Optional[Callable[[LotteryFrame], None]] = None) -> Optional[LotteryFrame]:
        """Start and drive a whole draw.

        Returns the final frame, or None when a draw was already running.
        """
        if not self.start():
            return None
        return await self.drive(tick_ms, settle_ms, cooldown_ms, on_frame)

    async def drive(self, tick_ms: int = LOTTERY_TICK_MS, settle_ms: int = LOTTERY_SETTLE_MS,
                    cooldown_ms: int = LOTTERY_COOLDOWN_MS,
                    on_frame: Optional[Callable[[LotteryFrame], None]] = None) -> LotteryFrame:
        """Run an already started draw: max_ticks spins tick_ms apart, settle delay, cooldown.

        The spins are awaited in place so a `wait=true` request sees every
        frame before its response.
        """
        if self.state is not LotteryState.RUNNING or self.ticks:
            raise RuntimeError(f"drive() requires a freshly started lottery, state is {self.state.value}")
        try:
            while self.state is LotteryState.RUNNING:
                await asyncio.sleep(tick_ms / 1000)
                frame = self.tick()
                if on_frame is not None:
                    on_frame(frame)
            await asyncio.sleep(settle_ms / 1000)
            result = self.settle()
            if on_frame is not None:
                on_frame(result)
            await asyncio.sleep(cooldown_ms / 1000)
            self.complete()
            return result
        except BaseException:
            self.abort()
            raise

    def snapshot(self) -> dict:
        return {
            "state": self.state.value,
            "ticks": self.ticks,
            "max_ticks": self.max_ticks,
            "eligible": len(self.eligible),
            "frame": self.last_frame.to_dict() if self.last_frame else None,
            "result": self.result.to_dict() if self.result else None,
        }
