import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from whattoeat.api.dependencies import get_event_log, get_lottery
from whattoeat.events.web_observers import EventLog
from whattoeat.logic.lottery.draw import Lottery
from whattoeat.utilities.constants import MSG_LOTTERY_BUSY
from whattoeat.utilities.exceptions import LotteryBusyError

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


def drive_in_background(app, lottery: Lottery) -> asyncio.Task:
    """Drive a started draw as a task kept on app.state so shutdown can cancel it."""
    task = asyncio.get_running_loop().create_task(lottery.drive(**app.state.lottery_timing))
    app.state.lottery_task = task
    logger.debug("Lottery running in background over %d foods", len(lottery.eligible))
    return task


@router.get("/lottery")
def lottery_status(lottery: Lottery = Depends(get_lottery)):
    return lottery.snapshot()


@router.post("/lottery")
async def start_lottery(request: Request, wait: bool = Query(default=False),
                        lottery: Lottery = Depends(get_lottery)):
    """Start a draw for the current meal period.

    wait=true answers with the settled result once the cooldown is over;
    otherwise the draw runs in the background (202) and clients poll
    /api/lottery or /api/events for frames.
    """
    if not lottery.start():
        raise LotteryBusyError(MSG_LOTTERY_BUSY, details={"state": lottery.state.value})
    if wait:
        result = await lottery.drive(**request.app.state.lottery_timing)
        return {"result": result.to_dict(), "lottery": lottery.snapshot()}
    drive_in_background(request.app, lottery)
    return JSONResponse(status_code=202, content={"lottery": lottery.snapshot()})


@router.get("/events")
def recent_events(since: Optional[int] = Query(default=None, ge=0),
                  event_log: EventLog = Depends(get_event_log)):
    return event_log.get_events(since)
