"""Server-rendered page and the plain HTML form posts behind it.

Every form handler redirects back to "/" with 303 and a `notice` key the
page turns into a message.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from whattoeat.api.dependencies import get_clock, get_lottery, get_store
from whattoeat.api.routes.lottery import drive_in_background
from whattoeat.infra.paths import TEMPLATES_DIR
from whattoeat.logic.clock import ClockStatus
from whattoeat.logic.lottery.draw import Lottery
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.constants import (
    FILTER_VALUES, MEAL_PERIODS, TAG_LABELS,
    MSG_ADDED, MSG_CONFIRM_DELETE, MSG_DELETED, MSG_EMPTY_LIST, MSG_EMPTY_NAME,
    MSG_LOTTERY_BUSY, MSG_NO_ELIGIBLE,
)
from whattoeat.utilities.exceptions import EmptySelectionError

router = APIRouter()
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

NOTICE_MAP = {
    "added": MSG_ADDED,
    "deleted": MSG_DELETED,
    "empty_name": MSG_EMPTY_NAME,
    "no_eligible": MSG_NO_ELIGIBLE,
    "busy": MSG_LOTTERY_BUSY,
}


def _back(notice: Optional[str] = None) -> RedirectResponse:
    url = f"/?notice={notice}" if notice else "/"
    return RedirectResponse(url=url, status_code=303)


@router.get("/", response_class=HTMLResponse)
def main_page(request: Request, filter: Optional[str] = Query(default=None),
              notice: Optional[str] = Query(default=None),
              store: FoodStore = Depends(get_store), clock: ClockStatus = Depends(get_clock),
              lottery: Lottery = Depends(get_lottery)):
    if filter is not None:
        store.current_filter = filter
    clock.refresh()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "status": clock.text,
            "filters": FILTER_VALUES,
            "periods": MEAL_PERIODS,
            "current_filter": store.current_filter,
            "foods": store.current_items(),
            "tag_labels": TAG_LABELS,
            "empty_message": MSG_EMPTY_LIST,
            "confirm_delete": MSG_CONFIRM_DELETE,
            "notice_message": NOTICE_MAP.get(notice),
            "lottery": lottery.snapshot(),
        },
    )


@router.post("/foods/add")
def add_food_form(name: str = Form(default=""), tags: List[str] = Form(default=[]),
                  store: FoodStore = Depends(get_store)):
    if store.add_food(name, tags) is None:
        return _back("empty_name")
    return _back("added")


@router.post("/foods/{food_id}/delete")
def delete_food_form(food_id: int, store: FoodStore = Depends(get_store)):
    store.delete(food_id)
    return _back("deleted")


@router.post("/lottery")
async def lottery_form(request: Request, lottery: Lottery = Depends(get_lottery)):
    """Start a background draw; the page refreshes itself until it is idle again."""
    try:
        started = lottery.start()
    except EmptySelectionError:
        logger.info("Lottery form posted with nothing eligible")
        return _back("no_eligible")
    if not started:
        return _back("busy")
    drive_in_background(request.app, lottery)
    return _back()
