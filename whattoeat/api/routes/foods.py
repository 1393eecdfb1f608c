from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from whattoeat.api.dependencies import get_clock, get_store
from whattoeat.logic.clock import ClockStatus
from whattoeat.logic.store.food_store import FoodStore
from whattoeat.utilities.constants import MSG_ADDED, MSG_EMPTY_LIST, MSG_EMPTY_NAME
from whattoeat.utilities.validators import FilterInput, FoodInput

router = APIRouter(prefix="/api")


def _listing(store: FoodStore, tag: str):
    foods = store.filter_by_tag(tag)
    return {
        "filter": tag,
        "count": len(foods),
        "total": len(store),
        "foods": [f.to_dict() for f in foods],
        "message": None if foods else MSG_EMPTY_LIST,
    }


@router.get("/foods")
def list_foods(tag: Optional[str] = Query(default=None), store: FoodStore = Depends(get_store)):
    """Foods matching `tag`, or the current filter when omitted."""
    tag = tag.strip().lower() if tag else store.current_filter
    return _listing(store, tag)


@router.get("/foods/current")
def list_current_foods(store: FoodStore = Depends(get_store)):
    """Foods eligible for the meal period of the current hour."""
    period = store.current_period()
    foods = store.items_for_current_period()
    return {
        "period": period.value,
        "label": period.label,
        "count": len(foods),
        "foods": [f.to_dict() for f in foods],
    }


@router.post("/foods", status_code=201)
def add_food(payload: FoodInput, store: FoodStore = Depends(get_store)):
    food = store.add_food(payload.name, payload.tags)
    if food is None:
        return JSONResponse(status_code=400, content={"error": MSG_EMPTY_NAME})
    return {"status": "success", "message": MSG_ADDED, "food": food.to_dict()}


@router.delete("/foods/{food_id}", status_code=204)
def delete_food(food_id: int, store: FoodStore = Depends(get_store)):
    store.delete(food_id)
    return Response(status_code=204)


@router.get("/filter")
def get_filter(store: FoodStore = Depends(get_store)):
    return {"filter": store.current_filter}


@router.put("/filter")
def set_filter(payload: FilterInput, store: FoodStore = Depends(get_store)):
    store.current_filter = payload.filter
    return _listing(store, store.current_filter)


@router.get("/period")
def current_period(clock: ClockStatus = Depends(get_clock)):
    clock.refresh()
    return clock.snapshot()
