import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.application.session import OrderingSession, RestaurantNotFound
from app.application.state import View
from app.core.config import settings
from app.domain.errors import (
    CheckoutError,
    EmptyCartError,
    PersistenceRejected,
    PersistenceTimeout,
    ProcessingFailure,
    ProcessingTimeout,
    SubmissionInProgress,
)
from app.domain.models import MenuItem, OrderDetails

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ProcessingTimeout: 504,
    PersistenceTimeout: 504,
    ProcessingFailure: 502,
    PersistenceRejected: 502,
    SubmissionInProgress: 409,
    EmptyCartError: 400,
}


class QuantityUpdate(BaseModel):
    quantity: int


def get_session(request: Request) -> OrderingSession:
    return request.app.state.session


def error_response(error: CheckoutError) -> JSONResponse:
    status = ERROR_STATUS.get(type(error), 500)
    return JSONResponse(status_code=status, content={"error": error.kind, "message": error.message})


def serialize_state(session: OrderingSession) -> dict:
    state = session.state
    alert = state.alert if state.alert and state.alert.visible(settings.ALERT_TTL_SECONDS) else None
    return {
        "view": state.view.value,
        "alert": {"message": alert.message, "type": alert.type.value} if alert else None,
        "restaurants": [r.to_wire() for r in state.restaurants],
        "selectedRestaurant": state.selected_restaurant.to_wire() if state.selected_restaurant else None,
        "menuItems": [item.to_wire() for item in state.menu_items],
        "menuLoading": state.menu_loading,
        "cart": [item.to_wire() for item in session.cart.items],
        "cartItemCount": session.cart.count,
        "subtotal": session.cart.subtotal,
        "shippingFee": session.orchestrator.shipping_fee,
        "confirmedOrder": state.confirmed_order.to_wire() if state.confirmed_order else None,
        "isSubmitting": state.is_submitting,
    }


@router.get("/state")
def read_state(request: Request):
    return serialize_state(get_session(request))


@router.delete("/alert")
def dismiss_alert(request: Request):
    session = get_session(request)
    session.dismiss_alert()
    return serialize_state(session)


# --- BROWSING ---

@router.get("/restaurants")
async def list_restaurants(request: Request):
    session = get_session(request)
    if not session.state.restaurants:
        await session.load_restaurants()
    return [r.to_wire() for r in session.state.restaurants]


@router.post("/restaurants/{restaurant_id}/select")
async def select_restaurant(restaurant_id: str, request: Request):
    session = get_session(request)
    try:
        menu = await session.select_restaurant(restaurant_id)
    except RestaurantNotFound:
        raise HTTPException(status_code=404, detail=f"Unknown restaurant: {restaurant_id}")
    return [item.to_wire() for item in menu]


@router.post("/view/{view}")
def navigate(view: View, request: Request):
    session = get_session(request)
    session.navigate(view)
    return serialize_state(session)


@router.post("/back")
def go_back(request: Request):
    session = get_session(request)
    session.go_back()
    return serialize_state(session)


# --- CART ---

@router.post("/cart/items", status_code=201)
def add_to_cart(item: MenuItem, request: Request):
    session = get_session(request)
    session.add_to_cart(item)
    return serialize_state(session)


@router.patch("/cart/items/{item_id}")
def update_quantity(item_id: str, update: QuantityUpdate, request: Request):
    session = get_session(request)
    session.update_quantity(item_id, update.quantity)
    return serialize_state(session)


@router.delete("/cart/items/{item_id}")
def remove_from_cart(item_id: str, request: Request):
    session = get_session(request)
    session.remove_from_cart(item_id)
    return serialize_state(session)


# --- CHECKOUT ---

@router.post("/checkout", status_code=201)
async def submit_order(details: OrderDetails, request: Request):
    session = get_session(request)
    try:
        result = await session.submit_order(details)
    except CheckoutError as e:
        logger.warning(f"⚠️ Checkout refused: {e.message}")
        return error_response(e)

    if not result.ok:
        return error_response(result.error)
    return result.order.to_wire()


@router.post("/orders/new")
def new_order(request: Request):
    session = get_session(request)
    session.new_order()
    return serialize_state(session)
