"""Screen state of the ordering client.

`AppState` is immutable; every user or workflow event is a pure function
`(state, ...) -> new state`. The session object owns the current value.
"""
import time
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Tuple

from app.domain.models import ConfirmedOrder, MenuItem, Restaurant


class View(str, Enum):
    RESTAURANTS = "restaurants"
    MENU = "menu"
    CART = "cart"
    CHECKOUT = "checkout"
    CONFIRMATION = "confirmation"


class AlertType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Alert:
    message: str
    type: AlertType = AlertType.SUCCESS
    created_at: float = field(default_factory=time.monotonic)

    def visible(self, ttl: float, now: float | None = None) -> bool:
        now = time.monotonic() if now is None else now
        return now - self.created_at < ttl


@dataclass(frozen=True)
class AppState:
    view: View = View.RESTAURANTS
    restaurants: Tuple[Restaurant, ...] = ()
    selected_restaurant: Restaurant | None = None
    menu_items: Tuple[MenuItem, ...] = ()
    menu_loading: bool = False
    confirmed_order: ConfirmedOrder | None = None
    alert: Alert | None = None
    is_submitting: bool = False


def restaurants_loaded(state: AppState, restaurants) -> AppState:
    return replace(state, restaurants=tuple(restaurants))


def select_restaurant(state: AppState, restaurant: Restaurant) -> AppState:
    return replace(state, selected_restaurant=restaurant, view=View.MENU, menu_items=(), menu_loading=True)


def menu_loaded(state: AppState, menu_items) -> AppState:
    return replace(state, menu_items=tuple(menu_items), menu_loading=False)


def navigate(state: AppState, view: View) -> AppState:
    # the confirmation screen is only reachable by committing an order
    if view is View.CONFIRMATION and state.confirmed_order is None:
        return state
    if view is View.MENU and state.selected_restaurant is None:
        return replace(state, view=View.RESTAURANTS)
    return replace(state, view=view)


def go_back(state: AppState) -> AppState:
    if state.view is View.CHECKOUT:
        return replace(state, view=View.CART)
    if state.view is View.CART and state.selected_restaurant is not None:
        return replace(state, view=View.MENU)
    return replace(state, view=View.RESTAURANTS)


def show_alert(state: AppState, message: str, type: AlertType = AlertType.SUCCESS) -> AppState:
    return replace(state, alert=Alert(message=message, type=type))


def dismiss_alert(state: AppState) -> AppState:
    return replace(state, alert=None)


def begin_submission(state: AppState) -> AppState:
    return replace(state, is_submitting=True)


def end_submission(state: AppState) -> AppState:
    return replace(state, is_submitting=False)


def commit_order(state: AppState, order: ConfirmedOrder) -> AppState:
    committed = replace(state, confirmed_order=order, view=View.CONFIRMATION, is_submitting=False)
    return show_alert(committed, f"訂單 {order.order_number} 已成功送出！")


def fail_submission(state: AppState, message: str) -> AppState:
    return show_alert(replace(state, is_submitting=False), message, AlertType.ERROR)


def start_new_order(state: AppState) -> AppState:
    return replace(
        state,
        confirmed_order=None,
        selected_restaurant=None,
        menu_items=(),
        view=View.RESTAURANTS,
    )
