import pytest

from app.application import state as transitions
from app.application.state import Alert, AlertType, AppState, View
from app.domain.errors import EmptyCartError, SubmissionInProgress
from app.domain.fallback_data import FALLBACK_RESTAURANTS

from conftest import FakeProcessor


def test_navigation_rules() -> None:
    state = AppState()
    assert transitions.navigate(state, View.CONFIRMATION) is state
    assert transitions.navigate(state, View.MENU).view is View.RESTAURANTS

    picked = transitions.select_restaurant(state, FALLBACK_RESTAURANTS[0])
    assert picked.view is View.MENU
    assert picked.menu_loading

    in_cart = transitions.navigate(picked, View.CART)
    assert transitions.go_back(in_cart).view is View.MENU
    assert transitions.go_back(transitions.navigate(in_cart, View.CHECKOUT)).view is View.CART
    assert transitions.go_back(transitions.navigate(state, View.CART)).view is View.RESTAURANTS


def test_transitions_do_not_mutate() -> None:
    state = AppState()
    transitions.show_alert(state, "hi")
    transitions.begin_submission(state)
    assert state.alert is None
    assert not state.is_submitting


def test_alert_expires() -> None:
    alert = Alert(message="x", type=AlertType.ERROR, created_at=100.0)
    assert alert.visible(3.0, now=102.9)
    assert not alert.visible(3.0, now=103.0)


@pytest.mark.asyncio
async def test_session_browse_and_cart(session) -> None:
    await session.load_restaurants()
    menu = await session.select_restaurant("1")
    assert session.state.view is View.MENU
    assert not session.state.menu_loading
    assert len(session.state.menu_items) == 6

    session.add_to_cart(menu[0])
    session.add_to_cart(menu[0])
    assert session.cart.count == 2
    assert session.state.alert.message == "經典漢堡 已加入購物車！"

    session.update_quantity(menu[0].id, 0)
    assert session.cart.is_empty()
    assert session.state.alert.type is AlertType.ERROR


@pytest.mark.asyncio
async def test_session_submit_and_new_order(session, details) -> None:
    await session.load_restaurants()
    menu = await session.select_restaurant("1")
    session.add_to_cart(menu[0])
    session.navigate(View.CHECKOUT)

    result = await session.submit_order(details)

    assert result.ok
    assert session.state.view is View.CONFIRMATION
    assert session.state.confirmed_order == result.order
    assert not session.state.is_submitting
    assert session.cart.is_empty()

    session.new_order()
    assert session.state.view is View.RESTAURANTS
    assert session.state.confirmed_order is None
    assert session.state.selected_restaurant is None


@pytest.mark.asyncio
async def test_session_refuses_empty_cart(session, details) -> None:
    with pytest.raises(EmptyCartError):
        await session.submit_order(details)


@pytest.mark.asyncio
async def test_in_flight_guard_is_opt_in(session, details, burger) -> None:
    import asyncio

    session.orchestrator.processor = FakeProcessor(delay=0.05)
    session.add_to_cart(burger)

    # default: a second submission is not deduplicated
    results = await asyncio.gather(session.submit_order(details), session.submit_order(details))
    assert [r.ok for r in results] == [True, True]

    session.reject_concurrent_submissions = True
    session.add_to_cart(burger)
    first = asyncio.ensure_future(session.submit_order(details))
    await asyncio.sleep(0)
    with pytest.raises(SubmissionInProgress):
        await session.submit_order(details)
    assert (await first).ok


@pytest.mark.asyncio
async def test_cancelled_submission_releases_guard(session, details, burger) -> None:
    import asyncio

    session.reject_concurrent_submissions = True
    session.orchestrator.processor = FakeProcessor(delay=1.0)
    session.add_to_cart(burger)

    pending = asyncio.ensure_future(session.submit_order(details))
    await asyncio.sleep(0.01)
    assert session.state.is_submitting
    pending.cancel()
    with pytest.raises(asyncio.CancelledError):
        await pending

    assert not session.state.is_submitting
    assert session.cart.count == 1
    assert session.state.confirmed_order is None

    session.orchestrator.processor = FakeProcessor()
    result = await session.submit_order(details)
    assert result.ok


@pytest.mark.asyncio
async def test_outcome_replayed_onto_latest_state(session, details, burger) -> None:
    import asyncio

    session.orchestrator.processor = FakeProcessor(delay=1.0)
    session.orchestrator.timeout = 0.05
    session.add_to_cart(burger)
    session.navigate(View.CHECKOUT)

    pending = asyncio.ensure_future(session.submit_order(details))
    await asyncio.sleep(0)
    session.navigate(View.CART)
    result = await pending

    # the orchestrator's state is relative to the state it was handed
    assert result.state.view is View.CHECKOUT
    assert session.state.view is View.CART
    assert session.state.alert.message == result.error.message
    assert not session.state.is_submitting
