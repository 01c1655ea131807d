import logging

from app.application import state as transitions
from app.application.cart_store import CartStore
from app.application.orchestrator import CheckoutOrchestrator, SubmissionResult
from app.application.state import AlertType, AppState, View
from app.domain.errors import EmptyCartError, SubmissionInProgress
from app.domain.models import MenuItem, OrderDetails, Restaurant
from app.interfaces.ICatalogProvider import ICatalogProvider

logger = logging.getLogger(__name__)


class RestaurantNotFound(LookupError):
    pass


class OrderingSession:
    """Drives the five screens of one customer's ordering flow."""

    def __init__(
        self,
        catalog: ICatalogProvider,
        cart: CartStore,
        orchestrator: CheckoutOrchestrator,
        reject_concurrent_submissions: bool = False,
    ):
        self.catalog = catalog
        self.cart = cart
        self.orchestrator = orchestrator
        self.reject_concurrent_submissions = reject_concurrent_submissions
        self.state = AppState()

    # --- BROWSING ---

    async def load_restaurants(self) -> list[Restaurant]:
        restaurants = await self.catalog.list_restaurants()
        self.state = transitions.restaurants_loaded(self.state, restaurants)
        logger.info(f"✅ Loaded {len(restaurants)} restaurants")
        return list(restaurants)

    def find_restaurant(self, restaurant_id: str) -> Restaurant:
        for restaurant in self.state.restaurants:
            if restaurant.id == restaurant_id:
                return restaurant
        raise RestaurantNotFound(restaurant_id)

    async def select_restaurant(self, restaurant_id: str) -> list[MenuItem]:
        restaurant = self.find_restaurant(restaurant_id)
        self.state = transitions.select_restaurant(self.state, restaurant)
        menu = await self.catalog.menu_for(restaurant)
        # ignore a late menu if the user moved on to another restaurant
        if self.state.selected_restaurant is restaurant:
            self.state = transitions.menu_loaded(self.state, menu)
        return list(menu)

    def navigate(self, view: View) -> AppState:
        self.state = transitions.navigate(self.state, view)
        return self.state

    def go_back(self) -> AppState:
        self.state = transitions.go_back(self.state)
        return self.state

    def dismiss_alert(self):
        self.state = transitions.dismiss_alert(self.state)

    # --- CART ---

    def add_to_cart(self, item: MenuItem):
        entry = self.cart.add(item)
        self.state = transitions.show_alert(self.state, f"{item.name} 已加入購物車！")
        return entry

    def update_quantity(self, item_id: str, quantity: int):
        if quantity <= 0:
            self.remove_from_cart(item_id)
            return
        self.cart.set_quantity(item_id, quantity)

    def remove_from_cart(self, item_id: str):
        removed = self.cart.get(item_id)
        self.cart.remove(item_id)
        if removed:
            self.state = transitions.show_alert(self.state, f"{removed.name} 已從購物車移除。", AlertType.ERROR)

    # --- CHECKOUT ---

    async def submit_order(self, details: OrderDetails) -> SubmissionResult:
        if self.cart.is_empty():
            raise EmptyCartError()
        if self.reject_concurrent_submissions and self.state.is_submitting:
            raise SubmissionInProgress()

        self.state = transitions.begin_submission(self.state)
        try:
            result = await self.orchestrator.submit_order(self.state, details)
        except BaseException:
            # cancelled mid-flight: release the in-flight flag, leave everything else
            self.state = transitions.end_submission(self.state)
            raise
        # replay the outcome on the latest state so navigation made while waiting survives
        if result.ok:
            self.state = transitions.commit_order(self.state, result.order)
        else:
            self.state = transitions.fail_submission(self.state, result.error.message)
        return result

    def new_order(self) -> AppState:
        self.state = transitions.start_new_order(self.state)
        return self.state
