import asyncio
import logging
from dataclasses import dataclass
from enum import Enum

from app.application import state as transitions
from app.application.cart_store import CartStore
from app.application.state import AppState
from app.domain import cart as cart_rules
from app.domain.errors import (
    CheckoutError,
    PersistenceRejected,
    PersistenceTimeout,
    ProcessingFailure,
    ProcessingTimeout,
    UnknownFailure,
)
from app.domain.models import ConfirmedOrder, OrderDetails, ProcessedOrder
from app.interfaces.IOrderLedger import IOrderLedger
from app.interfaces.IOrderProcessor import IOrderProcessor

logger = logging.getLogger(__name__)

# --- CONFIG ---
SHIPPING_FEE = 30
TIMEOUT_SECONDS = 15.0


class Phase(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    PERSISTING = "persisting"
    COMMITTED = "committed"
    FAILED = "failed"


@dataclass(frozen=True)
class SubmissionResult:
    # derived from the state passed to submit_order, not from whatever the
    # caller holds after the await; callers replay the outcome onto their own state
    state: AppState
    phase: Phase
    order: ConfirmedOrder | None = None
    error: CheckoutError | None = None
    failed_during: Phase | None = None

    @property
    def ok(self) -> bool:
        return self.phase is Phase.COMMITTED


async def race_with_timeout(awaitable, timeout: float, on_timeout: type[CheckoutError]):
    """First of (call, timer) to settle wins; the call is cancelled if the timer wins.

    Cancelling only stops waiting here. A request the remote side already
    received may still be handled there with nobody observing the result.
    """
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        task.cancel()
        raise
    # only the timer decides a timeout; a TimeoutError raised by the call itself propagates
    if task not in done:
        task.cancel()
        raise on_timeout()
    return task.result()


def build_confirmed_order(
    details: OrderDetails,
    processed: ProcessedOrder,
    cart: cart_rules.Cart,
    shipping_fee: float,
) -> ConfirmedOrder:
    subtotal = cart_rules.subtotal(cart)
    return ConfirmedOrder(
        **details.model_dump(),
        order_number=processed.order_number,
        estimated_delivery_time=processed.estimated_delivery_time,
        items=cart_rules.order_lines(cart),
        subtotal=subtotal,
        shipping_fee=shipping_fee,
        total=subtotal + shipping_fee,
    )


class CheckoutOrchestrator:
    """Processing -> persistence -> commit, all or nothing.

    The cart is cleared and the confirmation view entered only when both
    remote calls succeed. Every terminal outcome sets exactly one alert.
    """

    def __init__(
        self,
        processor: IOrderProcessor,
        ledger: IOrderLedger,
        cart: CartStore,
        shipping_fee: float = SHIPPING_FEE,
        timeout: float = TIMEOUT_SECONDS,
    ):
        self.processor = processor
        self.ledger = ledger
        self.cart = cart
        self.shipping_fee = shipping_fee
        self.timeout = timeout

    async def submit_order(self, state: AppState, details: OrderDetails) -> SubmissionResult:
        snapshot = self.cart.items
        phase = Phase.PROCESSING
        logger.info(f"[CHECKOUT] Submitting order for {details.customer_name} ({len(snapshot)} lines)")

        try:
            processed = await self._process(details, snapshot)

            order = build_confirmed_order(details, processed, snapshot, self.shipping_fee)

            phase = Phase.PERSISTING
            await self._persist(order)
        except CheckoutError as e:
            return self._fail(state, e, phase)
        except Exception as e:
            logger.exception(f"❌ Unexpected checkout error during {phase.value}")
            return self._fail(state, UnknownFailure(str(e) or None), phase)

        # --- COMMIT ---
        self.cart.clear()
        logger.info(f"✅ Order {order.order_number} confirmed, total {order.total}")
        return SubmissionResult(
            state=transitions.commit_order(state, order),
            phase=Phase.COMMITTED,
            order=order,
        )

    async def _process(self, details: OrderDetails, snapshot: cart_rules.Cart) -> ProcessedOrder:
        try:
            return await race_with_timeout(
                self.processor.process_order(details, list(snapshot)),
                self.timeout,
                ProcessingTimeout,
            )
        except CheckoutError:
            raise
        except Exception as e:
            raise ProcessingFailure(str(e) or None) from e

    async def _persist(self, order: ConfirmedOrder):
        result = await race_with_timeout(self.ledger.persist(order), self.timeout, PersistenceTimeout)
        if not result.success:
            raise PersistenceRejected(result.message)

    def _fail(self, state: AppState, error: CheckoutError, phase: Phase) -> SubmissionResult:
        logger.error(f"❌ Checkout failed during {phase.value}: [{error.kind}] {error.message}")
        return SubmissionResult(
            state=transitions.fail_submission(state, error.message),
            phase=Phase.FAILED,
            error=error,
            failed_during=phase,
        )
