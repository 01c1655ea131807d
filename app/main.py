import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import Settings, settings
from app.core.logging_config import configure_logging

# Infrastructure & Application Imports
from app.application.cart_store import CartStore
from app.application.orchestrator import CheckoutOrchestrator
from app.application.session import OrderingSession
from app.infrastructure.cart_storage import CartStorage
from app.infrastructure.catalog_service import build_catalog_provider
from app.infrastructure.llm import build_llm
from app.infrastructure.order_processor import build_order_processor
from app.infrastructure.sheet_ledger import build_order_ledger
from app.interfaces import web

logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# COMPOSITION ROOT
# ---------------------------------------------------------
def build_session(config: Settings = settings) -> OrderingSession:
    llm = build_llm(config)
    cart = CartStore(CartStorage(redis_url=config.REDIS_URL, key=config.CART_STORAGE_KEY))
    orchestrator = CheckoutOrchestrator(
        processor=build_order_processor(config, llm=llm),
        ledger=build_order_ledger(config),
        cart=cart,
        shipping_fee=config.SHIPPING_FEE,
        timeout=config.SUBMIT_TIMEOUT_SECONDS,
    )
    return OrderingSession(
        catalog=build_catalog_provider(config, llm=llm),
        cart=cart,
        orchestrator=orchestrator,
        reject_concurrent_submissions=config.REJECT_CONCURRENT_SUBMISSIONS,
    )


def create_app(session: OrderingSession) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await session.load_restaurants()
        yield
        ledger = session.orchestrator.ledger
        if hasattr(ledger, "aclose"):
            await ledger.aclose()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.session = session
    app.include_router(web.router)

    @app.get("/")
    def health_check():
        return {"status": "active", "system": "Food Delivery Checkout"}

    return app


configure_logging()
app = create_app(build_session())
