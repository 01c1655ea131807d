import logging
from typing import List

from pydantic import TypeAdapter

from app.core.config import Settings
from app.domain.fallback_data import FALLBACK_RESTAURANTS, fallback_menu
from app.domain.models import MenuItem, Restaurant
from app.domain.prompts import MENU_PROMPT, RESTAURANTS_PROMPT
from app.infrastructure.llm import build_llm, generate_json
from app.interfaces.ICatalogProvider import ICatalogProvider

logger = logging.getLogger(__name__)

_restaurants = TypeAdapter(List[Restaurant])
_menu = TypeAdapter(List[MenuItem])


class StaticCatalogProvider(ICatalogProvider):
    async def list_restaurants(self) -> List[Restaurant]:
        return list(FALLBACK_RESTAURANTS)

    async def menu_for(self, restaurant: Restaurant) -> List[MenuItem]:
        return fallback_menu(restaurant.name, restaurant.category)


class GeneratedCatalogProvider(ICatalogProvider):
    """Asks the LLM for restaurants and menus; any failure falls back to static data."""

    def __init__(self, llm, fallback: ICatalogProvider | None = None):
        self.llm = llm
        self.fallback = fallback or StaticCatalogProvider()

    async def list_restaurants(self) -> List[Restaurant]:
        try:
            data = await generate_json(self.llm, RESTAURANTS_PROMPT.format())
            restaurants = _restaurants.validate_python(data.get("restaurants"))
            if not restaurants:
                raise ValueError("empty restaurant list")
            return restaurants
        except Exception as e:
            logger.error(f"❌ Restaurant generation failed: {e}")
            return await self.fallback.list_restaurants()

    async def menu_for(self, restaurant: Restaurant) -> List[MenuItem]:
        try:
            data = await generate_json(self.llm, MENU_PROMPT.format(restaurant_name=restaurant.name))
            menu = _menu.validate_python(data.get("menu"))
            if not menu:
                raise ValueError("empty menu")
            if len({item.id for item in menu}) != len(menu):
                raise ValueError("duplicate menu item ids")
            return menu
        except Exception as e:
            logger.error(f"❌ Menu generation for {restaurant.name} failed: {e}")
            return await self.fallback.menu_for(restaurant)


def build_catalog_provider(settings: Settings, llm=None) -> ICatalogProvider:
    llm = llm or build_llm(settings)
    if llm is None:
        return StaticCatalogProvider()
    return GeneratedCatalogProvider(llm)
