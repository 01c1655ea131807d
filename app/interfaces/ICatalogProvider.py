from abc import ABC, abstractmethod
from typing import List

from app.domain.models import MenuItem, Restaurant

class ICatalogProvider(ABC):
    @abstractmethod
    async def list_restaurants(self) -> List[Restaurant]:
        pass

    @abstractmethod
    async def menu_for(self, restaurant: Restaurant) -> List[MenuItem]:
        pass
