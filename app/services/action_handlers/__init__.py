from app.services.action_handlers.base import ActionContext, ActionHandler
from app.services.action_handlers.canned import HumanSupportHandler, StartOrderHandler
from app.services.action_handlers.companies import (
    NearbyRestaurantsHandler,
    OperatingHoursHandler,
)
from app.services.action_handlers.cuisine import (
    CuisineTypesHandler,
    RestaurantsByTagHandler,
)
from app.services.action_handlers.menu import MenuCategoriesHandler, MenuItemsHandler
from app.services.action_handlers.orders import CancelOrderHandler, OrderStatusHandler
from app.services.action_handlers.promotions import CouponsHandler, PromotionsHandler

DEFAULT_HANDLERS: tuple[type[ActionHandler], ...] = (
    NearbyRestaurantsHandler,
    MenuCategoriesHandler,
    MenuItemsHandler,
    OperatingHoursHandler,
    StartOrderHandler,
    PromotionsHandler,
    CouponsHandler,
    CuisineTypesHandler,
    RestaurantsByTagHandler,
    OrderStatusHandler,
    CancelOrderHandler,
    HumanSupportHandler,
)

__all__ = [
    "ActionContext",
    "ActionHandler",
    "DEFAULT_HANDLERS",
]
