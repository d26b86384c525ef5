from estatehub.routers.properties import router as properties_router
from estatehub.routers.enquiries import router as enquiries_router
from estatehub.routers.agencies import router as agencies_router
from estatehub.routers.dashboard import router as dashboard_router
from estatehub.routers.users import router as users_router

__all__ = ["properties_router", "enquiries_router", "agencies_router", "dashboard_router", "users_router"]
