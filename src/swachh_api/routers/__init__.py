from swachh_api.routers.citizens import router as citizens_router
from swachh_api.routers.employees import router as employees_router

__all__ = [
    "citizens_router",
    "employees_router",
]
