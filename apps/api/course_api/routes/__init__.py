"""Route modules."""

from .courses import router as courses_router
from .root import router as root_router
from .users import router as users_router

__all__ = ["courses_router", "root_router", "users_router"]
