from fastapi import APIRouter

from .user import router as user_router
from .interests import router as interests_router
from .onboard import router as onboard_router

router = APIRouter(prefix="/users", tags=["User"])

router.include_router(user_router)
router.include_router(interests_router)
router.include_router(onboard_router)

__all__=["router"]
