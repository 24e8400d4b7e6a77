from fastapi import APIRouter

from hybrid_selector.api.v1 import selection

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(selection.router)
