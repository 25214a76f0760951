from recouple.api.draft import router as draft_router
from recouple.api.health import router as health_router
from recouple.api.score import router as score_router

__all__ = [
    "draft_router",
    "health_router",
    "score_router",
]
