import logging
from importlib.metadata import version as pkg_version

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recouple.api import draft_router, health_router, score_router
from recouple.config import settings
from recouple.models.failure import KnownError, create_known_failure, create_unknown_failure

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    version=pkg_version("recouple"),
)

app.include_router(draft_router)
app.include_router(health_router)
app.include_router(score_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Static client served from anywhere
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KnownError)
async def known_error_handler(_request: Request, exc: KnownError) -> JSONResponse:
    """Known failures carry their own status code and explanation."""
    logger.info("Known failure (%s): %s", exc.kind.value, exc.message)
    response = create_known_failure(exc)
    return JSONResponse(status_code=exc.status_code, content=response.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unknown_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Anything else is classified as an unknown failure, never a raw 500."""
    logger.exception("Unhandled error: %s", exc)
    response = create_unknown_failure(exc, include_type=settings.debug)
    return JSONResponse(status_code=500, content=response.model_dump(mode="json"))
