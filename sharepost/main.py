import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from sharepost.config import VERSION, Settings, get_settings
from sharepost.models.common import ErrorResponse
from sharepost.routers.dialog import USER_ID_HEADER, move_router, router as dialog_router

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


# --- Caller identity middleware ---

class UserIdentityMiddleware(BaseHTTPMiddleware):
    """Reject /api/v1 requests that Mattermost did not attribute to a user."""

    async def dispatch(self, request: Request, call_next):
        logger.debug("New request: host=%s path=%s method=%s", request.url.hostname, request.url.path, request.method)
        if request.url.path.startswith("/api/v1") and not request.headers.get(USER_ID_HEADER):
            return JSONResponse(
                status_code=401,
                content=ErrorResponse(error_code="unauthorized", message="not authorized").model_dump(),
            )
        return await call_next(request)


# --- FastAPI app ---

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    api = FastAPI(title="SharePost", version=VERSION)
    api.add_middleware(UserIdentityMiddleware)
    api.include_router(dialog_router)
    if settings.enable_move_route:
        api.include_router(move_router)

    @api.get("/", response_class=PlainTextResponse)
    def info() -> str:
        return f"Installed SharePost v{VERSION}"

    return api


api = create_app()


def run():
    settings = get_settings()
    uvicorn.run(
        "sharepost.main:api",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
