# tilbrowser/main.py
import logging

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .catalog import catalog_router
from .catalog.cache import CatalogCache
from .catalog.router import get_catalog_cache
from .config import HOST, LOG_LEVEL, PORT
from .pages import router as pages_router


logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def error_body_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Every API error is reported as {"error": "<message>"}.
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def create_app() -> FastAPI:
    app = FastAPI(
        title="TIL Browser",
        description=(
            "Browse a collection of 'Today I Learned' markdown notes: "
            "random picks, category filters and one rendered note per page."
        ),
        version=__version__,
    )
    app.add_exception_handler(StarletteHTTPException, error_body_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(catalog_router)

    @app.get("/healthz")
    def health_check(cache: CatalogCache = Depends(get_catalog_cache)):
        return {"status": "ok", "entries": len(cache.peek().entries)}

    # The page router ends with a catch-all path, so it goes last.
    app.include_router(pages_router)
    return app


app = create_app()


def run_server(host: str = HOST, port: int = PORT, reload: bool = False) -> None:
    logger.info("Serving TIL browser on http://%s:%s", host, port)
    uvicorn.run("tilbrowser.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    run_server()
