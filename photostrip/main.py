from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from photostrip.config import settings, configure_logging
from photostrip.exceptions import PhotostripError
from photostrip.api.routes import session, photos, strip

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        debug=settings.debug
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(session.router, prefix="/api")
    app.include_router(photos.router, prefix="/api")
    app.include_router(strip.router, prefix="/api")

    @app.exception_handler(PhotostripError)
    async def photostrip_error_handler(request: Request, exc: PhotostripError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        content = {"error": exc.error_code, "detail": exc.message}
        if getattr(exc, "index", None) is not None:
            content["index"] = exc.index
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
