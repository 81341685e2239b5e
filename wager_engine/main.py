"""
Wager Engine HTTP entry point.
A thin FastAPI adapter over WagerEngine; balances stay with the caller.
"""

from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import ORJSONResponse

from wager_engine.config import settings
from wager_engine.core.engine import WagerEngine, create_engine
from wager_engine.core.exceptions import WagerValidationError
from wager_engine.core.logger import get_logger, init_logging
from wager_engine.routers import api

# Initialize logging first
init_logging(
    level=settings.logging.level,
    log_to_file=settings.logging.log_to_file,
    formatter=settings.logging.formatter,
    log_file_path=settings.paths.get_log_path(),
)
logger = get_logger("main")


async def validation_error_handler(request: Request, exc: WagerValidationError):
    return ORJSONResponse(status_code=400, content=exc.to_dict())


def create_app(engine: Optional[WagerEngine] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.server.name,
        docs_url="/docs" if settings.server.debug else None,
        redoc_url=None,
        default_response_class=ORJSONResponse,
    )

    app.state.engine = engine or create_engine(settings)
    app.add_exception_handler(WagerValidationError, validation_error_handler)

    app.include_router(api.router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()

logger.info(f"Application '{settings.server.name}' initialized")


if __name__ == "__main__":
    logger.info(f"Starting server on {settings.server.host}:{settings.server.port}")
    uvicorn.run(
        "wager_engine.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.debug,
    )
