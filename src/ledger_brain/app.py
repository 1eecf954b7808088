from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from ledger_brain.api.routes import analyze, meta
from ledger_brain.core import settings
from ledger_brain.logger import get_logger, setup_logging
from ledger_brain.manager import ParserService

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        app.state.service = ParserService()

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Ledger Brain", lifespan=lifespan)

    app.include_router(analyze.router)
    app.include_router(meta.router)

    return app


app = create_app()
