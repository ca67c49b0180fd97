from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from program_builder.api.calendar import router as calendar_router
from program_builder.api.programs import router as programs_router
from program_builder.api.segments import router as segments_router
from program_builder.config.settings import settings
from program_builder.core.logger import setup_logger
from program_builder.db.session import init_db

setup_logger(settings)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create missing tables on startup.

    Note: FastAPI requires async for lifespan context manager,
    even if no await operations are used.
    """
    init_db()
    logger.info("Training program builder started")
    yield
    logger.info("Training program builder stopped")


def create_app() -> FastAPI:
    app = FastAPI(title="Training Program Builder", lifespan=lifespan)
    app.include_router(programs_router)
    app.include_router(calendar_router)
    app.include_router(segments_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    server_host = os.getenv("SERVER_HOST", "127.0.0.1")
    uvicorn.run(app, host=server_host, port=int(os.getenv("PORT", "8000")))
