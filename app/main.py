from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from app.api.subscriptions import router as subscriptions_router
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.core.logging import configure_logging
from app.core.migrations import run_migrations


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.run_migrations:
        run_migrations()
    yield


def create_app() -> FastAPI:
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    register_error_handlers(app)

    app.include_router(subscriptions_router, prefix="/api/v1/subscriptions", tags=["subscriptions"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    run()
