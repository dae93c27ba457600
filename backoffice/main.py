# backoffice/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from backoffice.api import include_routers
from backoffice.data.database import init_db
from backoffice.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ready")
    yield


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Back-office Order Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    return include_routers(app)


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
