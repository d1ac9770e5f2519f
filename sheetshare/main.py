import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sheetshare.api import root_router
from sheetshare.configs import configs
from sheetshare.core.logger import LOGGING_CONFIG
from sheetshare.infra.database import create_db_and_tables, dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Create database tables
    await create_db_and_tables()
    logger.info(f"Database engine: {configs.Database.Engine}")

    yield

    # Graceful shutdown: release pooled connections
    await dispose_engine()


app = FastAPI(
    title="SheetShare FastAPI Service",
    description="Worksheets defined by administrators and filled in by agents",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/sheetshare/api/docs",
    redoc_url="/sheetshare/api/redoc",
    openapi_url="/sheetshare/api/openapi.json",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)


if __name__ == "__main__":
    uvicorn.run(
        "sheetshare.main:app",
        host=configs.Host,
        port=configs.Port,
        log_config=LOGGING_CONFIG,
        reload=configs.Debug,
        reload_excludes=["migrations", "tests"],
    )
