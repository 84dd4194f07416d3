from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.services.opensearch import reset_client

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(_: FastAPI):
    try:
        yield
    finally:
        # Release pooled indexer connections on shutdown.
        reset_client()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
# The dashboard frontend is served from a different origin.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(api_router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=3000)
