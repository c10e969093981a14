"""
Tubely - video hosting API
Main FastAPI application entry point
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tubely.api.endpoints import admin
from tubely.api.router import api_router
from tubely.core.config import settings
from tubely.core.database import init_db

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    os.makedirs(settings.ASSETS_ROOT, exist_ok=True)
    init_db()
    logger.info("Serving on port %s (thumbnail storage: %s)", settings.PORT, settings.THUMBNAIL_STORAGE)
    yield


app = FastAPI(
    title="Tubely",
    description="Video hosting API",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(api_router, prefix="/api")
app.include_router(admin.router, prefix="/admin", tags=["admin"])

# Disk thumbnails; the directory is created on startup
app.mount("/assets", StaticFiles(directory=settings.ASSETS_ROOT, check_dir=False), name="assets")


@app.get("/")
async def root():
    return {"message": "Welcome to Tubely"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
