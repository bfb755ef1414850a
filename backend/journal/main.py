"""
FastAPI entrypoint for the Journal backend application.
"""
import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from journal.core.config import settings
from journal.core.exceptions import JournalError
from journal.api.router import api_router
from journal.db.session import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.APP_NAME} started (content encryption {'on' if settings.aes_key else 'off'})")
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Backend API for a personal journal with encrypted diaries",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded images are served from UPLOAD_DIR at /uploads
upload_dir = settings.UPLOAD_DIR
if os.path.exists(upload_dir):
    app.mount("/uploads", StaticFiles(directory=upload_dir), name="uploads")


@app.exception_handler(JournalError)
async def journal_error_handler(request: Request, exc: JournalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": f"{settings.APP_NAME} is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
