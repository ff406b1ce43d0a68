"""
Annual Meeting Seating & Photo Voting - FastAPI Backend
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
import uvicorn

from app.core.config import settings
from app.core.db import engine, Base, SessionLocal
from app.core.errors import AppError
from app.api import routes_photos, routes_public, routes_seating
from app.services.seating_service import SeatingService
from app.utils.responses import app_error_response

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")

    db = SessionLocal()
    try:
        if SeatingService.initialize_defaults(db):
            logger.info("Default seating layout written")
    except AppError as e:
        logger.error(f"Failed to initialize data: {e}")
    finally:
        db.close()

    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Annual Meeting Seating System",
    description="Seat lookup, layout editing and photo voting for the annual meeting",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return app_error_response(exc)

# Mount static files
os.makedirs("static", exist_ok=True)
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount("/static", StaticFiles(directory="static"), name="static")
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Setup templates
templates = Jinja2Templates(directory="templates")

# Include routers
app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_seating.router, prefix="/api", tags=["seating"])
app.include_router(routes_photos.router, prefix="/api", tags=["photos"])

@app.get("/", response_class=HTMLResponse)
async def root(request: Request):
    """Seat lookup page"""
    return templates.TemplateResponse(request, "lookup.html", {
        "title": "年会座位查询"
    })

@app.get("/upload", response_class=HTMLResponse)
async def upload_page(request: Request):
    """Photo upload page opened from the QR code"""
    return templates.TemplateResponse(request, "upload.html", {
        "title": "上传照片",
        "max_upload_mb": settings.MAX_UPLOAD_SIZE // (1024 * 1024)
    })

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
