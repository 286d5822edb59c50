"""
Catering Service - CRUD backend for catering facilities, locations, tags and employees
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from .config import settings
from .db import init_db
from .error_handlers import register_exception_handlers
from .routes import auth, employees, facilities, health, locations, tags
from .utils.logging_config import configure_logging

configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialize database on startup"""
    init_db()
    logger.info("Catering service started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Catering Service",
    description="Directory of catering facilities, their locations, tags and employees",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(health.router)
app.include_router(facilities.router)
app.include_router(locations.router)
app.include_router(tags.router)
app.include_router(employees.router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "Catering Service",
        "version": "1.0.0",
        "status": "running"
    }
