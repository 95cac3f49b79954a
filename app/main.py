import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import settings
from .core.exceptions import ApiEndpointNotFoundException
from .core.storage import get_store

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Storage is opened (and seeded) once so the data layer is ready for the pages
    app.state.store = get_store()
    logger.info(f"Storage ready: backend={settings.STORAGE_BACKEND}")
    yield


# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)


@app.exception_handler(ApiEndpointNotFoundException)
async def api_not_found_handler(request: Request, exc: ApiEndpointNotFoundException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})


# Root endpoint
@app.get("/")
def read_root():
    """Hello World endpoint"""
    return {
        "message": "Welcome to DevCommunity",
        "version": settings.API_VERSION,
        "status": "running"
    }

# Health check endpoint
@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "ok", "message": "Server is running"}

# Catch-all for API routes; data lives in the key-value store instead
@app.api_route(
    "/api/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    include_in_schema=False,
)
def api_not_found(path: str):
    raise ApiEndpointNotFoundException()
