from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException
import time
import logging
from contact_relay.api.v1.router import api_router
from contact_relay.api.v1.contact import render_reply
from contact_relay.config.settings import Settings, get_settings
from contact_relay.exceptions import MethodNotAllowed
from contact_relay.services.contact_service import error_reply

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.description,
    version=settings.version,
    openapi_url=f"{settings.api_v1_str}/openapi.json",
    docs_url=f"{settings.api_v1_str}/docs",
    redoc_url=f"{settings.api_v1_str}/redoc",
    debug=settings.is_development,
    redirect_slashes=False
)


def current_settings() -> Settings:
    """Settings as the routes see them, dependency overrides included"""
    resolve = app.dependency_overrides.get(get_settings, get_settings)
    try:
        return resolve()
    except Exception as exc:
        logger.error(f"Could not resolve settings, using startup settings: {exc}")
        return settings


@app.exception_handler(StarletteHTTPException)
async def contact_http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Method errors raised by the router get the same body and CORS headers as the contact endpoint"""
    if exc.status_code == 405:
        logger.warning(f"Rejected {request.method} {request.url.path}")
        return render_reply(error_reply(MethodNotAllowed(), current_settings()))
    return await http_exception_handler(request, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Global exception: {exc}")
    return render_reply(error_reply(exc, current_settings()))


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.app_name,
        "version": settings.version,
        "docs": f"{settings.api_v1_str}/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "timestamp": time.time()}


# Include API router
app.include_router(api_router, prefix=settings.api_v1_str)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "contact_relay.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development
    )
