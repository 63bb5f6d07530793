import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slug_app.config import settings
from slug_app.exceptions import ExhaustedError, NotFoundError, ValidationError
from slug_app.logging_config import setup_logging
from slug_app.api.v1 import urls, redirect

setup_logging(settings.log_level)
logger = logging.getLogger("slug_app.main")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with per-slug visit analytics",
    debug=settings.debug
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"errors": [exc.reason]},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": exc.message},
    )


@app.exception_handler(ExhaustedError)
async def exhausted_handler(request: Request, exc: ExhaustedError):
    logger.critical("Slug space exhausted: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(redirect.router)
