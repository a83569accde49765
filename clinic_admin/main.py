"""
Main FastAPI application
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from clinic_admin.config import settings
from clinic_admin.database import init_db, close_db
from clinic_admin.api.router import api_router
from clinic_admin.core.middleware import LoggingMiddleware, ErrorHandlingMiddleware
from clinic_admin.core.exceptions import ClinicException

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events

    Creates tables and applies column migrations on startup,
    disposes the engine on shutdown
    """
    logger.info(f"Starting {settings.APP_NAME}...")

    try:
        migrated = await init_db()
        if migrated:
            logger.info(f"Added columns: {', '.join(migrated)}")
        logger.info("Database initialized")

        logger.info("")
        logger.info("=" * 80)
        logger.info("🚀 " + "CLINIC ADMIN API - SERVER STARTED".center(76) + " 🚀")
        logger.info("=" * 80)
        logger.info(f"📋 App Name:      {settings.APP_NAME}")
        logger.info(f"🏷️  Version:       {settings.APP_VERSION}")
        logger.info(f"🌍 Environment:   {settings.ENVIRONMENT}")
        logger.info(f"🐛 Debug Mode:    {settings.DEBUG}")
        logger.info("─" * 80)
        logger.info(f"🌐 Server URL:    http://{settings.HOST}:{settings.PORT}")
        logger.info(f"📚 API Docs:      http://{settings.HOST}:{settings.PORT}/docs")
        logger.info(f"💚 Health Check:  http://{settings.HOST}:{settings.PORT}/health")
        logger.info("─" * 80)
        logger.info(f"🗄️  Journal Mode:  {'WAL' if settings.SQLITE_WAL else 'default'}")
        logger.info(f"🔒 CORS Origins:  {', '.join(settings.cors_origins_list) if settings.cors_origins_list != ['*'] else 'All origins (*)'}")
        logger.info(f"📊 Log Level:     {settings.LOG_LEVEL}")
        logger.info("=" * 80)
        logger.info("✅ Server is ready to accept connections!")
        logger.info("=" * 80)
        logger.info("")

    except Exception as e:
        logger.error(f"Startup error: {e}")
        raise

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Backend API for clinic administration: patients, doctors, staff onboarding and complaints",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(ErrorHandlingMiddleware)


# Exception handlers
@app.exception_handler(ClinicException)
async def clinic_exception_handler(request: Request, exc: ClinicException):
    """Handle custom application exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.message,
            "status_code": exc.status_code,
            "path": str(request.url.path),
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors"""
    errors = [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation error",
            "status_code": 422,
            "path": str(request.url.path),
            "details": errors,
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "status_code": 500,
            "path": str(request.url.path),
            "message": str(exc) if settings.DEBUG else "An unexpected error occurred",
        },
    )


app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Returns application status and version"""
    return {
        "status": "healthy",
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clinic_admin.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
