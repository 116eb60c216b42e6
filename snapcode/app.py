# FILE: snapcode/app.py
"""
FastAPI application entry point for snapcode
Screenshot -> React component generation with sanitize/repair pipeline
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from snapcode import __version__
from snapcode.config import get_settings
from snapcode.errors import SnapcodeError
from snapcode.middleware.body_limit import BodySizeLimitMiddleware
from snapcode.routes import generate, health, models, provider_io, upload

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown"""
    logger.info(f"Starting snapcode backend v{__version__}")

    if not settings.gemini_api_key:
        # Generation requests will fail fast with a configuration error
        logger.warning("GEMINI_API_KEY not set: code generation is unavailable")
    else:
        logger.info(
            f"Default model: {settings.gemini_model}, repair_attempts={settings.repair_attempts}"
        )

    yield

    logger.info("Shutting down snapcode backend")


app = FastAPI(
    title="snapcode API",
    description="Turn screenshots, wireframes and sketches into React components",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Body size limit
app.add_middleware(BodySizeLimitMiddleware, max_size=settings.upload_size_limit_mb * 1024 * 1024)


# Exception handlers
@app.exception_handler(SnapcodeError)
async def snapcode_exception_handler(request: Request, exc: SnapcodeError):
    logger.error(f"[{request.url.path}] {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": type(exc).__name__, "detail": str(exc)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(upload.router, prefix="/api", tags=["upload"])
app.include_router(generate.router, prefix="/api", tags=["generate"])
app.include_router(models.router, prefix="/api", tags=["models"])
app.include_router(provider_io.router, prefix="/provider-io", tags=["provider-io"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "snapcode",
        "version": __version__,
        "status": "active"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "snapcode.app:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.environment == "development"
    )
