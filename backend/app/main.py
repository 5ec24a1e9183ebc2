"""
Scheme Search Agent — FastAPI Application Entry Point
Searches MyScheme.gov.in with a headless browser, one browser per request.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.utils.logger import logger, set_log_level


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()
    set_log_level(settings.log_level)
    logger.info(f"🚀 Scheme Search Agent starting in {settings.app_env} mode...")
    logger.info(f"🎯 Target: {settings.myscheme_search_url}")
    logger.info(f"🕶️ Headless browser: {'ON' if settings.browser_headless else 'OFF'}")
    logger.info(f"📸 Error screenshots: {settings.screenshot_dir}/")

    yield

    logger.info("👋 Scheme Search Agent shutting down...")


app = FastAPI(
    title="Scheme Search Agent",
    description="Live government scheme search on MyScheme.gov.in via headless browser automation.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Global Error Handler ---
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "details": str(exc),
            "suggestion": "Please try again later",
        },
    )


# --- Health Check ---
@app.get("/", tags=["Health"])
async def root():
    return {
        "status": "healthy",
        "service": "Scheme Search Agent",
        "version": "1.0.0",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# --- Register Routers ---
from app.api import schemes

app.include_router(schemes.router, tags=["Schemes"])


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info(f"✅ Agent running at http://{settings.app_host}:{settings.app_port}")
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_debug,
    )
