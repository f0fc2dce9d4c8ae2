from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .database import Database
from .errors import AnalysisError
from .logging_config import configure_logging
from .routers import resumes_router
from .services.ai_client import GeminiAnalysisClient
from .services.analysis import ResumeAnalysisService
from .services.resume_store import ResumeRecordStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    ai_client: Optional[GeminiAnalysisClient] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        configure_logging(settings.log_level)
        database = Database(settings)
        client = ai_client or GeminiAnalysisClient(settings)
        await database.init()
        client.init()

        app.state.settings = settings
        app.state.analysis_service = ResumeAnalysisService(
            settings, client, ResumeRecordStore(database)
        )
        logger.info("%s started", settings.app_name)
        try:
            yield
        finally:
            # Shutdown
            client.shutdown()
            await database.shutdown()

    app = FastAPI(
        title=settings.app_name,
        description="Resume upload and AI analysis API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(request: Request, exc: AnalysisError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    app.include_router(resumes_router)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint for load balancer"""
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
