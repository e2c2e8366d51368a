# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging_setup import configure_logging
from app.db.session import engine, SessionLocal
from app.db.base import Base

# Import models so SQLAlchemy knows about them (for create_all)
from app.models.user import User  # noqa: F401
from app.models.question import Question  # noqa: F401
from app.models.response import Response  # noqa: F401

# Routers
from app.api.routes import router as api_router
from app.api.question_routes import router as question_router
from app.api.response_routes import router as response_router

# Seeder
from app.db.seed import seed_questions

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging()
    logger.info("starting %s env=%s", settings.APP_NAME, settings.APP_ENV)
    app = FastAPI(title=settings.APP_NAME)

    # Root -> redirect to Swagger UI
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")

    # CORS (credentials on: the auth token travels in a cookie)
    origins = [o.strip() for o in settings.BACKEND_CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Ensure tables exist; production schemas are managed by Alembic
    Base.metadata.create_all(bind=engine)

    if settings.SEED_QUESTIONS_ON_STARTUP:
        with SessionLocal() as db:
            inserted = seed_questions(db)
            if inserted:
                logger.info("seeded %d questions", inserted)

    # API routes
    app.include_router(api_router)        # /health, /api/auth/*
    app.include_router(question_router)   # /api/questions
    app.include_router(response_router)   # /api/responses

    return app


app = create_app()
