"""Main FastAPI application for Logic Master."""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Depends
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from logic_master.routers import game, profile
from logic_master.db.init_db import init_db
from logic_master.db.database import SessionLocal, get_db
from logic_master.logging_config import setup_logging, get_logger
from logic_master.config import settings
from logic_master.constants import DEFAULT_RATE_LIMIT
from logic_master.rate_limit import limiter
from logic_master.services.game_service import GameService
from logic_master.services.notifier import NotificationFeed
from logic_master.services.profile_store import ProfileStore
from logic_master.services.scheduler import AsyncioScheduler

# Set up logging on module import
log_level = settings.LOG_LEVEL if settings.LOG_LEVEL else None
setup_logging(log_level)
logger = get_logger(__name__)


def build_game_service() -> GameService:
    """Wire the game service to the database store and the running event loop."""
    return GameService(
        store=ProfileStore(SessionLocal),
        scheduler=AsyncioScheduler(),
        notifier=NotificationFeed(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage and the game service on startup.

    This function runs once when the application starts, performing:
    - Database table creation
    - Profile loading (a fresh profile is created when none is stored)
    """
    logger.info("Application startup initiated")
    try:
        init_db()
        logger.info("Database initialization completed successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)
        raise

    app.state.game_service = build_game_service()
    app.state.game_service.load_profile()

    yield

    app.state.game_service.abort()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Logic Master API",
    description="""
    Adaptive logic-puzzle trivia game with scoring, achievements and mastery tracking.

    ## Features

    - **Adaptive Difficulty**: Question difficulty follows recent accuracy, speed and history
    - **Scoring**: Points for difficulty, speed and answer streaks
    - **Mastery Tracking**: Per-category strengths and weaknesses
    - **Achievements**: Streak, accuracy, speed and volume milestones
    - **Daily Challenge**: One fixed set of questions per day

    ## Game Flow

    1. **Start Game**: POST to `/api/game/start` (or `/api/game/daily`)
    2. **Answer**: POST each answer to `/api/game/answer`, or skip with `/api/game/skip`
    3. **Follow State**: GET `/api/game/state`; the next question appears after a short pause
    4. **Review**: The last result, stats and achievements are under `/api/profile`

    ## Timing

    - Single and daily modes give 30 seconds per question; unanswered questions are skipped
    - Faster correct answers earn a time bonus
    """,
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_tags=[
        {
            "name": "game",
            "description": "Game sessions, answers, skips and hints"
        },
        {
            "name": "profile",
            "description": "Player profile, statistics, achievements and notifications"
        },
        {
            "name": "health",
            "description": "Service health and readiness checks"
        }
    ]
)

# Add rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

logger.info(f"Rate limiting enabled: default {DEFAULT_RATE_LIMIT} per IP")

# Include routers
app.include_router(game.router)
app.include_router(profile.router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint with database verification.

    Returns:
        200 OK: Service is healthy and the store is accessible
        503 Service Unavailable: Database connection failed

    Example Response (Healthy):
        {
            "status": "healthy",
            "database": "connected",
            "timestamp": "2026-01-10T10:30:00.000000+00:00",
            "environment": "production"
        }
    """
    timestamp = datetime.now(timezone.utc).isoformat()

    try:
        db.execute(text("SELECT 1"))
        logger.debug("Health check passed")

        return {
            "status": "healthy",
            "database": "connected",
            "timestamp": timestamp,
            "environment": settings.ENVIRONMENT
        }
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}", exc_info=True)

        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "database": "disconnected",
                "error": str(e),
                "timestamp": timestamp
            }
        )


@app.get("/readiness", tags=["health"])
async def readiness_check(db: Session = Depends(get_db)):
    """Readiness check for container orchestration.

    Returns:
        200 OK: Service is ready
        503 Service Unavailable: Service is not ready
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}
    except SQLAlchemyError as e:
        logger.error(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "not ready", "error": str(e)}
        )
