from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from fittrack.api.v1 import api_router
from fittrack.core.database import SessionLocal, init_db
from fittrack.core.config import settings
from fittrack.core.exceptions import FitTrackError
import logging

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="FitTrack API",
    description="Workout and meal tracking with calorie estimates, XP ranks, streaks and weekly insights",
    version="1.0.0"
)

allowed_origins = [settings.frontend_url]
if settings.client_url and settings.client_url not in allowed_origins:
    allowed_origins.append(settings.client_url)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(FitTrackError)
async def fittrack_error_handler(request: Request, exc: FitTrackError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/")
def read_root():
    return {"message": "FitTrack API is running!"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/health/db")
def database_health_check():
    """Check database connection health"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "database": "disconnected", "error": str(e)}
    finally:
        db.close()


@app.on_event("startup")
def create_tables():
    init_db()
    logger.info(f"FitTrack started ({settings.environment}, timezone {settings.timezone})")
