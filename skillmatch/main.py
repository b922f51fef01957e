# skillmatch/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillmatch import __version__
from skillmatch.api import admin, bookings, matches, messages, ratings, users
from skillmatch.config import settings
from skillmatch.database import init_db, shutdown_db
from skillmatch.exceptions import SkillMatchError

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("SkillMatch API started (env=%s)", settings.APP_ENV)
    yield
    shutdown_db()


# Initialize FastAPI app
app = FastAPI(title="SkillMatch API", version=__version__, lifespan=lifespan)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SkillMatchError)
async def skillmatch_error_handler(request: Request, exc: SkillMatchError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# API routers
app.include_router(users.router)     # /users/*
app.include_router(matches.router)   # /matches/*
app.include_router(messages.router)  # /messages/*
app.include_router(bookings.router)  # /bookings/*
app.include_router(ratings.router)   # /ratings/*
app.include_router(admin.router)     # /admin/*


@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "message": "SkillMatch API is running",
        "version": __version__,
    }
