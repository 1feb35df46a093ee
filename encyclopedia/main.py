import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from encyclopedia.config import settings
from encyclopedia.database import Base, engine
from encyclopedia.errors import EncyclopediaError
from encyclopedia.log import get_logger

# Import models so SQLAlchemy registers tables
from encyclopedia.models import (  # noqa: F401
    family_member,
    family_relationship,
    article,
    article_translation,
    audit_log,
    general_article,
)

# Routers
from encyclopedia.routers import (
    family_router,
    article_router,
    audit_router,
    general_article_router,
)

logger = get_logger(__name__)


# -----------------------
# DATABASE TABLES
# -----------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("startup", env=settings.ENV, relationship_view=settings.RELATIONSHIP_VIEW)
    yield


# -----------------------
# CREATE APP
# -----------------------
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Backend API for the family encyclopedia: members, family trees and multilingual articles.",
    version="1.0.0",
    lifespan=lifespan,
)

# -----------------------
# CORS
# -----------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------
# REQUEST LOGGING
# -----------------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "request",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 1),
    )
    return response


# -----------------------
# ERRORS
# -----------------------
@app.exception_handler(EncyclopediaError)
async def encyclopedia_error_handler(request: Request, exc: EncyclopediaError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(status_code=409, content={"detail": "Resource already exists or conflicts"})


# -----------------------
# ROUTES
# -----------------------
app.include_router(family_router.router)
app.include_router(article_router.router)
app.include_router(general_article_router.router)
app.include_router(audit_router.router)


# -----------------------
# HEALTH CHECK
# -----------------------
@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Family Encyclopedia API is running!",
        "timestamp": datetime.utcnow().isoformat(),
    }
