from dotenv import load_dotenv
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.contracts import find_contract
from app.core.config import settings
from app.core.database import AsyncSessionLocal, init_models
from app.core.logging_setup import configure_logging
from app.services.catalog_seed import seed_catalog
from app.services.storage import DatabaseStorage

# ───────────────── ROUTER IMPORTS ─────────────────
from app.routes.auth import router as auth_router
from app.routes.sessions import router as sessions_router
from app.routes.teachers import router as teachers_router
from app.routes.favorites import router as favorites_router
from app.routes.progress import router as progress_router
from app.routes.home import router as home_router
from app.routes.stats import router as stats_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.SEED_ON_STARTUP:
        await init_models()
        async with AsyncSessionLocal() as db:
            await seed_catalog(DatabaseStorage(db), audio_base_url=settings.AUDIO_BASE_URL)
    logger.info("Stillwater API started (env=%s)", settings.APP_ENV)
    yield


app = FastAPI(
    title="Stillwater API",
    description="Ambient audio sessions, teachers, favorites and listening progress",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# ───────── ERROR BODIES: {"message": ..., "field": ...} ─────────

def _field_path(loc) -> str | None:
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or None


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    route = request.scope.get("route")
    contract = find_contract(request.method, getattr(route, "path", ""))
    if contract is not None and contract.validation_status == 401:
        # login never says which part of the credentials was wrong
        return JSONResponse(status_code=401, content={"message": "Invalid credentials"})

    errors = exc.errors()
    first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
    return JSONResponse(
        status_code=400,
        content={"message": first["msg"], "field": _field_path(first["loc"])},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"message": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})

# ───────────────── CORS ─────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins_list or ["http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ───────────────── ROUTES ─────────────────
# Paths come fully qualified (/api/...) from app.contracts, so no prefix here.

app.include_router(auth_router)
app.include_router(sessions_router)
app.include_router(teachers_router)
app.include_router(favorites_router)
app.include_router(progress_router)
app.include_router(home_router)
app.include_router(stats_router)

# ───────────────── HEALTH ─────────────────

@app.get("/", tags=["Health"])
async def root():
    return {
        "status": "ok",
        "app": "Stillwater API",
        "env": settings.APP_ENV,
    }


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "healthy"}
