# backend/climacare/main.py
import json
import logging
import os

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi import HTTPException as FastAPIHTTPException
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from climacare import __version__
from climacare.core.api import ok, fail, UTF8JSONResponse
from climacare.core.db import Base, engine, get_db
from climacare import models  # noqa: F401  (registra as tabelas no metadata)

from climacare.routers.auth import router as auth_router, profile_router
from climacare.routers.machines import router as machines_router
from climacare.routers.technicians import router as technicians_router
from climacare.routers.services import router as services_router
from climacare.routers.dashboard import router as dashboard_router
from climacare.routers.reports import router as reports_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ClimaCare API", version=__version__, default_response_class=UTF8JSONResponse)


# -----------------------------
# Envelope global de erro
# -----------------------------
@app.exception_handler(StarletteHTTPException)
async def http_exception_to_envelope(request: Request, exc: StarletteHTTPException):
    return fail(str(exc.detail) if exc.detail else exc.__class__.__name__, status_code=exc.status_code)

@app.exception_handler(FastAPIHTTPException)
async def fastapi_http_exception_to_envelope(request: Request, exc: FastAPIHTTPException):
    return fail(str(exc.detail) if exc.detail else exc.__class__.__name__, status_code=exc.status_code)

@app.exception_handler(RequestValidationError)
async def validation_exception_to_envelope(request: Request, exc: RequestValidationError):
    return fail("Dados inválidos", status_code=422, meta={"errors": json.loads(json.dumps(exc.errors(), default=str))})


# -----------------------------
# CORS (.env)
# -----------------------------
def _parse_origins(env_val):
    if not env_val or env_val.strip() == "*":
        return ["*"]
    try:
        parsed = json.loads(env_val)
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
    except ValueError:
        pass
    return [s.strip() for s in env_val.split(",") if s.strip()]

ALLOWED_ORIGINS = _parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))
logger.info("CORS allow_origins=%s", ALLOWED_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- startup: cria as tabelas em dev/SQLite ----
@app.on_event("startup")
def _ensure_tables():
    if os.getenv("AUTO_CREATE_TABLES", "1").strip().lower() in ("1", "true", "yes"):
        Base.metadata.create_all(bind=engine)
        logger.info("tables ensured on %s", engine.url.render_as_string(hide_password=True))


# ---- Saúde ----
@app.get("/health")
@app.get("/api/health")
def health():
    return ok({"service": "ClimaCare API", "version": __version__})

@app.get("/api/db-ping")
def db_ping(db: Session = Depends(get_db)):
    val = db.execute(text("SELECT 1")).scalar()
    return ok({"db": "ok", "select1": val})


# =========================
# Routers
# =========================
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(machines_router)
app.include_router(technicians_router)
app.include_router(services_router)
app.include_router(dashboard_router)
app.include_router(reports_router)

logger.info("routers registered: auth, machines, technicians, services, dashboard, reports")
