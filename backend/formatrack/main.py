"""
Point d'entrée principal de l'API FormaTrack.
Démarrage : uvicorn formatrack.main:app --reload   (ou la commande `formatrack`)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DataError, IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

import formatrack.models  # noqa: F401 - enregistre tous les modèles dans Base.metadata avant create_all
from formatrack.config import settings
from formatrack.database import Base, SessionLocal, engine, is_unique_violation
from formatrack.exceptions import ConflictError, FormaTrackError, ServiceUnavailable, ValidationError
from formatrack.routers import absences, auth, clients, cours, dashboard, paiements, presences, users
from formatrack.services.user_service import ensure_default_admin

logger = logging.getLogger(__name__)


def init_db() -> None:
    """Crée les tables manquantes et le compte administrateur initial."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_admin(db, settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : prépare le schéma au démarrage."""
    init_db()
    yield


app = FastAPI(
    title="FormaTrack API",
    description="API de gestion d'un centre de formation : clients, cours, présences, paiements",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[],
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
)


app.include_router(auth.router)
app.include_router(clients.router)
app.include_router(cours.router)
app.include_router(presences.router)
app.include_router(paiements.router)
app.include_router(absences.router)
app.include_router(users.router)
app.include_router(dashboard.router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(FormaTrackError)
async def formatrack_error_handler(request: Request, exc: FormaTrackError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Corps ou paramètres invalides → 400 avec le premier message lisible."""
    errors = exc.errors()
    if not errors:
        return _error(400, "Données invalides.")

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "path", "query"))
    message = first.get("msg", "Données invalides.").removeprefix("Value error, ")
    if first.get("type") == "extra_forbidden":
        message = "Champ non autorisé."
    return _error(400, f"{field} : {message}" if field else message)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Doublon → 409 ; clé étrangère ou CHECK violé → 400."""
    logger.warning("Violation de contrainte : %s", exc.orig)
    if is_unique_violation(exc):
        return _error(ConflictError.status_code, ConflictError.default_message)
    return _error(ValidationError.status_code, ValidationError.default_message)


@app.exception_handler(DataError)
@app.exception_handler(OverflowError)
async def data_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Valeur hors des bornes d'une colonne (OverflowError : pilote sqlite3)
    logger.warning("Valeur refusée par la base : %s", exc)
    return _error(ValidationError.status_code, ValidationError.default_message)


@app.exception_handler(OperationalError)
@app.exception_handler(PoolTimeoutError)
async def database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Base de données indisponible : %s", exc)
    return _error(ServiceUnavailable.status_code, ServiceUnavailable.default_message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées pour garantir que la réponse 500
    passe bien par CORSMiddleware et ne divulgue aucun détail interne.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return _error(500, "Une erreur interne est survenue.")


@app.get("/api/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "FormaTrack API", "version": "1.0.0"}


def run() -> None:
    """Lance le serveur uvicorn sur HOST:PORT (commande `formatrack`)."""
    import uvicorn

    uvicorn.run("formatrack.main:app", host=settings.HOST, port=settings.PORT)
