"""
Configuration de la connexion à la base de données.
PostgreSQL en production (psycopg2), SQLite accepté pour le développement et les tests.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from formatrack.config import settings


def _engine_options(database_url: str) -> dict:
    """Options du moteur selon le backend : pool borné pour un vrai SGBD, StaticPool pour SQLite mémoire."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_timeout": settings.DB_POOL_TIMEOUT,
            "pool_pre_ping": True,
        }

    options = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        # Une seule connexion partagée, sinon chaque session verrait une base vide
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

if engine.dialect.name == "sqlite":
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite n'applique ON DELETE CASCADE / SET NULL qu'avec ce pragma
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_unique_violation(exc) -> bool:
    """Vrai si l'IntegrityError provient d'une contrainte d'unicité (et non d'une FK ou d'un CHECK)."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == "23505":
        return True
    return "UNIQUE constraint failed" in str(orig)
