"""
Connexion à la base de données (PostgreSQL en production, SQLite pour les tests).
Moteur SQLAlchemy synchrone ; une session par requête HTTP.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from yearbook.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # Les sessions FastAPI peuvent changer de thread entre deux dépendances
        return {"connect_args": {"check_same_thread": False}}
    # Connexions recyclées par PgBouncer / redémarrages : vérifier avant usage
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Ouvre une session pour la durée d'une requête, fermée même en cas d'erreur."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
