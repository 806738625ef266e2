"""
Point d'entrée principal de l'API Yearbook (vérification alumni).
Démarrage : uvicorn yearbook.main:app --reload
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import yearbook.models  # noqa: F401  (enregistre les tables avant les routers)
from yearbook.config import settings
from yearbook.routers import alumni_badges, alumni_requests, notifications, students

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Yearbook API",
    description="API de vérification des statuts alumni (badges, demandes, annuaire)",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Front Yearbook servi depuis une origine distincte ; les méthodes suivent les routers
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)

app.include_router(alumni_requests.router)
app.include_router(alumni_badges.router)
app.include_router(notifications.router)
app.include_router(students.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Réponse 500 générique : aucun détail interne n'est renvoyé au client."""
    logger.error("Exception non gérée sur %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "An internal error occurred."})


@app.get("/api/health", tags=["Santé"])
def health_check():
    return {"status": "ok", "service": app.title, "version": app.version}
