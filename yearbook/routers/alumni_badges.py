"""
Router pour les badges alumni.
Lecture par utilisateur (profil viewer) ou par école (dashboard), suppression.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from yearbook.database import get_db
from yearbook.routers.errors import raise_http_error
from yearbook.schemas.alumni import AlumniBadgeResponse
from yearbook.services import alumni_service
from yearbook.services.exceptions import AlumniError

router = APIRouter(prefix="/api/v1/alumni-badges", tags=["Badges alumni"])


@router.get("/user/{user_id}", response_model=List[AlumniBadgeResponse],
            summary="Badges d'un utilisateur")
def list_user_badges(user_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retourne les badges pending et verified d'un utilisateur."""
    return alumni_service.list_badges_for_user(db, user_id)


@router.get("/school/{school_id}", response_model=List[AlumniBadgeResponse],
            summary="Badges rattachés à une école")
def list_school_badges(
    school_id: uuid.UUID,
    verified_only: bool = Query(False, description="Ne retourner que les badges vérifiés"),
    db: Session = Depends(get_db),
):
    """Retourne les badges d'une école. Tableau vide si l'école est inconnue."""
    return alumni_service.list_badges_for_school(db, school_id, verified_only=verified_only)


@router.delete("/{badge_id}", status_code=204, summary="Supprimer un badge")
def delete_badge(
    badge_id: uuid.UUID,
    acting_user_id: uuid.UUID = Query(..., description="Utilisateur à l'origine de la suppression"),
    db: Session = Depends(get_db),
):
    """
    Supprime un badge, pending ou verified.
    Son propriétaire ne pourra plus demander de vérification à cette école pendant 3 mois.
    """
    try:
        alumni_service.delete_badge(db, badge_id, acting_user_id)
    except AlumniError as e:
        raise_http_error(e)
