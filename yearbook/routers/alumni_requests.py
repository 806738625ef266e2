"""
Router pour les demandes de vérification alumni.
Soumission par un utilisateur, revue (approbation / refus) par l'admin de l'école.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from yearbook.database import get_db
from yearbook.routers.errors import raise_http_error
from yearbook.schemas.alumni import (
    AlumniApprovalResult,
    AlumniRequestCreate,
    AlumniRequestResponse,
    AlumniReview,
    PendingRequestCount,
)
from yearbook.services import alumni_service
from yearbook.services.exceptions import AlumniError

router = APIRouter(prefix="/api/v1/alumni-requests", tags=["Demandes alumni"])


@router.post("", response_model=AlumniRequestResponse, status_code=201,
             summary="Demander la vérification d'un statut alumni")
def submit_request(data: AlumniRequestCreate, db: Session = Depends(get_db)):
    """
    Soumet une demande de vérification à une école et crée le badge pending associé.

    Refus possibles :
    - 409 : demande déjà en attente, ou badge déjà détenu pour cette école
    - 403 : blocage actif (badge supprimé récemment) ou limite de badges atteinte
    - 429 : trop de demandes sur les 7 derniers jours
    - 404 : école introuvable
    """
    try:
        return alumni_service.submit_request(db, data)
    except AlumniError as e:
        raise_http_error(e)


@router.get("/school/{school_id}", response_model=List[AlumniRequestResponse],
            summary="Lister les demandes d'une école")
def list_school_requests(school_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retourne les demandes en attente et refusées d'une école (les approuvées sont supprimées)."""
    return alumni_service.list_requests_for_school(db, school_id)


@router.get("/school/{school_id}/count", response_model=PendingRequestCount,
            summary="Nombre de demandes en attente")
def count_pending_requests(school_id: uuid.UUID, db: Session = Depends(get_db)):
    """Compteur affiché sur le dashboard de l'école."""
    return PendingRequestCount(
        school_id=school_id,
        pending_count=alumni_service.count_pending_requests(db, school_id),
    )


@router.get("/{request_id}", response_model=AlumniRequestResponse, summary="Détail d'une demande")
def get_request(request_id: uuid.UUID, db: Session = Depends(get_db)):
    request = alumni_service.get_request(db, request_id)
    if request is None:
        raise HTTPException(status_code=404, detail="Alumni request not found.")
    return request


@router.patch("/{request_id}/approve", response_model=AlumniApprovalResult,
              summary="Approuver une demande")
def approve_request(request_id: uuid.UUID, data: AlumniReview, db: Session = Depends(get_db)):
    """
    Approuve la demande : le badge passe à verified, l'alumni apparaît dans
    l'annuaire de l'école et la demande est supprimée.
    Retourne l'état de la demande au moment de l'approbation.
    """
    try:
        return alumni_service.approve_request(db, request_id, data.reviewer_id, data.review_notes)
    except AlumniError as e:
        raise_http_error(e)


@router.patch("/{request_id}/deny", response_model=AlumniRequestResponse,
              summary="Refuser une demande")
def deny_request(request_id: uuid.UUID, data: AlumniReview, db: Session = Depends(get_db)):
    """
    Refuse la demande : elle est conservée en statut denied avec les notes de revue,
    le badge pending est supprimé et l'utilisateur est notifié.
    """
    try:
        return alumni_service.deny_request(db, request_id, data.reviewer_id, data.review_notes)
    except AlumniError as e:
        raise_http_error(e)
