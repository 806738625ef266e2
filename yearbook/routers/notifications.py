"""
Router pour les notifications utilisateur.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from yearbook.database import get_db
from yearbook.schemas.notification import NotificationResponse
from yearbook.services import notification_service

router = APIRouter(prefix="/api/v1/notifications", tags=["Notifications"])


@router.get("/user/{user_id}", response_model=List[NotificationResponse],
            summary="Notifications d'un utilisateur")
def list_notifications(user_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retourne les notifications d'un utilisateur, des plus récentes aux plus anciennes."""
    return notification_service.list_notifications(db, user_id)


@router.patch("/{notification_id}/read", status_code=204, summary="Marquer comme lue")
def mark_as_read(notification_id: uuid.UUID, db: Session = Depends(get_db)):
    if not notification_service.mark_as_read(db, notification_id):
        raise HTTPException(status_code=404, detail="Notification not found.")
