"""
Notifications utilisateur (demande envoyée, approuvée, refusée).

L'envoi est « fire-and-forget » : il est appelé après le commit de l'état
métier, dans sa propre transaction. Un échec est journalisé puis ignoré ;
perdre une notification ne doit jamais annuler un changement de badge ou de demande.
"""

import uuid
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yearbook.models.notification import Notification
from yearbook.schemas.notification import NotificationResponse

logger = logging.getLogger(__name__)

ALUMNI_REQUEST_SENT = "alumni_request_sent"
ALUMNI_APPROVED = "alumni_approved"
ALUMNI_DENIED = "alumni_denied"


def send(
    db: Session,
    user_id: uuid.UUID,
    type: str,
    title: str,
    message: str,
    related_id: Optional[uuid.UUID] = None,
) -> Optional[Notification]:
    """Enregistre une notification pour un utilisateur. Retourne None si l'écriture échoue."""
    notification = Notification(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        is_read=False,
        related_id=str(related_id) if related_id is not None else None,
    )
    try:
        db.add(notification)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Notification %s non délivrée à l'utilisateur %s : %s", type, user_id, exc)
        return None

    logger.info("Notification %s envoyée à l'utilisateur %s", type, user_id)
    return notification


def list_notifications(db: Session, user_id: uuid.UUID) -> list[NotificationResponse]:
    """Retourne les notifications d'un utilisateur, de la plus récente à la plus ancienne."""
    notifications = db.execute(
        select(Notification)
        .where(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc())
    ).scalars().all()
    return [NotificationResponse.model_validate(n) for n in notifications]


def mark_as_read(db: Session, notification_id: uuid.UUID) -> bool:
    """Marque une notification comme lue. Retourne False si elle n'existe pas."""
    notification = db.get(Notification, notification_id)
    if notification is None:
        return False

    notification.is_read = True
    db.commit()
    return True
