"""
Modèle SQLAlchemy pour les notifications utilisateur.
Append-only : seul is_read est modifié par le destinataire.
"""

import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID

from yearbook.database import Base
from yearbook.utils.datetime import utcnow


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(50), nullable=False)  # alumni_request_sent, alumni_approved, alumni_denied
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, default=False)
    related_id = Column(String(64), nullable=True)  # ID de l'entité liée (demande alumni, ...)
    created_at = Column(DateTime, nullable=False, default=utcnow)
