"""
Modèle SQLAlchemy pour les écoles.
Version minimale : la gestion complète (inscription, validation super-admin)
vit dans le module de gestion des écoles ; ici seul l'annuaire est lu.
"""

import uuid
from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID

from yearbook.database import Base


class School(Base):
    __tablename__ = "schools"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, index=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    year_founded = Column(Integer, nullable=False)
    approval_status = Column(String(20), default="pending")  # pending, approved, rejected
    created_at = Column(DateTime, server_default=func.now())
