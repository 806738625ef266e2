"""
Modèle SQLAlchemy pour les utilisateurs.
Version minimale : l'authentification est gérée hors de ce service.
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID

from yearbook.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(100), unique=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    user_type = Column(String(20), nullable=False)  # viewer, student, school, super_admin
    school_id = Column(UUID(as_uuid=True), ForeignKey("schools.id"), nullable=True)  # admins d'école
    created_at = Column(DateTime, server_default=func.now())
