"""
Modèle SQLAlchemy pour la table students (annuaire du réseau alumni).
Une ligne est créée uniquement lors de l'approbation d'une demande alumni.
graduation_year = -1 signifie « n'a pas terminé sa scolarité ».
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID

from yearbook.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    school_id = Column(UUID(as_uuid=True), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    full_name = Column(String(255), nullable=False)
    graduation_year = Column(Integer, nullable=False)
    admission_year = Column(Integer, nullable=True)
    profile_image = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
