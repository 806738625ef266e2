"""
Modèles SQLAlchemy du cycle de vie alumni : badges, demandes de vérification
et blocages temporaires après suppression d'un badge.
"""

import uuid
from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import UUID

from yearbook.database import Base
from yearbook.utils.datetime import utcnow


class AlumniBadge(Base):
    """Affiliation revendiquée (pending) ou vérifiée (verified) d'un utilisateur à une école."""
    __tablename__ = "alumni_badges"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    school_id = Column(UUID(as_uuid=True), ForeignKey("schools.id", ondelete="SET NULL"), nullable=True)
    school = Column(String(255), nullable=False)           # Nom de l'école (dénormalisé)
    full_name = Column(String(255), nullable=False)        # Dénormalisé depuis users
    admission_year = Column(String(20), nullable=False)
    graduation_year = Column(String(255), nullable=False)  # "2019", "did-not-graduate", "Did not graduate from ..."
    status = Column(String(20), nullable=False, default="pending")  # pending, verified
    created_at = Column(DateTime, nullable=False, default=utcnow)


class AlumniRequest(Base):
    """Demande de vérification soumise par un utilisateur, en attente de revue par l'école."""
    __tablename__ = "alumni_requests"
    __table_args__ = (
        # Une seule demande pending par (utilisateur, école), garantie par la BDD
        Index(
            "uq_alumni_requests_pending_user_school",
            "user_id",
            "school_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
            sqlite_where=text("status = 'pending'"),
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    school_id = Column(UUID(as_uuid=True), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False, index=True)
    badge_id = Column(UUID(as_uuid=True), ForeignKey("alumni_badges.id", ondelete="SET NULL"), nullable=True)

    full_name = Column(String(255), nullable=False)
    admission_year = Column(String(20), nullable=False)
    graduation_year = Column(String(255), nullable=False)
    post_held = Column(String(255), nullable=True)
    student_name = Column(String(255), nullable=True)
    student_admission_year = Column(String(20), nullable=True)
    additional_info = Column(Text, nullable=True)

    status = Column(String(20), nullable=False, default="pending")  # pending, approved, denied
    reviewed_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    review_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class AlumniRequestBlock(Base):
    """Interdiction temporaire de redemander une vérification à une école."""
    __tablename__ = "alumni_request_blocks"
    __table_args__ = (
        Index("ix_alumni_request_blocks_user_school", "user_id", "school_id"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    school_id = Column(UUID(as_uuid=True), ForeignKey("schools.id", ondelete="CASCADE"), nullable=False)
    blocked_until = Column(DateTime, nullable=False)  # Actif tant que now < blocked_until
    reason = Column(String(50), nullable=False, default="badge_deleted")
    created_at = Column(DateTime, nullable=False, default=utcnow)
