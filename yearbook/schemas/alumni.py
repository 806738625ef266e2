"""
Schémas Pydantic pour les badges et demandes alumni.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from yearbook.services.graduation import Graduation


class AlumniRequestCreate(BaseModel):
    """Corps de requête pour demander la vérification d'un statut alumni."""
    user_id: uuid.UUID
    school_id: uuid.UUID
    full_name: str
    admission_year: str
    graduation_year: str  # année ("2019") ou mention « did not graduate »
    post_held: Optional[str] = None
    student_name: Optional[str] = None
    student_admission_year: Optional[str] = None
    additional_info: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Full name cannot be empty.")
        return v.strip()

    @field_validator("admission_year")
    @classmethod
    def admission_year_is_year(cls, v: str) -> str:
        v = v.strip()
        if not (len(v) == 4 and v.isdigit()):
            raise ValueError("Admission year must be a four-digit year.")
        return v

    @field_validator("graduation_year")
    @classmethod
    def graduation_year_valid(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Graduation year cannot be empty.")
        Graduation.parse(v)
        return v.strip()

    @field_validator("student_admission_year")
    @classmethod
    def student_admission_year_is_year(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not (len(v) == 4 and v.isdigit()):
            raise ValueError("Student admission year must be a four-digit year.")
        return v

    @field_validator("post_held", "student_name", "additional_info")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class AlumniReview(BaseModel):
    """Décision d'un admin d'école sur une demande (approbation ou refus)."""
    reviewer_id: uuid.UUID
    review_notes: Optional[str] = None

    @field_validator("review_notes")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class AlumniRequestResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    school_id: uuid.UUID
    badge_id: Optional[uuid.UUID] = None
    full_name: str
    admission_year: str
    graduation_year: str
    post_held: Optional[str] = None
    student_name: Optional[str] = None
    student_admission_year: Optional[str] = None
    additional_info: Optional[str] = None
    status: str
    reviewed_by: Optional[uuid.UUID] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class AlumniBadgeResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    school_id: Optional[uuid.UUID] = None
    school: str
    full_name: str
    admission_year: str
    graduation_year: str
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AlumniApprovalResult(BaseModel):
    """Réponse après approbation : instantané de la demande avant suppression."""
    message: str
    request: AlumniRequestResponse
    badge: Optional[AlumniBadgeResponse] = None
    student_id: Optional[uuid.UUID] = None


class PendingRequestCount(BaseModel):
    school_id: uuid.UUID
    pending_count: int
