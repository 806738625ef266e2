"""
Schémas Pydantic pour l'annuaire alumni (table students).
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, computed_field

from yearbook.services.graduation import DID_NOT_GRADUATE_YEAR


class StudentResponse(BaseModel):
    id: uuid.UUID
    school_id: uuid.UUID
    full_name: str
    graduation_year: int  # -1 = n'a pas terminé sa scolarité
    admission_year: Optional[int] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def did_not_graduate(self) -> bool:
        return self.graduation_year == DID_NOT_GRADUATE_YEAR
