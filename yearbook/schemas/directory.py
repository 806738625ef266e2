"""
Schémas de l'annuaire utilisateurs / écoles tel que vu par le moteur alumni.
"""

import uuid
from typing import Optional

from pydantic import BaseModel


class UserSummary(BaseModel):
    id: uuid.UUID
    full_name: str

    model_config = {"from_attributes": True}


class SchoolSummary(BaseModel):
    id: uuid.UUID
    name: str
    year_founded: Optional[int] = None

    model_config = {"from_attributes": True}
