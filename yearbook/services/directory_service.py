"""
Annuaire utilisateurs et écoles consommé par le moteur alumni.
Lecture seule : le moteur ne modifie jamais ces tables.
"""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from yearbook.models.school import School
from yearbook.models.user import User
from yearbook.schemas.directory import SchoolSummary, UserSummary


def get_user(db: Session, user_id: uuid.UUID, for_update: bool = False) -> Optional[UserSummary]:
    """
    Retourne le nom complet d'un utilisateur, ou None s'il n'existe pas.

    for_update=True pose un verrou de ligne (SELECT ... FOR UPDATE) jusqu'à la fin
    de la transaction : sérialise les soumissions concurrentes d'un même utilisateur.
    """
    stmt = select(User).where(User.id == user_id)
    if for_update:
        stmt = stmt.with_for_update()
    user = db.execute(stmt).scalar()
    if user is None:
        return None
    return UserSummary.model_validate(user)


def get_school_by_id(db: Session, school_id: uuid.UUID) -> Optional[SchoolSummary]:
    """Retourne une école par son ID, ou None si inexistante."""
    school = db.get(School, school_id)
    if school is None:
        return None
    return SchoolSummary.model_validate(school)


def get_school_by_name(db: Session, name: str) -> Optional[SchoolSummary]:
    """
    Recherche inverse nom → école (utilisée à la suppression d'un badge).
    Si plusieurs écoles portent le même nom, la plus ancienne est retenue.
    """
    school = db.execute(
        select(School)
        .where(School.name == name)
        .order_by(School.created_at)
        .limit(1)
    ).scalar()
    if school is None:
        return None
    return SchoolSummary.model_validate(school)
