"""
Router pour l'annuaire alumni (recherche de camarades de promotion).
Lecture seule : les entrées sont créées par l'approbation des demandes alumni.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from yearbook.database import get_db
from yearbook.schemas.student import StudentResponse
from yearbook.services import student_service

router = APIRouter(prefix="/api/v1/students", tags=["Annuaire alumni"])


@router.get("/school/{school_id}", response_model=List[StudentResponse],
            summary="Alumni d'une école")
def list_students(school_id: uuid.UUID, db: Session = Depends(get_db)):
    """Retourne tous les alumni d'une école, toutes promotions confondues."""
    return student_service.list_students(db, school_id)


@router.get("/school/{school_id}/year/{graduation_year}", response_model=List[StudentResponse],
            summary="Alumni d'une promotion")
def list_students_by_year(school_id: uuid.UUID, graduation_year: str, db: Session = Depends(get_db)):
    """
    Retourne les alumni d'une promotion.
    `graduation_year` : une année (ex. 2019) ou `did-not-graduate`.
    """
    try:
        return student_service.list_students_by_year(db, school_id, graduation_year)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
