"""
Service de l'annuaire alumni (table students).
Les lignes sont créées uniquement par l'approbation d'une demande alumni.
"""

import uuid
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from yearbook.models.student import Student
from yearbook.schemas.student import StudentResponse
from yearbook.services.graduation import Graduation, parse_year


def create_student_entry(
    db: Session,
    school_id: uuid.UUID,
    full_name: str,
    graduation: Graduation,
    admission_year: Optional[str],
) -> Student:
    """
    Ajoute une entrée dans l'annuaire alumni d'une école.
    N'effectue pas de commit : l'appelant l'inclut dans sa transaction.
    """
    student = Student(
        school_id=school_id,
        full_name=full_name,
        graduation_year=graduation.to_student_year(),
        admission_year=parse_year(admission_year),
        profile_image=None,  # synchronisé plus tard depuis le profil utilisateur
    )
    db.add(student)
    return student


def list_students(db: Session, school_id: uuid.UUID) -> list[StudentResponse]:
    """Retourne tous les alumni d'une école, triés par nom."""
    students = db.execute(
        select(Student)
        .where(Student.school_id == school_id)
        .order_by(Student.full_name)
    ).scalars().all()
    return [StudentResponse.model_validate(s) for s in students]


def list_students_by_year(
    db: Session,
    school_id: uuid.UUID,
    graduation_year: Union[int, str],
) -> list[StudentResponse]:
    """
    Retourne les alumni d'une école pour une année de sortie.
    graduation_year accepte une année ou "did-not-graduate".
    Lève ValueError si la valeur n'est pas interprétable.
    """
    if isinstance(graduation_year, str):
        graduation = Graduation.parse(graduation_year)
    else:
        graduation = Graduation.from_student_year(graduation_year)

    students = db.execute(
        select(Student)
        .where(
            Student.school_id == school_id,
            Student.graduation_year == graduation.to_student_year(),
        )
        .order_by(Student.full_name)
    ).scalars().all()
    return [StudentResponse.model_validate(s) for s in students]
