"""
Tests du service de l'annuaire alumni (table students).
"""

import uuid
from unittest.mock import MagicMock

import pytest

from yearbook.models.student import Student
from yearbook.services import student_service
from yearbook.services.graduation import Graduation


# --- create_student_entry ---

def test_creation_sans_commit():
    db = MagicMock()

    student = student_service.create_student_entry(
        db, school_id=uuid.uuid4(), full_name="Ada Obi",
        graduation=Graduation.graduated(2019), admission_year="2015",
    )

    db.add.assert_called_once_with(student)
    db.commit.assert_not_called()
    assert student.graduation_year == 2019
    assert student.admission_year == 2015
    assert student.profile_image is None


def test_creation_non_diplome():
    student = student_service.create_student_entry(
        MagicMock(), school_id=uuid.uuid4(), full_name="Ada Obi",
        graduation=Graduation.did_not_graduate(), admission_year=None,
    )

    assert student.graduation_year == -1
    assert student.admission_year is None


# --- Lectures (base SQLite) ---

@pytest.fixture
def promotion(db, school_a):
    for name, year in [("Chidi Okafor", 2019), ("Ada Obi", 2019), ("Bola Ade", -1), ("Emeka Nna", 2020)]:
        db.add(Student(school_id=school_a.id, full_name=name, graduation_year=year))
    db.commit()
    return school_a


def test_liste_triee_par_nom(db, promotion):
    names = [s.full_name for s in student_service.list_students(db, promotion.id)]
    assert names == ["Ada Obi", "Bola Ade", "Chidi Okafor", "Emeka Nna"]


def test_liste_par_annee(db, promotion):
    students = student_service.list_students_by_year(db, promotion.id, 2019)
    assert [s.full_name for s in students] == ["Ada Obi", "Chidi Okafor"]


def test_liste_par_annee_texte(db, promotion):
    students = student_service.list_students_by_year(db, promotion.id, "2020")
    assert [s.full_name for s in students] == ["Emeka Nna"]


def test_liste_non_diplomes(db, promotion):
    students = student_service.list_students_by_year(db, promotion.id, "did-not-graduate")
    assert [s.full_name for s in students] == ["Bola Ade"]
    assert students[0].did_not_graduate is True


def test_annee_invalide(db, promotion):
    with pytest.raises(ValueError):
        student_service.list_students_by_year(db, promotion.id, "soon")
