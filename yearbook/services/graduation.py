"""
Représentation de l'année de sortie d'un alumni.

Deux variantes : diplômé une année donnée, ou n'a pas terminé sa scolarité.
Côté formulaire la seconde arrive sous forme de texte libre
("did-not-graduate", "Did not graduate from ..."), côté annuaire students
elle est encodée par l'entier -1.
"""

import re
from dataclasses import dataclass
from typing import Optional

DID_NOT_GRADUATE_YEAR = -1

_YEAR_RE = re.compile(r"^\d{4}$")


@dataclass(frozen=True)
class Graduation:
    year: Optional[int] = None

    @classmethod
    def graduated(cls, year: int) -> "Graduation":
        return cls(year=year)

    @classmethod
    def did_not_graduate(cls) -> "Graduation":
        return cls(year=None)

    @property
    def has_graduated(self) -> bool:
        return self.year is not None

    @classmethod
    def parse(cls, value: str) -> "Graduation":
        """
        Interprète la valeur saisie dans le formulaire de demande.
        Insensible à la casse ; les tirets comptent comme des espaces.
        Lève ValueError si la valeur n'est ni une année ni une mention « did not graduate ».
        """
        text = value.strip()
        if is_did_not_graduate(text):
            return cls.did_not_graduate()
        if _YEAR_RE.match(text):
            return cls.graduated(int(text))
        raise ValueError(f"Invalid graduation year: '{value}'.")

    @classmethod
    def from_student_year(cls, year: int) -> "Graduation":
        if year == DID_NOT_GRADUATE_YEAR:
            return cls.did_not_graduate()
        return cls.graduated(year)

    def to_student_year(self) -> int:
        """Encodage utilisé par la table students."""
        return self.year if self.year is not None else DID_NOT_GRADUATE_YEAR


def is_did_not_graduate(value: str) -> bool:
    return "did not graduate" in value.lower().replace("-", " ")


def parse_year(value: Optional[str]) -> Optional[int]:
    """Convertit une année texte en entier, None si absente ou non numérique."""
    if value is None:
        return None
    text = value.strip()
    return int(text) if text.isdigit() else None
