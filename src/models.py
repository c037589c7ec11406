"""Data classes for family tree entities."""

from dataclasses import dataclass

# Relationship labels on child -> parent edges
MOTHER = "MOTHER"
FATHER = "FATHER"


@dataclass
class Person:
    id: int
    given_name: str | None
    surname: str | None
    mother_id: int | None = None
    father_id: int | None = None
    birth_date_string: str | None = None
    death_date_string: str | None = None
    sex: str | None = None
    generation: int | None = None  # None until a generation is assigned
