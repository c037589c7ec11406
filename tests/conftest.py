"""
Pytest configuration and fixtures for gentree
"""

import pytest

from models import Person


def person(id, mother=None, father=None, given_name=None, surname="Doe", **kwargs):
    return Person(
        id=id,
        given_name=given_name or f"P{id}",
        surname=surname,
        mother_id=mother,
        father_id=father,
        **kwargs,
    )


@pytest.fixture
def three_generations():
    """Child 1, parents 2 and 3, maternal grandparents 4 and 5"""
    return [
        person(1, mother=2, father=3),
        person(2, mother=4, father=5),
        person(3),
        person(4),
        person(5),
    ]


@pytest.fixture
def sample_csv(tmp_path):
    """Sample family tree CSV"""
    path = tmp_path / "family_tree.csv"
    path.write_text(
        "id,first,middle,last,mother,father,born,died\n"
        "1, Ann ,,Smith,2,3,1990,\n"
        "2,Mary,Jo,Smith,4,,1960-05-01,\n"
        "3,John,,Smith,,,1958,\n"
        "4,Rose,,Jones,,,1930,2001\n"
        ",,,,,,,\n"
        "5,,,,,,,\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_gedcom(tmp_path):
    """Sample GEDCOM with one family of three"""
    path = tmp_path / "family.ged"
    path.write_text(
        "0 HEAD\n"
        "1 GEDC\n"
        "2 VERS 5.5.1\n"
        "2 FORM LINEAGE-LINKED\n"
        "1 CHAR UTF-8\n"
        "0 @I1@ INDI\n"
        "1 NAME Jan /Bulhuis/\n"
        "1 SEX M\n"
        "0 @I2@ INDI\n"
        "1 NAME Anna /Visser/\n"
        "1 SEX F\n"
        "0 @I3@ INDI\n"
        "1 NAME Piet /Bulhuis/\n"
        "1 SEX M\n"
        "0 @F1@ FAM\n"
        "1 HUSB @I1@\n"
        "1 WIFE @I2@\n"
        "1 CHIL @I3@\n"
        "0 TRLR\n",
        encoding="utf-8",
    )
    return path
