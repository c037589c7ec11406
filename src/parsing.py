"""CSV and GEDCOM record sources and date handling utilities."""

import csv
import logging
from pathlib import Path
import re

from ged4py import GedcomReader

from errors import RecordError
from models import Person

logger = logging.getLogger(__name__)

# CSV column positions; column 2 (middle name) is not used
ID_COL = 0
GIVEN_NAME_COL = 1
SURNAME_COL = 3
MOTHER_COL = 4
FATHER_COL = 5
BIRTH_COL = 6
DEATH_COL = 7

# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1, "JANUARY": 1,
    "FEB": 2, "FEBRUARY": 2,
    "MAR": 3, "MARCH": 3,
    "APR": 4, "APRIL": 4,
    "MAY": 5,
    "JUN": 6, "JUNE": 6,
    "JUL": 7, "JULY": 7,
    "AUG": 8, "AUGUST": 8,
    "SEP": 9, "SEPT": 9, "SEPTEMBER": 9,
    "OCT": 10, "OCTOBER": 10,
    "NOV": 11, "NOVEMBER": 11,
    "DEC": 12, "DECEMBER": 12,
}

QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# Second half of a "BET x AND y" or "FROM x TO y" range
RANGE_END_RE = re.compile(r"\s+(AND|TO)\s+.*$", flags=re.IGNORECASE)


def _iso(year: int, month: int | None, day: int = 1) -> str | None:
    if not month or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a free-text date into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "25 NOV 1954", "11 Aug. 1968"
    - "NOV 1954", "May, 1837"
    - "1698", "ABOUT 1905", "(1789?)"
    - "1839-08-29", "1746-00-00"
    - "01-27-1920", "1/15/1957"
    - "April 17, 1850", "SEPT. 17,1910"
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?").strip()
    s = QUALIFIER_RE.sub("", s).strip()
    s = RANGE_END_RE.sub("", s)
    if not s:
        return None

    # "1839-08-29"; 00 month/day default to 01
    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", s)
    if match:
        year, month, day = (int(g) for g in match.groups())
        return _iso(year, month or 1, day or 1)

    # "1698"
    match = re.match(r"^(\d{4})$", s)
    if match:
        return _iso(int(match.group(1)), 1)

    # "25 NOV 1954" or "02 May1838"
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        return _iso(int(match.group(3)), month, int(match.group(1)))

    # "NOV 1954" or "May, 1837"
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        return _iso(int(match.group(2)), MONTH_MAP.get(match.group(1).upper()))

    # "01-27-1920" or "01/27/1920" (MM-DD-YYYY)
    match = re.match(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$", s)
    if match:
        return _iso(int(match.group(3)), int(match.group(1)), int(match.group(2)))

    # "April 17, 1850" or "Oct.12,1929"
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        return _iso(int(match.group(3)), month, int(match.group(2)))

    return None


def _is_id(value: str) -> bool:
    # isdigit alone accepts characters such as "²" that int() rejects
    return value.isascii() and value.isdigit()


def parse_parent_id(value: str) -> int | None:
    """Parse a mother/father field. Blank or non-numeric means no parent."""
    value = value.strip()
    if not _is_id(value):
        return None
    return int(value)


def _field(row: list[str], index: int) -> str:
    return row[index].strip() if index < len(row) else ""


def read_csv_records(filepath: Path) -> list[Person]:
    """
    Read person records from a CSV file with a header row.

    Columns: id, first name, middle name, last name, mother id, father id,
    birth date, death date. Short rows are allowed; missing trailing columns
    read as blank. Rows with neither a first nor a last name are skipped.

    Raises:
        RecordError: If a row has a missing, non-numeric or negative id.
    """
    persons: list[Person] = []

    with open(filepath, newline="", encoding="utf-8") as f:
        reader = csv.reader(f)
        next(reader, None)  # header

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue

            raw_id = _field(row, ID_COL)
            if not _is_id(raw_id):
                raise RecordError(
                    f"Every person must have a numeric id (line {reader.line_num}): {raw_id!r}"
                )

            given_name = _field(row, GIVEN_NAME_COL)
            surname = _field(row, SURNAME_COL)
            if not given_name and not surname:
                logger.debug("Skipping empty person on line %d", reader.line_num)
                continue

            persons.append(
                Person(
                    id=int(raw_id),
                    given_name=given_name or None,
                    surname=surname or None,
                    mother_id=parse_parent_id(_field(row, MOTHER_COL)),
                    father_id=parse_parent_id(_field(row, FATHER_COL)),
                    birth_date_string=_field(row, BIRTH_COL) or None,
                    death_date_string=_field(row, DEATH_COL) or None,
                )
            )

    logger.info("Read %d person(s) from %s", len(persons), filepath)
    return persons


def extract_numeric_id(xref_id: str) -> int:
    """Extract numeric part from GEDCOM xref_id like '@I_347421849@' or 'I674624289'."""
    digits = re.sub(r"[^0-9]", "", xref_id)
    if not digits:
        raise RecordError(f"No numeric ID found in: {xref_id}")
    return int(digits)


def extract_name_parts(indi) -> tuple[str | None, str | None]:
    """Extract given name and surname from an individual record."""
    name_rec = indi.sub_tag("NAME")
    if name_rec is None or name_rec.value is None:
        return (None, None)

    # ged4py returns NAME as tuple: (given, surname, suffix)
    name_value = name_rec.value
    if isinstance(name_value, tuple):
        given, surname, _ = name_value
        return (given or None, surname or None)

    givn = name_rec.sub_tag("GIVN")
    surn = name_rec.sub_tag("SURN")
    return (givn.value if givn else None, surn.value if surn else None)


def extract_event_date(indi, tag: str) -> str | None:
    """Extract the date text of an event tag (BIRT, DEAT)."""
    event = indi.sub_tag(tag)
    if event is None:
        return None

    date_rec = event.sub_tag("DATE")
    # ged4py may return DateValue objects
    if date_rec and date_rec.value:
        return str(date_rec.value)
    return None


def read_gedcom_records(filepath: Path) -> list[Person]:
    """
    Read person records from a GEDCOM file.

    Each FAM record's WIFE becomes the mother and HUSB the father of every
    CHIL in that family.
    """
    persons: dict[int, Person] = {}

    with GedcomReader(str(filepath)) as reader:
        for rec in reader.records0("INDI"):
            if rec.xref_id is None:
                continue

            indi_id = extract_numeric_id(rec.xref_id)
            given_name, surname = extract_name_parts(rec)
            sex_rec = rec.sub_tag("SEX")

            persons[indi_id] = Person(
                id=indi_id,
                given_name=given_name,
                surname=surname,
                birth_date_string=extract_event_date(rec, "BIRT"),
                death_date_string=extract_event_date(rec, "DEAT"),
                sex=sex_rec.value if sex_rec else None,
            )

        for rec in reader.records0("FAM"):
            husb = rec.sub_tag("HUSB")
            wife = rec.sub_tag("WIFE")

            father_id = extract_numeric_id(husb.xref_id) if husb and husb.xref_id else None
            mother_id = extract_numeric_id(wife.xref_id) if wife and wife.xref_id else None

            for child in rec.sub_tags("CHIL"):
                if not child.xref_id:
                    continue
                person = persons.get(extract_numeric_id(child.xref_id))
                if person is None:
                    continue
                person.mother_id = mother_id
                person.father_id = father_id

    logger.info("Read %d person(s) from %s", len(persons), filepath)
    return list(persons.values())


def load_records(filepath: Path) -> list[Person]:
    """Read records from a GEDCOM (.ged) or CSV file."""
    if filepath.suffix.lower() == ".ged":
        return read_gedcom_records(filepath)
    return read_csv_records(filepath)
