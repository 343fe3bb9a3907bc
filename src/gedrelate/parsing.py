"""GEDCOM ingestion and date handling utilities."""

import logging
import re
from pathlib import Path

from ged4py import GedcomReader

from gedrelate.models import Person, Union

logger = logging.getLogger(__name__)


_MONTHS = (
    "JANUARY", "FEBRUARY", "MARCH", "APRIL", "MAY", "JUNE",
    "JULY", "AUGUST", "SEPTEMBER", "OCTOBER", "NOVEMBER", "DECEMBER",
)

# "JAN" and "JANUARY" -> 1, plus the "SEPT" spelling seen in transcriptions
MONTH_MAP = {name: number for number, name in enumerate(_MONTHS, start=1)}
MONTH_MAP |= {name[:3]: number for name, number in list(MONTH_MAP.items())}
MONTH_MAP["SEPT"] = 9

# date qualifiers and range keywords, e.g. "ABT", "Abt.", "About:", "BET"
QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
    flags=re.IGNORECASE,
)

# (pattern, order of the captured groups); "M" is a numeric month, "N" a month name
DATE_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), "YMD"),  # 1839-08-29, 1746-00-00
    (re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$"), "DNY"),  # 25 NOV 1954, 02 May1838
    (re.compile(r"^([A-Za-z]+)\.?,?\s*(\d{4})$"), "NY"),  # NOV 1954, May, 1837
    (re.compile(r"^(\d{4})$"), "Y"),  # 1698
    (re.compile(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$"), "MDY"),  # 01-27-1920, 1/15/1957
    (re.compile(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{4})$"), "MDY"),  # 04 05 1911
    (re.compile(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$"), "NDY"),  # April 17, 1850, Oct.12,1929
]


def parse_date_string(date_str: str | None) -> str | None:
    """
    Normalise a free-form date to an ISO YYYY-MM-DD string, or None.

    Accepts the GEDCOM forms ("25 NOV 1954", "JAN 1905", "1698") and the
    hand-typed ones found in exported trees, optionally in parentheses or
    with a trailing "?": numeric "01-27-1920" and "04 05 1911" (month
    first), "SEPT. 17,1910", "May, 1837", "1746-00-00". Qualifiers such as
    ABT, BEF or "About:" are dropped.

    Missing month or day default to 1. Only the first date of a range or
    period ("BET 1900 AND 1910") is kept; the result is for display only.
    """
    if not date_str:
        return None

    s = date_str.strip().strip("()").rstrip("?")
    s = QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None
    # "1900 AND 1910", "1900 TO 1910": keep the first date
    s = re.split(r"\s+(?:AND|TO)\s+", s, maxsplit=1, flags=re.IGNORECASE)[0]

    for pattern, order in DATE_PATTERNS:
        match = pattern.match(s)
        if not match:
            continue

        year = month = None
        day = 1
        for part, value in zip(order, match.groups()):
            if part == "Y":
                year = int(value)
            elif part == "M":
                month = int(value)
            elif part == "N":
                month = MONTH_MAP.get(value.upper().rstrip("."))
            elif part == "D":
                day = int(value)
        if "M" not in order and "N" not in order:
            month = 1

        # Handle 00 month/day as defaults
        if month == 0 and order == "YMD":
            month = 1
        if day == 0 and order == "YMD":
            day = 1

        if year is not None and month and 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    return None


def parse_gedcom(filepath: Path) -> GedcomReader:
    """Open a GEDCOM file and return the reader object."""
    return GedcomReader(str(filepath))


def extract_name_parts(indi) -> tuple[str, str | None, str | None]:
    """Full name, given name and surname of an INDI record."""
    value = indi.sub_tag_value("NAME")
    if not value:
        return ("Unknown", None, None)

    # ged4py splits NAME into (given, surname, suffix)
    if isinstance(value, tuple):
        given, surname, suffix = value
        full_name = " ".join(part for part in (given, surname, suffix) if part)
        return (full_name or "Unknown", given or None, surname or None)

    # "Given /Surname/" left as a string
    full_name = " ".join(str(value).replace("/", " ").split()) or "Unknown"
    return (full_name, indi.sub_tag_value("NAME/GIVN"), indi.sub_tag_value("NAME/SURN"))


def extract_event_details(rec, tag: str) -> tuple[str | None, str | None]:
    """Date and place of an event such as BIRT, DEAT, MARR or DIV, as text."""
    date = rec.sub_tag_value(f"{tag}/DATE")
    place = rec.sub_tag_value(f"{tag}/PLAC")
    # dates come back as ged4py DateValue objects
    return (str(date) if date else None, str(place) if place else None)


def extract_sex(indi) -> str | None:
    return indi.sub_tag_value("SEX")


def _xref(rec) -> str | None:
    # pointers are dereferenced by ged4py, so this is the target record
    return rec.xref_id if rec is not None and rec.xref_id else None


def _append_unique(ids: list[str], person_id: str) -> None:
    if person_id not in ids:
        ids.append(person_id)


def normalize_data(reader: GedcomReader) -> tuple[list[Person], list[Union]]:
    """
    Extract people and unions from parsed GEDCOM data.

    Person IDs are the GEDCOM xrefs (e.g. "@I1@"). Parent, child and spouse
    links are derived from FAM records, in both directions. Non-standard,
    Ancestry-specific tags (starting with _) are ignored.
    """
    people_by_id: dict[str, Person] = {}

    # First pass: extract all individuals
    for rec in reader.records0("INDI"):
        if rec.xref_id is None:
            logger.warning("skipping individual record without xref")
            continue

        full_name, given_name, surname = extract_name_parts(rec)
        birth_date_string, birth_place = extract_event_details(rec, "BIRT")
        death_date_string, death_place = extract_event_details(rec, "DEAT")

        people_by_id[rec.xref_id] = Person(
            id=rec.xref_id,
            name=full_name,
            given_name=given_name,
            surname=surname,
            sex=extract_sex(rec),
            birth_date_string=birth_date_string,
            birth_date=parse_date_string(birth_date_string),
            birth_place=birth_place,
            death_date_string=death_date_string,
            death_date=parse_date_string(death_date_string),
            death_place=death_place,
        )

    # Second pass: family records become unions and links between people
    unions: list[Union] = []
    for rec in reader.records0("FAM"):
        if rec.xref_id is None:
            logger.warning("skipping family record without xref")
            continue

        partner_ids = []
        for tag in ("HUSB", "WIFE"):
            partner_id = _xref(rec.sub_tag(tag))
            if partner_id is None:
                continue
            if partner_id not in people_by_id:
                raise ValueError(f"partner {partner_id} not found for family {rec.xref_id}")
            partner_ids.append(partner_id)

        if not partner_ids:
            logger.warning("family %s has no partner references", rec.xref_id)

        child_ids = []
        for child in rec.sub_tags("CHIL"):
            child_id = _xref(child)
            if child_id is None:
                continue
            if child_id not in people_by_id:
                raise ValueError(f"child {child_id} not found for family {rec.xref_id}")
            child_ids.append(child_id)

        if len(partner_ids) == 2:
            a, b = (people_by_id[pid] for pid in partner_ids)
            _append_unique(a.spouses, b.id)
            _append_unique(b.spouses, a.id)

        for child_id in child_ids:
            child = people_by_id[child_id]
            for partner_id in partner_ids:
                _append_unique(child.parents, partner_id)
                _append_unique(people_by_id[partner_id].children, child_id)

        start_date, _ = extract_event_details(rec, "MARR")
        end_date, _ = extract_event_details(rec, "DIV")
        partners = [people_by_id[pid].snapshot() for pid in partner_ids]
        unions.append(
            Union(
                id=rec.xref_id,
                person1=partners[0] if partners else None,
                person2=partners[1] if len(partners) > 1 else None,
                children=child_ids,
                start_date=parse_date_string(start_date),
                end_date=parse_date_string(end_date),
            )
        )

    return list(people_by_id.values()), unions


def load_gedcom(filepath: Path) -> tuple[list[Person], list[Union]]:
    """Read a GEDCOM file into people and unions."""
    reader = parse_gedcom(filepath)
    people, unions = normalize_data(reader)
    logger.info("read %d people and %d unions from %s", len(people), len(unions), filepath)
    return people, unions
