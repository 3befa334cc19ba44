import re
import string
from datetime import date, MINYEAR, MAXYEAR
from typing import NamedTuple

from django.db import models
from django.utils import dateformat, translation

# Old format: YY + DDD, New format: YYYY + DDD
CENTURY_PIVOT = 50
FEMALE_DAY_OFFSET = 500
MAX_DAY_OF_YEAR = 366

DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

OLD_NIC_PATTERN = re.compile(r'[0-9]{9}[VX]')
NEW_NIC_PATTERN = re.compile(r'[0-9]{12}')

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class NicFormat(models.TextChoices):
    OLD = 'old', 'Old (9 digits + V/X)'
    NEW = 'new', 'New (12 digits)'


class Sex(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'


class Rejection(models.TextChoices):
    INVALID_FORMAT = 'invalid_format', 'Please enter a valid NIC number (12 digits or 9 digits followed by V or X)'
    INVALID_DAY_OF_YEAR = 'invalid_day_of_year', 'The birth day encoded in this NIC number does not exist'
    INVALID_BIRTH_YEAR = 'invalid_birth_year', 'The birth year encoded in this NIC number is not a valid calendar year'


class NicDecoderError(RuntimeError):
    """Raised when the decoder breaks one of its own guarantees (a bug, not bad input)."""


class DecodedNic(NamedTuple):
    birth_year: int
    day_of_year: int
    sex: str
    birth_date: date
    source_format: str
    age: int


def normalize_nic(raw):
    """Uppercase ASCII letters only, leaving digits and length untouched."""
    if not isinstance(raw, str):
        return ''
    return raw.translate(_ASCII_UPPER)


def classify(raw):
    """
    Detect which NIC shape the input has.

    Args:
        raw (str): Identifier as typed, without trimming

    Returns:
        NicFormat or Rejection.INVALID_FORMAT
    """
    nic = normalize_nic(raw)
    if len(nic) == 10 and OLD_NIC_PATTERN.fullmatch(nic):
        return NicFormat.OLD
    if len(nic) == 12 and NEW_NIC_PATTERN.fullmatch(nic):
        return NicFormat.NEW
    return Rejection.INVALID_FORMAT


def _parse_digits(field):
    if not (field.isascii() and field.isdigit()):
        raise NicDecoderError(f"Expected digits from classified NIC, got {field!r}")
    return int(field)


def extract(nic, nic_format):
    """Split a classified NIC into its (year, day) integer fields."""
    if nic_format == NicFormat.OLD:
        return _parse_digits(nic[0:2]), _parse_digits(nic[2:5])
    if nic_format == NicFormat.NEW:
        return _parse_digits(nic[0:4]), _parse_digits(nic[4:7])
    raise NicDecoderError(f"Unknown NIC format {nic_format!r}")


def resolve_year(raw_year, nic_format):
    if nic_format == NicFormat.OLD:
        if raw_year < CENTURY_PIVOT:
            return 2000 + raw_year
        return 1900 + raw_year
    return raw_year


def resolve_day_and_sex(raw_day):
    """
    Remove the female offset from the day field.

    Returns:
        tuple: (day_of_year, Sex), or Rejection.INVALID_DAY_OF_YEAR when the
        normalised day falls outside 1..366
    """
    if raw_day > FEMALE_DAY_OFFSET:
        day_of_year, sex = raw_day - FEMALE_DAY_OFFSET, Sex.FEMALE
    else:
        day_of_year, sex = raw_day, Sex.MALE

    if not 1 <= day_of_year <= MAX_DAY_OF_YEAR:
        return Rejection.INVALID_DAY_OF_YEAR
    return day_of_year, sex


def is_leap_year(year):
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def reconstruct_date(birth_year, day_of_year):
    """
    Turn a year and 1-based day-of-year into a calendar date.

    Day 366 only exists in leap years. Years outside what ``datetime.date``
    can hold (the literal "0000" of a new NIC) are rejected.
    """
    if not MINYEAR <= birth_year <= MAXYEAR:
        return Rejection.INVALID_BIRTH_YEAR

    leap = is_leap_year(birth_year)
    if day_of_year > 365 and not leap:
        return Rejection.INVALID_DAY_OF_YEAR

    remaining = day_of_year
    for month, days in enumerate(DAYS_IN_MONTH, start=1):
        if month == 2 and leap:
            days += 1
        if remaining <= days:
            return date(birth_year, month, remaining)
        remaining -= days

    raise NicDecoderError(f"Day {day_of_year} ran past the end of {birth_year}")


def age_at(birth_date, reference_now):
    """
    Calculate age in whole years as of reference_now.

    Negative when the birth date lies after reference_now.
    """
    return reference_now.year - birth_date.year - (
        (reference_now.month, reference_now.day) < (birth_date.month, birth_date.day)
    )


def decode(raw, reference_now):
    """
    Decode a Sri Lankan NIC number.

    Args:
        raw (str): NIC number as typed
        reference_now (date or datetime): The caller's "today"

    Returns:
        DecodedNic on success, otherwise the Rejection that stopped decoding
    """
    nic = normalize_nic(raw)

    nic_format = classify(nic)
    if isinstance(nic_format, Rejection):
        return nic_format

    raw_year, raw_day = extract(nic, nic_format)
    birth_year = resolve_year(raw_year, nic_format)

    day_and_sex = resolve_day_and_sex(raw_day)
    if isinstance(day_and_sex, Rejection):
        return day_and_sex
    day_of_year, sex = day_and_sex

    birth_date = reconstruct_date(birth_year, day_of_year)
    if isinstance(birth_date, Rejection):
        return birth_date

    return DecodedNic(
        birth_year=birth_year,
        day_of_year=day_of_year,
        sex=sex,
        birth_date=birth_date,
        source_format=nic_format,
        age=age_at(birth_date, reference_now),
    )


def clean_nic_input(value):
    """
    Sanitise text while it is being typed.

    Up to 10 characters may hold digits and V/X (old format in progress);
    anything longer is treated as a new NIC: digits only, at most 12.
    """
    if not value:
        return ''

    value = str(value).upper()
    if len(value) <= 10:
        return re.sub(r'[^0-9VX]', '', value)
    return re.sub(r'[^0-9]', '', value)[:12]


def is_complete_input(value):
    return len(clean_nic_input(value)) in (10, 12)


def format_birth_date(value, with_year=True):
    """Long en-US date, e.g. "July 11, 1974"."""
    with translation.override('en-us'):
        return dateformat.format(value, 'F j, Y' if with_year else 'F j')


def explain(decoded, raw):
    """
    Break a decoded NIC down into the steps used to read it.

    Returns:
        dict: Sentences and values describing the year, day and sex fields
    """
    nic = normalize_nic(raw)
    if decoded.source_format == NicFormat.OLD:
        year_field, day_field = nic[0:2], nic[2:5]
        year_text = f"The first two digits ({year_field}) represent the year {decoded.birth_year}."
        format_text = "This NIC follows the old (9 digits + V/X) format structure."
    else:
        year_field, day_field = nic[0:4], nic[4:7]
        year_text = f"The first four digits ({year_field}) directly represent the birth year."
        format_text = "This NIC follows the new (12 digits) format structure."

    if decoded.sex == Sex.FEMALE:
        sex_text = (f"{day_field} is greater than {FEMALE_DAY_OFFSET}, therefore female; "
                    f"the actual day is {decoded.day_of_year}.")
    else:
        sex_text = f"{day_field} is not greater than {FEMALE_DAY_OFFSET}, therefore male."

    return {
        'format': format_text,
        'year_field': year_field,
        'year': year_text,
        'day_field': day_field,
        'day_of_year': decoded.day_of_year,
        'day_description': format_birth_date(decoded.birth_date, with_year=False),
        'sex': sex_text,
        'summary': {
            'birth_date': format_birth_date(decoded.birth_date),
            'age': decoded.age,
            'sex': Sex(decoded.sex).label,
        },
    }


def mask_nic(value):
    """
    Mask an NIC number for log output.

    Examples:
        "996663272V" -> "99******2V"
        "197419202757" -> "19********57"
    """
    if not value:
        return value

    value = str(value)
    if len(value) <= 4:
        return '*' * len(value)
    return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"
