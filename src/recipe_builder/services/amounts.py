"""Parsing of free-text ingredient quantities."""

import re

from recipe_builder.domain.nutrition import ParsedAmount

_QUALIFIER_RE = re.compile(r"^(?:about|approximately|roughly)\s+", re.IGNORECASE)
_MIXED_RE = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)")
_FRACTION_RE = re.compile(r"^(\d+)\s*/\s*(\d+)")
_DECIMAL_RE = re.compile(r"^(?:\d+(?:\.\d*)?|\.\d+)")
_RANGE_TAIL_RE = re.compile(r"^\s*(?:-|to|or)\s*\d+(?:\.\d+)?(?:\s*/\s*\d+)?")
_NUMERIC_NOISE_RE = re.compile(r"^[\d\s./]*")
_UNIT_RE = re.compile(r"^(?:fl\.?\s*oz|fluid\s+ounces?|[a-z]+)")
_FLUID_OUNCE_RE = re.compile(r"fl\.?\s*oz")

_NO_AMOUNT = ParsedAmount(quantity=0.0, unit="")


def parse_amount(text: str) -> ParsedAmount:
    """Split a quantity string such as "1 1/2 cups" into number and unit.

    Supports integers, decimals, simple fractions ("1/2") and mixed numbers
    ("1 1/2"), optionally preceded by "about", "approximately" or "roughly".
    Text without a leading number yields quantity 0 and an empty unit; no
    exception is raised for malformed input.
    """
    cleaned = _QUALIFIER_RE.sub("", text.strip().lower(), count=1)
    quantity, rest = _split_quantity(cleaned)
    if quantity is None:
        return _NO_AMOUNT
    return ParsedAmount(quantity=quantity, unit=_leading_unit(rest))


def _split_quantity(text: str) -> tuple[float | None, str]:
    mixed = _MIXED_RE.match(text)
    if mixed:
        whole, numerator, denominator = (int(part) for part in mixed.groups())
        fraction = _divide(numerator, denominator)
        value = whole + fraction if fraction is not None else 0.0
        return value, text[mixed.end() :]

    fraction_match = _FRACTION_RE.match(text)
    if fraction_match:
        numerator, denominator = (int(part) for part in fraction_match.groups())
        value = _divide(numerator, denominator)
        return (value if value is not None else 0.0), text[fraction_match.end() :]

    decimal = _DECIMAL_RE.match(text)
    if decimal:
        return float(decimal.group()), text[decimal.end() :]
    return None, text


def _divide(numerator: int, denominator: int) -> float | None:
    if denominator == 0:
        return None
    return numerator / denominator


def _leading_unit(rest: str) -> str:
    """Return the first alphabetic token after the quantity.

    A range tail ("to 2", "-3", "or 4") and stray numbers are skipped, so
    "1 to 2 cups" yields "cups"; the quantity stays the lower bound. "fl oz"
    is kept together as one unit.
    """
    rest = _RANGE_TAIL_RE.sub("", rest, count=1)
    rest = _NUMERIC_NOISE_RE.sub("", rest, count=1)
    match = _UNIT_RE.match(rest)
    if not match:
        return ""
    if _FLUID_OUNCE_RE.fullmatch(match.group()):
        return "fl oz"
    return " ".join(match.group().split())
