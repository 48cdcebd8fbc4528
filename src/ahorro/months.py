"""
Month name resolution.

Maps free-text Spanish month names and their common abbreviations to a
1-12 month index.
"""

from typing import Optional

MONTHS_MAP = {
    'enero': 1, 'ene': 1,
    'febrero': 2, 'feb': 2,
    'marzo': 3, 'mar': 3,
    'abril': 4, 'abr': 4,
    'mayo': 5,
    'junio': 6, 'jun': 6,
    'julio': 7, 'jul': 7,
    'agosto': 8, 'ago': 8,
    'septiembre': 9, 'sept': 9, 'sep': 9,
    'octubre': 10, 'oct': 10,
    'noviembre': 11, 'nov': 11,
    'diciembre': 12, 'dic': 12,
}

MONTH_NAMES = [
    'Enero', 'Febrero', 'Marzo', 'Abril', 'Mayo', 'Junio',
    'Julio', 'Agosto', 'Septiembre', 'Octubre', 'Noviembre', 'Diciembre',
]


def resolve_month(text) -> Optional[int]:
    """Resolve a month name like "Marzo" or "sept" to its index (1-12).

    Returns None for empty or unrecognized text.
    """
    if not text:
        return None
    clean = str(text).strip().lower()
    return MONTHS_MAP.get(clean)


def month_name(index: int) -> str:
    """Display name for a 1-based month index."""
    if not 1 <= index <= 12:
        raise IndexError(f"Month index out of range: {index}")
    return MONTH_NAMES[index - 1]


def parse_month_arg(text) -> int:
    """Parse a command-line month argument: a number 1-12 or a month name."""
    clean = str(text).strip()
    if clean.isdigit():
        index = int(clean)
        if 1 <= index <= 12:
            return index
        raise ValueError(f"Month number must be between 1 and 12, got {index}")

    index = resolve_month(clean)
    if index is None:
        raise ValueError(f"Unrecognized month: '{text}'")
    return index
