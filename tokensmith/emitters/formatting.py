"""Naming and number formatting shared by every emitter."""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

CATEGORY_ORDER = ("fill", "text", "icon", "background", "stroke")

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_DIGITS = re.compile(r"\d+")


def capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def fmt_number(value: float) -> str:
    """Render like a JavaScript number: ``4`` not ``4.0``, ``0.5`` not ``.5``."""

    if isinstance(value, bool):
        return str(int(value))
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def rounded(value: float, places: int) -> float:
    """Round half away from zero at ``places`` decimals, as ``toFixed`` does."""

    return float(f"{value:.{places}f}")


def segment_to_kebab(segment: str) -> str:
    return _CAMEL_BOUNDARY.sub(r"\1-\2", segment.replace("_", "-")).lower()


def split_words(segment: str) -> List[str]:
    return [part for part in segment_to_kebab(segment).split("-") if part]


def to_camel(parts: Sequence[str]) -> str:
    return "".join(part if index == 0 else capitalize(part) for index, part in enumerate(parts))


def to_pascal(parts: Sequence[str]) -> str:
    return "".join(capitalize(part) for part in parts)


def path_to_kebab(path: Sequence[str]) -> str:
    return "-".join(segment_to_kebab(segment) for segment in path)


def path_to_camel(path: Sequence[str]) -> str:
    return re.sub(r"-([a-z0-9])", lambda match: match.group(1).upper(), path_to_kebab(path))


def path_to_pascal(path: Sequence[str]) -> str:
    return capitalize(path_to_camel(path))


def path_to_token_name(path: Sequence[str], separator: str = "-") -> str:
    """Semantic token name: lowercase segments, ``Standard`` groups dropped."""

    return separator.join(
        re.sub(r"\s+", separator, segment.lower())
        for segment in path
        if segment.lower() != "standard"
    )


def extract_sort_key(name: str) -> int:
    """Base-1000 positional value of the embedded numbers, most significant first."""

    numbers = [int(number) for number in _DIGITS.findall(name)]
    width = len(numbers)
    return sum(number * 1000 ** max(0, width - 1 - index) for index, number in enumerate(numbers))


def extract_numeric_key(text: str) -> int:
    match = _DIGITS.search(text)
    return int(match.group(0)) if match else 0


def order_categories(categories: Iterable[str]) -> List[str]:
    present = list(dict.fromkeys(categories))
    head = [category for category in CATEGORY_ORDER if category in present]
    tail = sorted(category for category in present if category not in CATEGORY_ORDER)
    return head + tail


def kebab_to_camel(text: str) -> str:
    return re.sub(r"-([a-z0-9])", lambda match: match.group(1).upper(), text)


def apply_case(parts: Sequence[str], naming_case: str) -> str:
    """Join ``parts`` in ``screaming_snake``, ``snake``, ``camel``, ``pascal`` or ``kebab`` case."""

    words = [part for part in parts if part]
    if naming_case == "screaming_snake":
        return "_".join(word.upper() for word in words)
    if naming_case == "snake":
        return "_".join(words)
    if naming_case == "camel":
        return to_camel(words)
    if naming_case == "pascal":
        return to_pascal(words)
    return "-".join(words)


__all__ = [
    "CATEGORY_ORDER",
    "apply_case",
    "capitalize",
    "extract_numeric_key",
    "extract_sort_key",
    "fmt_number",
    "kebab_to_camel",
    "order_categories",
    "path_to_camel",
    "path_to_kebab",
    "path_to_pascal",
    "path_to_token_name",
    "rounded",
    "segment_to_kebab",
    "split_words",
    "to_camel",
    "to_pascal",
]
