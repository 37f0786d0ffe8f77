"""Parser for the sectioned `key:value` text returned by the INFO command."""

import math
import re
from typing import Union

from core.models import InfoSection

# Pre-compiled patterns for numeric values
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")

DEFAULT_SECTION = "default"
SECTION_MARKER = "#"


def coerce_value(raw: str) -> Union[int, float, str]:
    """
    Convert a trimmed INFO value to int or float when it is a plain numeric literal.

    Anything else stays text, including "nan", "inf", hex and empty values.
    """
    if _INTEGER_PATTERN.match(raw):
        return int(raw)
    if _DECIMAL_PATTERN.match(raw):
        number = float(raw)
        if math.isfinite(number):
            return number
    return raw


def parse_info(text: str) -> dict[str, InfoSection]:
    """
    Parse INFO output into {section: {field: value}}.

    - "# Name" lines open a section; a bare "#" is ignored
    - Fields before the first section land in "default", created only when used
    - Each field line splits on its first ":"; lines without one are skipped

    Never raises.

    Args:
        text: Raw INFO reply

    Returns:
        Sections in reply order
    """
    sections: dict[str, InfoSection] = {}
    current = DEFAULT_SECTION

    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue

        if line.startswith(SECTION_MARKER):
            name = line[len(SECTION_MARKER):].strip()
            if name:
                current = name
                sections[current] = {}
            continue

        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key:
            continue

        sections.setdefault(current, {})[key] = coerce_value(value.strip())

    return sections


__all__ = ["DEFAULT_SECTION", "coerce_value", "parse_info"]
