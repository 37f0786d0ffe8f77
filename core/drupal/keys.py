"""
Drupal cache-key codec.

Keys written by the Drupal Redis backend look like

    {prefix}:{bin}:{cid}[label]=value][label]=value]...
    {prefix}:{bin}:{cid}:[label]=value:[label]=value

The bin is always the second colon-delimited segment. Context parameters are
located by a single tokenizing pass. A `[label]=` marker counts only when it
opens the context list or directly follows ":" or "]", so bracketed query
parameters such as `?f[0]=type` stay inside their value. A value runs up to
the next marker. A value that itself contains ":[label]=" is cut there, which
is a known limitation of the format.

All functions here are pure.
"""

from dataclasses import dataclass
from typing import Optional

from core.constants import (
    FLAG_TRUE,
    LABEL_LANGUAGE_CONTENT,
    LABEL_LANGUAGE_INTERFACE,
    LABEL_ROLE_ANONYMOUS,
    LABEL_ROLE_AUTHENTICATED,
    LABEL_ROUTE,
    LABEL_THEME,
    LABEL_URL,
    LABEL_URL_PATH,
    UNKNOWN_BIN,
)
from core.models import TTLValue

_MARKER_OPEN = "["
_MARKER_CLOSE = "]="
_VALUE_JOINERS = (":", "]")


@dataclass
class CacheKeyRow:
    """One scanned key, decoded and enriched. Folded into the aggregates, never retained."""

    key: str
    bin: str
    bytes: Optional[int] = None
    ttl: TTLValue = None
    route: Optional[str] = None
    url: Optional[str] = None
    url_path: Optional[str] = None
    theme: Optional[str] = None
    lang_content: Optional[str] = None
    lang_interface: Optional[str] = None
    is_anon: bool = False
    is_auth: bool = False


def _find_markers(key: str) -> list[tuple[int, int, str]]:
    """
    Locate every `[label]=` marker.

    Returns:
        List of (marker_start, value_start, label) in key order
    """
    markers = []
    first_open = key.find(_MARKER_OPEN)
    search_from = 0
    while True:
        start = key.find(_MARKER_OPEN, search_from)
        if start == -1:
            return markers
        close = key.find(_MARKER_CLOSE, start + 1)
        if close == -1:
            return markers

        # A marker opens the context list or directly follows a joiner
        opens_marker = start == first_open or key[start - 1] in _VALUE_JOINERS
        label = key[start + 1:close]
        if opens_marker and label and _MARKER_OPEN not in label and "]" not in label:
            markers.append((start, close + len(_MARKER_CLOSE), label))
            search_from = close + len(_MARKER_CLOSE)
        else:
            # Not a marker; a later "[" may still open one
            search_from = start + 1


def parse_context(key: str) -> dict[str, str]:
    """
    Decode the context parameters of a key.

    The first occurrence of a label wins. Values are returned verbatim.

    Args:
        key: Full cache key

    Returns:
        Mapping of label to value, in key order
    """
    markers = _find_markers(key)
    context: dict[str, str] = {}
    if not markers:
        return context

    # "{cid}[label]=value]" closes the list with "]"; "{cid}:[label]=value" does not
    first_start = markers[0][0]
    bracket_form = first_start > 0 and key[first_start - 1] != ":"

    for index, (_, value_start, label) in enumerate(markers):
        if index + 1 < len(markers):
            value_end = markers[index + 1][0]
            # Drop the single character joining this value to the next marker
            if value_end > value_start and key[value_end - 1] in _VALUE_JOINERS:
                value_end -= 1
        else:
            value_end = len(key)
            if bracket_form and value_end > value_start and key.endswith("]"):
                value_end -= 1

        context.setdefault(label, key[value_start:value_end])

    return context


def _is_flag_set(value: Optional[str]) -> bool:
    # Only the literal "true" counts; "1" or "TRUE" are treated as unset
    return value == FLAG_TRUE


def decode_key(key: str) -> CacheKeyRow:
    """
    Decode a namespaced key into a row.

    Missing segments and labels never raise: an absent bin becomes "unknown"
    and absent labels stay None.
    """
    parts = key.split(":")
    bin_name = parts[1] if len(parts) > 1 and parts[1] else UNKNOWN_BIN
    context = parse_context(key)

    return CacheKeyRow(
        key=key,
        bin=bin_name,
        route=context.get(LABEL_ROUTE),
        url=context.get(LABEL_URL),
        url_path=context.get(LABEL_URL_PATH),
        theme=context.get(LABEL_THEME),
        lang_content=context.get(LABEL_LANGUAGE_CONTENT),
        lang_interface=context.get(LABEL_LANGUAGE_INTERFACE),
        is_anon=_is_flag_set(context.get(LABEL_ROLE_ANONYMOUS)),
        is_auth=_is_flag_set(context.get(LABEL_ROLE_AUTHENTICATED)),
    )


def build_search_pattern(prefix: str, bin_name: Optional[str], cid: str) -> str:
    """SCAN MATCH glob for a CID, optionally restricted to one bin."""
    if bin_name:
        return f"{prefix}:{bin_name}:{cid}*"
    return f"{prefix}:*:{cid}*"


def extract_cid_and_bin(key: str, prefix: str) -> Optional[tuple[str, str]]:
    """
    Split a key into (bin, cid).

    The CID is the third segment up to the first "[".

    Returns:
        (bin, cid), or None when the key is outside the prefix or has fewer than 3 segments
    """
    if not key.startswith(f"{prefix}:"):
        return None
    parts = key.split(":")
    if len(parts) < 3:
        return None
    return parts[1], parts[2].split("[", 1)[0]


__all__ = [
    "CacheKeyRow",
    "build_search_pattern",
    "decode_key",
    "extract_cid_and_bin",
    "parse_context",
]
