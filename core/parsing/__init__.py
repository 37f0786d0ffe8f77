# INFO reply parsing

from .info_parser import coerce_value, parse_info

__all__ = [
    "coerce_value",
    "parse_info",
]
