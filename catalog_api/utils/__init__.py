"""Utility modules."""

from catalog_api.utils.params import (
    parse_bool,
    parse_choice,
    parse_choice_list,
    parse_id_list,
    parse_positive_int,
)

__all__ = [
    "parse_bool",
    "parse_choice",
    "parse_choice_list",
    "parse_id_list",
    "parse_positive_int",
]
