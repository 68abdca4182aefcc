"""Lenient query parameter coercion.

Listing endpoints never reject malformed paging or sorting parameters;
invalid values fall back to safe defaults instead.
"""

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})


def parse_bool(value: str | None) -> bool:
    """Interpret a query string flag. Anything unrecognised is False."""
    if value is None:
        return False
    return value.strip().lower() in TRUE_VALUES


def parse_positive_int(value: str | None, default: int, maximum: int | None = None) -> int:
    """Parse a positive integer, falling back to ``default``.

    Values above ``maximum`` are clamped to it.
    """
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default

    if number < 1:
        return default
    if maximum is not None and number > maximum:
        return maximum
    return number


def parse_choice(value: str | None, choices: tuple[str, ...], default: str) -> str:
    """Return ``value`` lower-cased if it is one of ``choices``, else ``default``."""
    if value is None:
        return default
    normalized = value.strip().lower()
    return normalized if normalized in choices else default


def split_values(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated query values, dropping blanks."""
    result = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result


def parse_id_list(values: list[str] | None) -> list[int]:
    """Parse category ids from query values.

    Accepts repeated parameters and comma-separated lists. Tokens that are
    not integers are skipped; duplicates are removed keeping first order.
    """
    ids = []
    for token in split_values(values):
        try:
            category_id = int(token)
        except ValueError:
            continue
        if category_id not in ids:
            ids.append(category_id)
    return ids


def parse_choice_list(values: list[str] | None, choices: tuple[str, ...]) -> list[str]:
    """Keep the recognised entries of a multi-valued enum parameter."""
    selected = []
    for token in split_values(values):
        token = token.lower()
        if token in choices and token not in selected:
            selected.append(token)
    return selected
