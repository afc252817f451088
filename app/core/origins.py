import re
from typing import Iterable


def is_origin_allowed(
    origin: str | None,
    allowed_origins: Iterable[str],
    origin_patterns: Iterable[str],
) -> bool:
    """
    Requests without an Origin header (curl, server-to-server) are allowed.
    Otherwise the origin must equal an allow-list entry or fully match a pattern.
    """
    if not origin:
        return True

    if origin in allowed_origins:
        return True

    return any(re.fullmatch(pattern, origin) for pattern in origin_patterns)


def combined_origin_regex(origin_patterns: Iterable[str]) -> str | None:
    patterns = list(origin_patterns)
    if not patterns:
        return None
    return "|".join(f"(?:{pattern})" for pattern in patterns)
