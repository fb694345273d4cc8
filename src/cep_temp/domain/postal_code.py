from __future__ import annotations

import re

POSTAL_CODE_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_postal_code(code: str) -> bool:
    """Return True when ``code`` is exactly eight ASCII digits."""
    if not isinstance(code, str):
        return False
    return POSTAL_CODE_PATTERN.fullmatch(code) is not None
