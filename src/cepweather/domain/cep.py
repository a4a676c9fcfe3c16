from __future__ import annotations

import re

CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(code: str) -> bool:
    """Return True when *code* is exactly eight ASCII digits with no separators."""
    return CEP_PATTERN.fullmatch(code) is not None
