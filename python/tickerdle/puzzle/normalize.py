"""Free-text canonicalization for matching guesses."""

from __future__ import annotations

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(text: Optional[str]) -> str:
    """Lowercase, spell out ``&``, collapse non-alphanumerics to single spaces."""
    if not text:
        return ""
    lowered = str(text).lower().replace("&", " and ")
    return _NON_ALNUM.sub(" ", lowered).strip()
