# admitrank/services/program_matcher.py
from __future__ import annotations

import re
from typing import Optional, Sequence

_WHITESPACE_RE = re.compile(r"\s+")
_ORDINAL_PREFIX_RE = re.compile(r"^\d+\.?")


def normalize_name(text: str) -> str:
    """Lower-case and drop every whitespace character: ' Sci - Math ' → 'sci-math'."""
    return _WHITESPACE_RE.sub("", (text or "").lower())


def normalize_preference(text: str) -> str:
    """
    Like normalize_name, but also strips a leading ordinal the import
    pipeline sometimes leaves in place: '1.Sci-Math' → 'sci-math'.
    """
    return _ORDINAL_PREFIX_RE.sub("", normalize_name(text), count=1)


def lenient_match(preference: str, program_names: Sequence[str]) -> Optional[str]:
    """
    First program (in the given order) whose normalized name equals, contains,
    or is contained in the normalized preference.
    """
    wanted = normalize_preference(preference)
    if not wanted:
        return None
    for name in program_names:
        candidate = normalize_name(name)
        if not candidate:
            continue
        if candidate == wanted or wanted in candidate or candidate in wanted:
            return name
    return None


def resolve_program(preference: Optional[str], program_names: Sequence[str]) -> Optional[str]:
    """
    Maps a preference string to a canonical program name:
      1) exact name match;
      2) lenient match (see lenient_match).
    Returns None when nothing matches.
    """
    if not isinstance(preference, str):
        return None
    if preference in program_names:
        return preference
    return lenient_match(preference, program_names)
