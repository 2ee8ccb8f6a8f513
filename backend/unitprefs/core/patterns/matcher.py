"""Wildcard path patterns.

``*`` as a whole segment matches exactly one segment; inside a segment
(``*.speed*``) it matches any characters within that segment. ``**`` as a
whole segment matches zero or more segments. Matching is anchored at both
ends.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Iterable

from unitprefs.models.units import PathPatternRule

logger = logging.getLogger(__name__)

_STAR_SPLIT_RE = re.compile(r"(\*\*|\*)")


def _segment_regex(segment: str) -> str:
    if segment == "*":
        return r"[^.]+"
    parts = []
    for chunk in _STAR_SPLIT_RE.split(segment):
        if chunk == "**":
            parts.append(r".*")
        elif chunk == "*":
            parts.append(r"[^.]*")
        elif chunk:
            parts.append(re.escape(chunk))
    return "".join(parts)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    segments = pattern.split(".")
    last = len(segments) - 1
    regex = ""
    need_dot = False

    for i, segment in enumerate(segments):
        if segment == "**":
            if last == 0:
                regex += r".*"
            elif i == 0:
                regex += r"(?:.*\.)?"
            elif i == last:
                regex += r"(?:\..*)?"
            else:
                regex += r"\.(?:.*\.)?"
            need_dot = False
            continue

        if need_dot:
            regex += r"\."
        regex += _segment_regex(segment)
        need_dot = True

    return re.compile(rf"^{regex}$")


def matches_pattern(path: str, pattern: str) -> bool:
    return compile_pattern(pattern).match(path) is not None


def sort_by_priority(rules: Iterable[PathPatternRule]) -> list[PathPatternRule]:
    """Highest priority first; ``sorted`` is stable so ties keep their order."""
    return sorted(rules, key=lambda rule: rule.priority or 0, reverse=True)


def find_matching_pattern(path: str, rules: Iterable[PathPatternRule] | None) -> PathPatternRule | None:
    """Return the highest-priority rule whose pattern matches ``path``."""
    if not rules:
        return None
    for rule in sort_by_priority(rules):
        if matches_pattern(path, rule.pattern):
            logger.debug("Path %s matched pattern %s (priority %s)", path, rule.pattern, rule.priority)
            return rule
    return None
