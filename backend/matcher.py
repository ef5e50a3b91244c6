# Term matching - case-insensitive substring tests and regex-safe terms
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)


def matches(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Case-insensitive substring test. An empty needle matches everything."""
    needle = (needle or "").lower()
    if not needle:
        return True
    return needle in (haystack or "").lower()


def escape_for_pattern(term: str) -> str:
    """Escape every regex metacharacter so the term matches only literally"""
    return re.escape(term or "")


def compile_term(term: Optional[str]) -> Optional[re.Pattern]:
    """
    Global case-insensitive pattern for a literal term.
    Returns None for blank terms or if a pattern cannot be built (no-match).
    """
    if not term or not term.strip():
        return None
    try:
        return re.compile(escape_for_pattern(term), flags=re.IGNORECASE)
    except re.error:
        logger.warning("Could not compile highlight pattern for %r", term)
        return None
