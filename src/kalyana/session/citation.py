"""Reply post-processing.

Replies may end with a citation block set off by a line holding only an
em-dash. The split is recomputed from the stored content every time it is
needed, so it must be deterministic and stable under re-joining.
"""

import re

from .models import ReplySegments

SEPARATOR = "—"
_SEPARATOR_RE = re.compile(r"\n\s*—\s*\n")
_URL_RE = re.compile(r"https?://[^\s)]+")


def split_citation(text: str | None) -> ReplySegments:
    """Split reply text into main and citation segments.

    Args:
        text: Raw reply text

    Returns:
        ReplySegments; ``citation`` is empty when no separator is present
    """
    if not text:
        return ReplySegments("", "")
    parts = _SEPARATOR_RE.split(text)
    if len(parts) >= 2:
        return ReplySegments(parts[0].strip(), f"\n{SEPARATOR}\n".join(parts[1:]).strip())
    return ReplySegments(text.strip(), "")


def join_segments(main: str, citation: str = "") -> str:
    """Render segments back into reply text with the separator convention."""
    if not citation:
        return main
    return f"{main}\n\n{SEPARATOR}\n\n{citation}"


def find_links(citation: str) -> list[str]:
    """Return the http(s) URLs mentioned in a citation, in order."""
    return _URL_RE.findall(citation or "")
