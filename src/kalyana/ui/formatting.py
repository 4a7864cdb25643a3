"""Text formatting utilities for the TUI.

Hides how turns and citations are turned into Rich renderables.
"""

from rich.style import Style
from rich.text import Text

from ..session.citation import find_links

CITATION_STYLE = Style(italic=True, color="#7a9070")
LINK_STYLE = "underline #8faa6a"


def citation_text(citation: str) -> Text:
    """Render a citation with its URLs as clickable terminal links."""
    text = Text(style=CITATION_STYLE)
    position = 0
    for url in find_links(citation):
        start = citation.index(url, position)
        text.append(citation[position:start])
        text.append(url, style=Style.parse(LINK_STYLE) + Style(link=url))
        position = start + len(url)
    text.append(citation[position:])
    return text


def speaker_label(role: str, closing: bool = False) -> str:
    """Header line shown above a turn."""
    if role == "user":
        return "You"
    return "𑁍 Closing" if closing else "𑁍 Guide"
