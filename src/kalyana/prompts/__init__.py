"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: kalyana/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt text content, stripped of surrounding whitespace

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    # Check working directory first (allows user overrides)
    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8").strip()

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8").strip()

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def get_persona_prompt(path: str | Path | None = None) -> str:
    """Get the persona system prompt injected by the gateway.

    Args:
        path: Explicit persona file, bypassing the search order
    """
    if path is not None:
        return Path(path).expanduser().read_text(encoding="utf-8").strip()
    return load_prompt("persona")


def get_greeting_instruction() -> str:
    """Instruction sent when a fresh session opens."""
    return load_prompt("greeting")


def get_closing_instruction() -> str:
    """Instruction sent when the user ends a session."""
    return load_prompt("closing")


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "clear_cache",
    "get_closing_instruction",
    "get_greeting_instruction",
    "get_persona_prompt",
    "load_prompt",
]
