"""Prompt management module.

Externalizes prompts to text files for easy customization.
Prompts can be overridden by placing files in the working directory.
"""

import re
from functools import lru_cache
from pathlib import Path

# Default prompts directory (package location)
_PROMPTS_DIR = Path(__file__).parent

_PLACEHOLDER = re.compile(r"\{(topic|calories)\}")


@lru_cache(maxsize=16)
def load_prompt(name: str) -> str:
    """Load a prompt template from file.

    Search order:
    1. Current working directory: ./prompts/{name}.txt
    2. Package prompts directory: foodfinder/prompts/{name}.txt

    Args:
        name: Prompt name (without .txt extension)

    Returns:
        Prompt template text

    Raises:
        FileNotFoundError: If prompt file not found in any location
    """
    filename = f"{name}.txt"

    local_path = Path.cwd() / "prompts" / filename
    if local_path.exists():
        return local_path.read_text(encoding="utf-8")

    package_path = _PROMPTS_DIR / filename
    if package_path.exists():
        return package_path.read_text(encoding="utf-8")

    raise FileNotFoundError(
        f"Prompt '{name}' not found. Searched:\n"
        f"  - {local_path}\n"
        f"  - {package_path}"
    )


def render_recommendation_prompt(topic: str, calories: str) -> str:
    """Fill the recommendation template with the two collected slots.

    Slot values are substituted verbatim; braces inside them are not
    interpreted.
    """
    values = {"topic": topic, "calories": calories}
    template = load_prompt("recommendation")
    return _PLACEHOLDER.sub(lambda match: values[match.group(1)], template).strip()


def clear_cache() -> None:
    """Clear the prompt cache (useful after modifying prompt files)."""
    load_prompt.cache_clear()


__all__ = [
    "load_prompt",
    "render_recommendation_prompt",
    "clear_cache",
]
