# schemargs — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Color constants and the rich theme used when rendering help pages.

Styles:
- `help.usage`: the usage line
- `help.title`: section titles ("Options:", "Available commands:")
- `help.key`: option flags and command names in listings
- `help.error`: the trailing error line
"""
from rich.theme import Theme


class OneColors:
    """Hex colors from the One Dark palette."""

    LIGHT_RED = "#E06C75"
    CYAN = "#56B6C2"


def get_theme() -> Theme:
    """Return the rich theme with the `help.*` styles."""
    return Theme(
        {
            "help.usage": "bold",
            "help.title": "bold",
            "help.key": OneColors.CYAN,
            "help.error": f"bold {OneColors.LIGHT_RED}",
        }
    )
