"""
Terminal rendering for Seisen.

Light theme is "Zen" (teal/cyan), dark theme is "Samurai" (purple/pink).
"""

import os

from seisen.categories import CATEGORIES, display_name
from seisen.session import SessionState


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    ITALIC = "\033[3m"
    REVERSE = "\033[7m"

    # Foreground colors
    CYAN = "\033[36m"
    MAGENTA = "\033[35m"

    # Bright foreground colors
    BRIGHT_CYAN = "\033[96m"
    BRIGHT_MAGENTA = "\033[95m"
    BRIGHT_BLUE = "\033[94m"

    @classmethod
    def enabled(cls) -> bool:
        """Check if colors should be enabled."""
        # Disable if NO_COLOR is set
        if os.environ.get("NO_COLOR"):
            return False
        return True


def c(text: str, *codes: str) -> str:
    """Apply color codes to text if colors are enabled."""
    if not Colors.enabled():
        return text
    return "".join(codes) + text + Colors.RESET


THEMES = {
    False: {
        "name": "Mode Zen",
        "title": "SEISEN 🪷",
        "accent": Colors.CYAN,
        "note": Colors.BRIGHT_CYAN,
        "footer": "\"La sagesse vient du calme intérieur\"",
    },
    True: {
        "name": "Mode Samurai",
        "title": "SEISEN ⚔️",
        "accent": Colors.MAGENTA,
        "note": Colors.BRIGHT_MAGENTA,
        "footer": "\"Le guerrier intérieur ne dort jamais\"",
    },
}


def theme_for(state: SessionState) -> dict[str, str]:
    return THEMES[state.dark_mode]


def format_categories(active: str, accent: str) -> str:
    """Category bar, active category highlighted."""
    labels = []
    for category in CATEGORIES:
        label = f" {display_name(category)} "
        if category == active:
            labels.append(c(label, Colors.BOLD, Colors.REVERSE, accent))
        else:
            labels.append(c(label, Colors.DIM))
    return " ".join(labels)


def format_note(note: str, color: str = "") -> str:
    """A single note, framed."""
    return c(f"  « {note} »", Colors.BOLD, color)


def render_state(state: SessionState) -> str:
    """Full screen for the interactive session."""
    theme = theme_for(state)
    accent = theme["accent"]

    lines = [
        c(f"━━━ {theme['title']} ━━━", Colors.BOLD, accent),
        "",
        format_categories(state.category, accent),
        "",
        format_note(state.current_note, theme["note"]),
        "",
        c(f"{theme['name']}  ·  {len(state.notes)} notes", Colors.DIM),
    ]
    if state.draft:
        lines.append(c(f"✍️  {state.draft}", Colors.ITALIC))
    lines.append(c(theme["footer"], Colors.ITALIC, accent))
    return "\n".join(lines)
