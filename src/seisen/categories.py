"""
Note categories for Seisen.

The category set is FIXED. Each category is backed by exactly one text file.
"""

CATEGORIES: tuple[str, ...] = ("sensei_notes", "samurai", "zen", "42", "life", "custom")

DEFAULT_CATEGORY = "sensei_notes"

DISPLAY_NAMES = {
    "sensei_notes": "Sensei",
    "samurai": "Samurai",
    "zen": "Zen",
    "42": "42",
    "life": "Vie",
    "custom": "Perso",
}

# Written once on first start, never overwritten
DEFAULT_SAMPLES = {
    "sensei_notes": ("Respire profondément.", "Continue.", "Tu vas réussir."),
    "samurai": (
        "La maîtrise vient de la discipline.",
        "Avance même blessé.",
        "Le doute est l'ennemi du sabre.",
    ),
    "zen": ("Respire.", "Reviens au présent.", "Le calme est une force."),
    "42": ("Lis le man.", "Apprivoise la mémoire.", "Le code vrai est humble."),
    "life": ("Bois de l'eau.", "Appelle quelqu'un que tu aimes.", "Range ton esprit."),
    "custom": ("Écris ta propre voie.",),
}


def is_category(name: str) -> bool:
    """Check if name belongs to the fixed category set."""
    return name in CATEGORIES


def display_name(category: str) -> str:
    """Human label for a category (falls back to a capitalized name)."""
    return DISPLAY_NAMES.get(category, category.capitalize())


def sample_text(category: str) -> str:
    """Built-in sample content for a category, newline terminated."""
    return "".join(f"{line}\n" for line in DEFAULT_SAMPLES[category])
