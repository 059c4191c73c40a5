"""Expense categories and their display colours.

``CATEGORY_COLORS`` is the single source of truth: adding a category here
makes it selectable in the forms and gives it a chart colour.
"""

from __future__ import annotations

from typing import Dict, List

CATEGORY_COLORS: Dict[str, str] = {
    "Food & Dining": "#FF6B6B",
    "Transportation": "#4ECDC4",
    "Books & Supplies": "#45B7D1",
    "Entertainment": "#96CEB4",
    "Clothing": "#FFEAA7",
    "Health & Medical": "#DDA0DD",
    "Utilities": "#98D8C8",
    "Other": "#F7DC6F",
}

CATEGORIES: List[str] = list(CATEGORY_COLORS)

FALLBACK_COLOR = "#B0B0B0"


def is_valid_category(category: object) -> bool:
    return isinstance(category, str) and category in CATEGORY_COLORS


def category_color(category: str) -> str:
    """Return the display colour for ``category`` (grey when unknown)."""
    return CATEGORY_COLORS.get(category, FALLBACK_COLOR)


def badge_colors(category: str) -> Dict[str, str]:
    """Background/foreground pair for a category badge.

    The background is the category colour at ~12% opacity (``20`` hex alpha).
    """
    color = category_color(category)
    return {'background': f"{color}20", 'foreground': color}
