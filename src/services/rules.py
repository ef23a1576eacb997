"""
Event classification: exclusion and title colorization.
"""

from rich.color import ColorSystem
from rich.style import Style

from models.requests import RenderRequest

# =============================================================================
# COLOR TABLES
# =============================================================================

COLORS = {
    name: Style(color=name)
    for name in ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")
}

# Fallback colors by the user's own response status when no highlight matches
STATUS_COLORS = {
    "accepted": "green",
    "declined": "red",
}


def colorize(text: str, color_name: str) -> str:
    """Wrap text in ANSI escape codes for a named color (8-color palette)."""
    return COLORS[color_name].render(text, color_system=ColorSystem.STANDARD)


def is_excluded(title: str, request: RenderRequest) -> bool:
    """Check if the title matches any exclude pattern."""
    return any(pattern.search(title) for pattern in request.exclude_rules)


def color_title(
    text: str,
    response_status: str,
    request: RenderRequest,
    status_colors: dict[str, str] = STATUS_COLORS,
) -> str:
    """
    Color an (already wrapped) event title.

    Highlight rules are checked in declaration order; the first rule with a
    known color whose pattern matches wins. Otherwise the color comes from
    the response status table. Unknown color names are ignored.
    """
    if not request.color_enabled:
        return text

    for pattern, color_name in request.highlight_rules:
        if color_name not in COLORS:
            continue
        if pattern.search(text):
            return colorize(text, color_name)

    color_name = status_colors.get(response_status)
    if color_name is None or color_name not in COLORS:
        return text
    return colorize(text, color_name)


def color_text(text: str, color_name: str, request: RenderRequest) -> str:
    """Color text unless coloring is disabled for the request."""
    if not request.color_enabled:
        return text
    return colorize(text, color_name)
