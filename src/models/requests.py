"""Render request options and validation."""

import re
from dataclasses import dataclass, field

from core.config import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MAX_WIDTH,
    DEFAULT_TIME_ZONE,
    MAX_RESULTS_CAP,
)
from core.errors import (
    InvalidHighlightFormatError,
    InvalidPatternError,
    InvalidRequestError,
)


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a user-supplied regex, raising InvalidPatternError on failure."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from e


def parse_exclude_rules(exclude: str) -> list[re.Pattern]:
    """Parse a comma-separated list of regex patterns."""
    if not exclude:
        return []
    return [compile_pattern(p) for p in exclude.split(",")]


def parse_highlight_rules(highlights: str) -> list[tuple[re.Pattern, str]]:
    """
    Parse a flat comma-separated list alternating pattern and color name.

    Declaration order is preserved; the first matching rule wins when
    coloring. Color names are not checked here.
    """
    if not highlights:
        return []
    parts = highlights.split(",")
    if len(parts) % 2 != 0:
        raise InvalidHighlightFormatError(
            "Invalid Highlights, (should be csv list of regex,color)"
        )
    return [
        (compile_pattern(parts[i]), parts[i + 1]) for i in range(0, len(parts), 2)
    ]


@dataclass
class RenderRequest:
    """Options for one agenda render, decoded from the request query."""

    user_id: str
    max_results: int = DEFAULT_MAX_RESULTS
    time_zone: str = DEFAULT_TIME_ZONE
    all_day: bool = True
    highlights: str = ""
    exclude: str = ""
    max_width: int = 0
    no_color: bool = False

    highlight_rules: list[tuple[re.Pattern, str]] = field(default_factory=list)
    exclude_rules: list[re.Pattern] = field(default_factory=list)

    def __str__(self) -> str:
        return f"({self.user_id}) max: {self.max_results}"

    @property
    def color_enabled(self) -> bool:
        return not self.no_color

    def prepare(self) -> None:
        """
        Validate and normalize the request in place.

        Raises:
            InvalidRequestError: user id is empty
            InvalidPatternError: a regex does not compile
            InvalidHighlightFormatError: odd number of highlight elements
        """
        if not self.user_id:
            raise InvalidRequestError("Invalid UUID")
        # No lower bound: values <= 0 fetch nothing
        if self.max_results > MAX_RESULTS_CAP:
            self.max_results = MAX_RESULTS_CAP
        if self.max_width == 0:
            self.max_width = DEFAULT_MAX_WIDTH

        exclude_rules = parse_exclude_rules(self.exclude)
        highlight_rules = parse_highlight_rules(self.highlights)

        self.exclude_rules = exclude_rules
        self.highlight_rules = highlight_rules
