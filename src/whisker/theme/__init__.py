"""Whisker theme directories — the child/parent override pair.

The *stylesheet* directory is the active theme (a child theme when one is in
use); the *template* directory is its parent.  When both point at the same
place there is no child theme and the override chain collapses to
``[theme, plugin]``.

Thread Safety:
    ``ThemeDirectories`` is frozen.  Safe for free-threading.

"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ThemeDirectories:
    """Active and parent theme directories.

    Attributes:
        stylesheet_directory: Directory of the active theme (child theme
            when one is in use).
        template_directory: Directory of the parent theme.  Defaults to
            *stylesheet_directory* (no child theme).

    """

    stylesheet_directory: Path
    template_directory: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stylesheet_directory", Path(self.stylesheet_directory))
        template = self.template_directory
        object.__setattr__(
            self,
            "template_directory",
            self.stylesheet_directory if template is None else Path(template),
        )

    @classmethod
    def single(cls, directory: Path | str) -> ThemeDirectories:
        """A theme with no child theme on top."""
        return cls(Path(directory))

    def is_child_theme(self) -> bool:
        """Whether a child theme is in use (active differs from parent)."""
        return self.stylesheet_directory != self.template_directory
