"""Data model for download candidates found on a distribution page."""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class DownloadLinkCandidate:
    """A download option that passed the ad filter."""

    title: str
    description: str
    href: str
    version: Optional[str] = None  # e.g. "2.3.10", parsed from the title
    is_mod: bool = False
    is_original: bool = False

    def version_parts(self):
        """Dotted version as a list of ints; non-numeric parts count as 0."""
        if not self.version:
            return []
        return [int(part) if part.isdigit() else 0 for part in self.version.split('.')]

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
