"""Data models for catalog listings (home page sections and search results)."""

from dataclasses import dataclass, field, asdict
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class CatalogEntry:
    """One app/game summary shown in a browsing list."""

    title: str
    url: str
    icon: str = ""
    subtitle: Optional[str] = None  # search results only
    rating: int = 0

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Create CatalogEntry instance from dictionary."""
        return cls(**data)


@dataclass
class CatalogListing:
    """
    Entries of a listing document grouped by section heading.

    `sections` is filled in whatever order the section tasks finish, so its key
    order carries no meaning. `order` holds the headings in document order.
    """

    sections: Dict[str, List[CatalogEntry]] = field(default_factory=dict)
    order: List[str] = field(default_factory=list)

    def ordered_sections(self) -> Iterator[Tuple[str, List[CatalogEntry]]]:
        """Yield (heading, entries) pairs in document order."""
        for heading in self.order:
            yield heading, self.sections[heading]

    def __len__(self):
        return len(self.order)

    def to_dict(self):
        """Convert to dictionary for JSON serialization, sections in document order."""
        return {
            'order': list(self.order),
            'sections': [
                {'title': heading, 'apps': [entry.to_dict() for entry in entries]}
                for heading, entries in self.ordered_sections()
            ]
        }
