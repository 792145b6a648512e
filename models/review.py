"""Data models for store reviews."""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass(frozen=True)
class DevReply:
    """Developer response attached to a review."""

    author: str
    text: str


@dataclass(frozen=True)
class Review:
    """A single user review. Only built for reviews with body text."""

    author: str
    author_img: str
    date: str
    rating: int
    text: str
    helpful: Optional[str] = None
    dev_reply: Optional[DevReply] = None

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
