"""Data model for a single app page."""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

DOWNLOAD_URL_SENTINEL = '#'


@dataclass(frozen=True)
class AppDetail:
    """Everything shown on an app's detail page."""

    title: str
    publisher: str
    icon: str
    mod_feature: str
    rating: int
    version: str
    size: str
    requires: str
    screenshots: List[str] = field(default_factory=list)
    about: str = ""
    download_url: str = DOWNLOAD_URL_SENTINEL  # decoded endpoint or '#'
    play_store_url: Optional[str] = None
    details: Dict[str, str] = field(default_factory=dict)  # label -> inner HTML

    @property
    def has_download(self):
        """True when the page exposed a decodable download endpoint."""
        return self.download_url != DOWNLOAD_URL_SENTINEL

    def to_dict(self):
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
