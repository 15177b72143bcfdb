from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Article:
    title: str
    description: str
    link: str
    pub_date: str
    source: str
    published_at: Optional[datetime] = None
    # Full stripped summary; ``description`` is the truncated copy sent to the oracle
    summary: str = ""


@dataclass
class CandidateAnnouncement:
    brand: str = ""
    model: str = ""
    key_specs: List[str] = field(default_factory=list)
    article_url: str = ""
    pub_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ConfirmedNewBattery(CandidateAnnouncement):
    reason_new: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}".strip()
