from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

FALLBACK_PROVIDER = "fallback-template"


class Framework(str, Enum):
    HTML = "html"
    TAILWIND = "tailwind"
    REACT = "react"
    VUE = "vue"

    @classmethod
    def parse(cls, value) -> "Framework":
        """Unknown or missing values fall back to plain HTML."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.HTML


class Feature(str, Enum):
    RESPONSIVE = "responsive"
    ACCESSIBLE = "accessible"
    INTERACTIVE = "interactive"
    MODERN = "modern"

    @classmethod
    def parse_many(cls, values) -> List["Feature"]:
        """Keep recognised flags in first-seen order; anything else is dropped."""
        known = {f.value: f for f in cls}
        result = []
        for value in values or []:
            if isinstance(value, cls):
                feature = value
            else:
                feature = known.get(value) if isinstance(value, str) else None
            if feature and feature not in result:
                result.append(feature)
        return result


class AttemptMode(str, Enum):
    VISION = "vision"
    TEXT_ONLY = "text-only"


class AttemptOutcome(str, Enum):
    SUCCESS = "success"
    RECOVERABLE_FAILURE = "recoverable-failure"
    EXHAUSTED = "exhausted"


@dataclass
class ProviderAttempt:
    model: str
    mode: AttemptMode
    outcome: AttemptOutcome
    error: Optional[str] = None


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class GenerationResult(BaseModel):
    success: bool = True
    code: str
    framework: Framework
    features: List[Feature] = Field(default_factory=list)
    provider: str
    model: str = "none"
    vision: bool = False
    note: Optional[str] = None
    timestamp: str = Field(default_factory=utc_timestamp)

    @property
    def from_fallback(self) -> bool:
        return self.provider == FALLBACK_PROVIDER
