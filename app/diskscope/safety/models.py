"""Deletion-safety domain models.

This module defines the application association of a path (which
program most likely owns it) and the resulting deletion assessment.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AssociationType(str, Enum):
    """Heuristic category of what owns or created a path.

    Attributes:
        INSTALLED: Part of an installed application.
        APP_DATA: Data written by an application.
        CACHE: Cache or temporary data that is recreated on demand.
        PERSONAL: User documents, downloads and media.
        SYSTEM: Operating system files.
        UNKNOWN: No rule matched.
    """

    INSTALLED = "installed"
    APP_DATA = "appData"
    CACHE = "cache"
    PERSONAL = "personal"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class SafetyLevel(str, Enum):
    """Deletion-risk rating of a path.

    Attributes:
        SAFE: Can be deleted without lasting effect.
        CAUTION: Deleting may lose data or settings.
        DANGER: Deleting may break an application or the system.
    """

    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"


@dataclass(frozen=True, slots=True)
class AppAssociation:
    """The application a path is attributed to.

    Attributes:
        app_name: Display name of the application (or category).
        association_type: Category of the association.
        confidence: Confidence of the attribution (0 to 100).
        icon_path: Optional path to an application icon.
    """

    app_name: str
    association_type: AssociationType
    confidence: int
    icon_path: str | None = None

    def __post_init__(self) -> None:
        """Validate association data after initialization."""
        if not (0 <= self.confidence <= 100):
            msg = f"Confidence must be between 0 and 100, got {self.confidence}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "app_name": self.app_name,
            "icon_path": self.icon_path,
            "association_type": self.association_type.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True, slots=True)
class DeletionAssessment:
    """Deletion-risk assessment of a path.

    Attributes:
        safety_level: Risk rating.
        reason: Short explanation of the rating.
        impact: Likely consequence of deleting the path, if known.
        associated_app: Association the rating was derived from.
    """

    safety_level: SafetyLevel
    reason: str
    impact: str | None = None
    associated_app: AppAssociation | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "safety_level": self.safety_level.value,
            "reason": self.reason,
            "impact": self.impact,
            "associated_app": self.associated_app.to_dict() if self.associated_app else None,
        }
