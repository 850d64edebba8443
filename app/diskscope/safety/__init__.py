"""Deletion-safety classification.

This module attributes paths to the applications that own them and
rates how risky it is to delete them.
"""

from diskscope.safety.classifier import (
    assess,
    get_app_association,
    get_deletion_assessment,
    get_extension,
)
from diskscope.safety.models import (
    AppAssociation,
    AssociationType,
    DeletionAssessment,
    SafetyLevel,
)
from diskscope.safety.rules import APP_RULES, PathRule

__all__ = [
    "APP_RULES",
    "AppAssociation",
    "AssociationType",
    "DeletionAssessment",
    "PathRule",
    "SafetyLevel",
    "assess",
    "get_app_association",
    "get_deletion_assessment",
    "get_extension",
]
