"""Deletion-safety classifier.

Attributes a path to the application that most likely owns it, then
derives a deletion-risk assessment from that association and the file
extension. Both steps are pure functions of the path (and the user's
application data roots).

Association priority (first match wins):
1. Known application locations (confidence 90)
2. Personal folders (confidence 85)
3. Cache/temp folders (confidence 80)
4. Per-user application data roots (confidence 70)
5. Unknown (confidence 10)
"""

import os

from diskscope.core.paths import get_app_data_roots
from diskscope.safety.models import (
    AppAssociation,
    AssociationType,
    DeletionAssessment,
    SafetyLevel,
)
from diskscope.safety.rules import (
    APP_RULES,
    CACHE_SEGMENTS,
    CONFIG_EXTENSIONS,
    DATABASE_EXTENSIONS,
    DISPOSABLE_EXTENSIONS,
    INSTALLED_CORE_EXTENSIONS,
    PERSONAL_SEGMENTS,
    app_name_under_root,
    contains_segment,
    split_segments,
)

KNOWN_APP_CONFIDENCE = 90
PERSONAL_CONFIDENCE = 85
CACHE_CONFIDENCE = 80
APP_DATA_CONFIDENCE = 70
UNKNOWN_CONFIDENCE = 10


def get_extension(path: str) -> str:
    """Get the lowercase extension of a path without the leading dot."""
    segments = split_segments(path)
    if not segments:
        return ""
    return os.path.splitext(segments[-1])[1][1:].lower()


def get_app_association(path: str) -> AppAssociation:
    """Attribute a path to an application.

    Args:
        path: Absolute path of a file or directory.

    Returns:
        The association of the first matching rule.
    """
    segments = split_segments(path)
    ancestors = tuple(segment.casefold() for segment in segments[:-1])

    for rule in APP_RULES:
        if rule.matches(ancestors):
            return AppAssociation(
                app_name=rule.app_name,
                association_type=rule.association_type,
                confidence=KNOWN_APP_CONFIDENCE,
            )

    if contains_segment(ancestors, PERSONAL_SEGMENTS):
        return AppAssociation(
            app_name="Personal Files",
            association_type=AssociationType.PERSONAL,
            confidence=PERSONAL_CONFIDENCE,
        )

    if contains_segment(ancestors, CACHE_SEGMENTS):
        return AppAssociation(
            app_name="Cache Files",
            association_type=AssociationType.CACHE,
            confidence=CACHE_CONFIDENCE,
        )

    for root in get_app_data_roots():
        app_name = app_name_under_root(segments, root)
        if app_name is not None:
            return AppAssociation(
                app_name=app_name,
                association_type=AssociationType.APP_DATA,
                confidence=APP_DATA_CONFIDENCE,
            )

    return AppAssociation(
        app_name="unknown",
        association_type=AssociationType.UNKNOWN,
        confidence=UNKNOWN_CONFIDENCE,
    )


def assess(association: AppAssociation, extension: str) -> DeletionAssessment:
    """Derive the deletion risk from an association and a file extension.

    Args:
        association: Association of the path.
        extension: Lowercase extension without the dot ("" if none).

    Returns:
        DeletionAssessment for the path.
    """
    kind = association.association_type
    app = association.app_name

    if kind == AssociationType.SYSTEM:
        return DeletionAssessment(
            safety_level=SafetyLevel.DANGER,
            reason="System file, deleting it may destabilize the system",
            impact="May prevent the operating system from working correctly",
            associated_app=association,
        )

    if kind == AssociationType.INSTALLED:
        if extension in INSTALLED_CORE_EXTENSIONS:
            return DeletionAssessment(
                safety_level=SafetyLevel.DANGER,
                reason="Application core file",
                impact=f"{app} may stop working",
                associated_app=association,
            )
        return DeletionAssessment(
            safety_level=SafetyLevel.CAUTION,
            reason="Application file",
            impact=f"May affect {app}",
            associated_app=association,
        )

    if kind == AssociationType.CACHE:
        return DeletionAssessment(
            safety_level=SafetyLevel.SAFE,
            reason="Cache or temporary file, safe to delete",
            impact="Applications recreate it when needed",
            associated_app=association,
        )

    if kind == AssociationType.PERSONAL:
        return DeletionAssessment(
            safety_level=SafetyLevel.CAUTION,
            reason="Personal file, make sure it is no longer needed",
            associated_app=association,
        )

    if kind == AssociationType.APP_DATA:
        if extension in DISPOSABLE_EXTENSIONS:
            return DeletionAssessment(
                safety_level=SafetyLevel.SAFE,
                reason="Log or temporary file",
                impact="Does not affect application functionality",
                associated_app=association,
            )
        if extension in CONFIG_EXTENSIONS:
            return DeletionAssessment(
                safety_level=SafetyLevel.CAUTION,
                reason="Configuration file",
                impact=f"{app} may need to be reconfigured",
                associated_app=association,
            )
        if extension in DATABASE_EXTENSIONS:
            return DeletionAssessment(
                safety_level=SafetyLevel.CAUTION,
                reason="Database file",
                impact=f"Data stored by {app} may be lost",
                associated_app=association,
            )
        return DeletionAssessment(
            safety_level=SafetyLevel.CAUTION,
            reason="Application data",
            impact=f"May affect {app}",
            associated_app=association,
        )

    return DeletionAssessment(
        safety_level=SafetyLevel.CAUTION,
        reason="Unknown file type",
        associated_app=association,
    )


def get_deletion_assessment(path: str) -> DeletionAssessment:
    """Assess the risk of deleting a path.

    Args:
        path: Absolute path of a file or directory.

    Returns:
        DeletionAssessment including the association it is based on.
    """
    return assess(get_app_association(path), get_extension(path))
