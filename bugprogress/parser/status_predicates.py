"""
Status Predicates
=================
Boolean tests over a single bug's fields. All string matching for the
classifier lives here.

Missing or empty fields never raise; they just fail the prefix/suffix test.
"""
from bugprogress.core.constants import (
    CLOSED_STATUSES,
    DEFECT_TYPE,
    META_PREFIXES,
    OPEN_STATUSES,
    PATCH_PREFIX,
    UNASSIGNED,
)
from bugprogress.models.bug import Bug


def is_closed(node: Bug) -> bool:
    return (node.status or "").startswith(CLOSED_STATUSES)


def is_duplicate(node: Bug) -> bool:
    return (node.resolution or "").endswith("DUPLICATE")


def is_assigned(node: Bug) -> bool:
    """ASSIGNED, or NEW/REOPENED with a real assignee."""
    status = node.status or ""
    if status.startswith("ASSIGNED"):
        return True
    return status.startswith(OPEN_STATUSES) and (node.assigned_to or "") != UNASSIGNED


def has_patch(node: Bug) -> bool:
    """At least one live review-tool attachment."""
    return any(
        (attachment.file_name or "").startswith(PATCH_PREFIX) and not attachment.is_obsolete
        for attachment in node.attachments
    )


def is_meta_bug(node: Bug) -> bool:
    return (node.summary or "").startswith(META_PREFIXES)


def is_defect(node: Bug) -> bool:
    return node.type == DEFECT_TYPE
