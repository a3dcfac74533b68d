"""
Constants
Centralised storage for Bugzilla field names and status-matching markers.
"""
INCLUDE_FIELDS = "id,blocks,depends_on,summary,status,attachments,assigned_to,resolution,type"
UNASSIGNED = "nobody@mozilla.org"
PATCH_PREFIX = "phabricator-"
META_PREFIXES = ("[meta]", "[bugs]")
CLOSED_STATUSES = ("RESOLVED", "VERIFIED")
OPEN_STATUSES = ("NEW", "REOPENED")
DEFECT_TYPE = "defect"
