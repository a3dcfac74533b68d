"""
Bug Model
=========
Pydantic models for the Bugzilla records the graph is built from.

Fields mirror the `include_fields` list requested from the REST API:
    id              — unique bug number, graph key and rendered node label
    summary         — one-line title, shown as the click tooltip
    status          — lifecycle string (NEW, ASSIGNED, RESOLVED, ...)
    resolution      — e.g. FIXED, DUPLICATE; empty while open
    type            — defect / enhancement / task
    assigned_to     — assignee email, "nobody@mozilla.org" when unassigned
    attachments     — file_name + is_obsolete, used for patch detection
    depends_on      — bugs this one waits on
    blocks          — reverse edges, carried but not rendered

Every field except id has an empty default so partial records validate.
"""
from typing import List
from pydantic import BaseModel, Field


class Attachment(BaseModel):
    file_name: str = ""
    is_obsolete: bool = False


class Bug(BaseModel):
    id: int
    summary: str = ""
    status: str = ""
    resolution: str = ""
    type: str = ""
    assigned_to: str = ""
    attachments: List[Attachment] = Field(default_factory=list)
    depends_on: List[int] = Field(default_factory=list)
    blocks: List[int] = Field(default_factory=list)

    # True for placeholders of bugs that were referenced but never fetched
    stub: bool = False

    @classmethod
    def make_stub(cls, bug_id: int) -> "Bug":
        return cls(id=bug_id, stub=True)
