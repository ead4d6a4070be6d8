"""Domain models."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ServerDraft(BaseModel):
    """Server fields without an id: the input of insert and the patch of update.

    Empty values mean "not supplied"; there is no way to clear a field.
    """

    model_config = ConfigDict(frozen=True)

    fqdn: str = ""
    ip: str = ""
    tags: list[str] = Field(default_factory=list)


class Server(BaseModel):
    """A stored server record (value object)."""

    model_config = ConfigDict(frozen=True)

    id: str
    fqdn: str
    ip: str
    tags: list[str]

    @classmethod
    def from_draft(cls, server_id: str, draft: ServerDraft) -> "Server":
        return cls(id=server_id, fqdn=draft.fqdn, ip=draft.ip, tags=list(draft.tags))

    def merged_with(self, patch: ServerDraft) -> "Server":
        """
        Apply a partial update and return the merged record.

        Rules:
        - ip / fqdn -> overwritten when the patch value is non-empty and differs
        - tags -> overwritten only when the patch is non-empty and its length differs
          from the current list; a same-length list with other values is ignored
        - id never changes
        """
        changes: dict[str, object] = {}
        if patch.ip and patch.ip != self.ip:
            changes["ip"] = patch.ip
        if patch.fqdn and patch.fqdn != self.fqdn:
            changes["fqdn"] = patch.fqdn
        if patch.tags and len(patch.tags) != len(self.tags):
            changes["tags"] = list(patch.tags)
        if not changes:
            return self
        return self.model_copy(update=changes)
