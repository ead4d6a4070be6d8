from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from inventory_service.app.domain.models import Server, ServerDraft


def _require_encodable(value: str) -> str:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValueError("must be valid unicode text") from None
    return value


class ServerRequest(BaseModel):
    """Body of POST and PUT. Missing or null fields become empty so the validator reports them; a client id is ignored."""

    model_config = ConfigDict(extra="ignore")

    fqdn: str = ""
    ip: str = ""
    tags: list[str] = Field(default_factory=list)

    @field_validator("fqdn", "ip", "tags", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return [] if info.field_name == "tags" else ""
        return value

    @field_validator("fqdn", "ip")
    @classmethod
    def encodable_text(cls, value: str) -> str:
        """JSON escapes can smuggle lone surrogates that the store cannot encode."""
        return _require_encodable(value)

    @field_validator("tags")
    @classmethod
    def encodable_tags(cls, value: list[str]) -> list[str]:
        return [_require_encodable(tag) for tag in value]

    def to_draft(self) -> ServerDraft:
        return ServerDraft(fqdn=self.fqdn, ip=self.ip, tags=list(self.tags))


class ServerResponse(BaseModel):
    data: Server


class ServerListResponse(BaseModel):
    data: list[Server]


class ErrorResponse(BaseModel):
    error: str | dict[str, str]
