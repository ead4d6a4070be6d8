"""Field checks run before any store interaction. Each returns a field -> message mapping; empty means valid."""
from __future__ import annotations

import ipaddress

from inventory_service.app.constants import FieldMessage
from inventory_service.app.domain.models import ServerDraft


class Validator:
    """Collects one message per field; the first failed check for a field wins."""

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    @property
    def valid(self) -> bool:
        return not self.errors

    def add_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, message)

    def check(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_error(key, message)


def is_valid_ip(value: str) -> bool:
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def validate_full(draft: ServerDraft) -> dict[str, str]:
    v = Validator()
    v.check(draft.ip != "", "ip", FieldMessage.MUST_BE_PROVIDED)
    v.check(draft.fqdn != "", "fqdn", FieldMessage.MUST_BE_PROVIDED)
    v.check(len(draft.tags) > 0, "tags", FieldMessage.MUST_BE_PROVIDED)
    v.check(is_valid_ip(draft.ip), "ip", FieldMessage.INVALID_IP)
    return v.errors


def validate_ip_only(draft: ServerDraft) -> dict[str, str]:
    v = Validator()
    v.check(draft.ip != "", "ip", FieldMessage.MUST_BE_PROVIDED)
    v.check(is_valid_ip(draft.ip), "ip", FieldMessage.INVALID_IP)
    return v.errors
