"""API-level constants shared across modules."""
from __future__ import annotations


ANSIBLE_HOST_VAR = "ansible_host"
ANSIBLE_HOSTS_KEY = "hosts"


class ResponseMessage:
    SERVER_NOT_FOUND = "server not found"
    INVENTORY_EMPTY = "the inventory is empty"
    DATABASE_UNAVAILABLE = "Database not available"


class FieldMessage:
    MUST_BE_PROVIDED = "must be provided"
    INVALID_IP = "must be a valid IP address"
