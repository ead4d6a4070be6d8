"""Byte encoding of server records for the key-value store.

Records are stored as UTF-8 JSON rendered by the pydantic model, so a value can be
decoded without any schema beyond `Server` itself.
"""
from __future__ import annotations

from typing import Iterable

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from inventory_service.app.core.errors import CorruptRecord, EncodingError
from inventory_service.app.domain.models import Server


class ServerCodec:
    def encode(self, server: Server) -> bytes:
        try:
            return server.model_dump_json().encode("utf-8")
        except (PydanticSerializationError, UnicodeEncodeError) as e:
            raise EncodingError(f"could not encode server {server.id}") from e

    def decode(self, data: bytes) -> Server:
        try:
            return Server.model_validate_json(data)
        except ValidationError as e:
            raise CorruptRecord(f"stored record does not decode: {e.error_count()} error(s)") from e

    def decode_all(self, values: Iterable[bytes]) -> list[Server]:
        return [self.decode(value) for value in values]
