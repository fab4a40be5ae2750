"""
luxor_sdk.tier1_runtime.serialize
──────────────────────────────────
JSON wire encoding for controller messages. Models use snake_case
attributes in Python and the controller's PascalCase names on the wire.
"""
from __future__ import annotations

import json
from typing import Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def encode_request(obj: BaseModel | dict) -> bytes:
    """
    Serialize a request model (or a plain dict of wire fields) to compact JSON.

    Usage:
        encode_request(ThemeGetRequest(theme_index=0))   # → b'{"ThemeIndex":0}'
    """
    if isinstance(obj, BaseModel):
        return obj.model_dump_json(by_alias=True).encode()
    return json.dumps(obj, separators=(",", ":")).encode()


def decode_response(data: bytes | str, model: Type[T]) -> T:
    """
    Deserialize a response body into *model*. Raises pydantic's
    ValidationError for invalid JSON and for shape mismatches alike.
    """
    return model.model_validate_json(data)


def to_pretty_json(obj: BaseModel) -> str:
    """Indented JSON with wire names, for humans."""
    return obj.model_dump_json(by_alias=True, indent=2)


__all__ = ["encode_request", "decode_response", "to_pretty_json"]
