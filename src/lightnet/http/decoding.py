"""Decode JSON response bodies into typed values."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import DecodingFailedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_adapters: dict[Any, TypeAdapter[Any]] = {}


def _adapter_for(model: Any) -> TypeAdapter[Any]:
    adapter = _adapters.get(model)
    if adapter is None:
        adapter = TypeAdapter(model)
        _adapters[model] = adapter
    return adapter


def decode_json(data: bytes | None, model: type[T]) -> T:
    """
    Decode JSON bytes into an instance of ``model``.

    Any type pydantic can validate works: BaseModel subclasses, dataclasses,
    TypedDicts and builtin generics such as ``list[int]``.

    Args:
        data: Raw JSON bytes, usually the body returned by Network.request()
        model: Target type

    Returns:
        The decoded value

    Raises:
        DecodingFailedError: If data is None, not JSON, or does not fit the model
    """
    if data is None:
        raise DecodingFailedError("Failed to decode: no data")
    try:
        return _adapter_for(model).validate_json(data)
    except ValidationError as e:
        logger.debug(f"Decoding into {model!r} failed: {e}")
        raise DecodingFailedError(f"Failed to decode into {getattr(model, '__name__', model)}: {e}") from e


class JSONParser:
    """Namespace kept for callers that parse through a class."""

    @staticmethod
    def parse(json: bytes | None, model: type[T]) -> T:
        return decode_json(json, model)
