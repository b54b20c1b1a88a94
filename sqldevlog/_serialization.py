"""JSON encoding and decoding backed by ``msgspec``."""

from typing import Any, Literal, overload

import msgspec

from sqldevlog.exceptions import SerializationError

__all__ = ("decode_json", "encode_json")

_encoder = msgspec.json.Encoder(enc_hook=str)
_decoder = msgspec.json.Decoder()


@overload
def encode_json(data: Any, *, as_bytes: Literal[False] = ...) -> str: ...


@overload
def encode_json(data: Any, *, as_bytes: Literal[True]) -> bytes: ...


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode data to JSON.

    Types unknown to ``msgspec`` are encoded through ``str``.

    Args:
        data: Data to encode.
        as_bytes: Whether to return bytes instead of string.

    Raises:
        SerializationError: If the data cannot be encoded.

    Returns:
        JSON string or bytes.
    """
    try:
        encoded = _encoder.encode(data)
    except (TypeError, ValueError, msgspec.EncodeError) as exc:
        msg = f"Unable to encode value of type {type(data).__name__} as JSON"
        raise SerializationError(msg) from exc
    return encoded if as_bytes else encoded.decode("utf-8")


def decode_json(data: "str | bytes") -> Any:
    """Decode a JSON document.

    Raises:
        SerializationError: If the document is not valid JSON.
    """
    try:
        return _decoder.decode(data)
    except msgspec.DecodeError as exc:
        msg = f"Invalid JSON: {exc}"
        raise SerializationError(msg) from exc
