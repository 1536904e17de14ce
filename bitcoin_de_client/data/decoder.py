"""
Strict decoding of Trading API JSON bodies into typed dataclasses.

Decoding is driven by the dataclass field annotations. A field's JSON key
defaults to its name and can be overridden with ``field(metadata={'json': ...})``;
``metadata={'format': 'unix'}`` marks a datetime sent as Unix seconds.
"""

import dataclasses
import json
import logging
import re
import sys
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_type_hints

from ..errors import DecodingError


logger = logging.getLogger(__name__)

T = TypeVar('T')

_NONE_TYPE = type(None)
_HINT_CACHE: Dict[type, Dict[str, Any]] = {}

# fromisoformat before 3.11 only takes 3 or 6 fraction digits
_FRACTION = re.compile(r'\.(\d+)')


def parse_json(text: str) -> Any:
    """Parse a JSON document keeping every number with a fraction as Decimal."""
    return json.loads(text, parse_float=Decimal)


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime."""
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    text = _FRACTION.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_rfc3339(value: datetime) -> str:
    return value.isoformat()


def _type_hints(cls: type) -> Dict[str, Any]:
    hints = _HINT_CACHE.get(cls)
    if hints is None:
        module = sys.modules.get(cls.__module__)
        hints = get_type_hints(cls, vars(module) if module else None)
        _HINT_CACHE[cls] = hints
    return hints


def _origin(tp: Any) -> Any:
    return getattr(tp, '__origin__', None)


def _args(tp: Any) -> tuple:
    return getattr(tp, '__args__', ())


def _is_optional(tp: Any) -> bool:
    return _origin(tp) is Union and _NONE_TYPE in _args(tp)


def json_key(f: dataclasses.Field) -> str:
    return f.metadata.get('json', f.name)


def _fail(path: str, expected: str, value: Any) -> DecodingError:
    return DecodingError(f"Field '{path}': expected {expected}, got {type(value).__name__} {value!r}")


def decode_value(tp: Any, value: Any, path: str, fmt: Optional[str] = None) -> Any:
    """
    Decode one JSON value into the Python type ``tp``.

    Args:
        tp: Target annotation (str, int, Decimal, List[...], a dataclass, ...)
        value: Value produced by the JSON parser
        path: Dotted field path used in error messages
        fmt: Optional format hint from field metadata

    Returns:
        The decoded value

    Raises:
        DecodingError: If the value does not have the expected shape
    """
    if _is_optional(tp):
        if value is None:
            return None
        inner = [arg for arg in _args(tp) if arg is not _NONE_TYPE]
        return decode_value(inner[0], value, path, fmt)

    origin = _origin(tp)
    if origin in (list, List):
        if not isinstance(value, list):
            raise _fail(path, 'array', value)
        item_type = _args(tp)[0]
        return [decode_value(item_type, item, f"{path}[{index}]", fmt) for index, item in enumerate(value)]

    if origin in (dict, Dict):
        if not isinstance(value, dict):
            raise _fail(path, 'object', value)
        value_type = _args(tp)[1]
        return {str(key): decode_value(value_type, item, f"{path}.{key}", fmt) for key, item in value.items()}

    if dataclasses.is_dataclass(tp):
        return decode_dataclass(tp, value, path)

    if tp is Decimal:
        if isinstance(value, bool) or not isinstance(value, (str, int, Decimal)):
            raise _fail(path, 'decimal string', value)
        try:
            result = Decimal(value)
        except InvalidOperation:
            raise _fail(path, 'decimal string', value) from None
        if not result.is_finite():
            raise _fail(path, 'finite decimal', value)
        return result

    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _fail(path, 'integer', value)
        return value

    if tp is bool:
        if not isinstance(value, bool):
            raise _fail(path, 'boolean', value)
        return value

    if tp is str:
        if not isinstance(value, str):
            raise _fail(path, 'string', value)
        return value

    if tp is datetime:
        if fmt == 'unix':
            if isinstance(value, bool) or not isinstance(value, int):
                raise _fail(path, 'unix timestamp', value)
            try:
                return datetime.fromtimestamp(value, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                raise _fail(path, 'unix timestamp', value) from None
        if not isinstance(value, str):
            raise _fail(path, 'RFC 3339 timestamp', value)
        try:
            return parse_rfc3339(value)
        except ValueError:
            raise _fail(path, 'RFC 3339 timestamp', value) from None

    if tp is Any:
        return value

    raise DecodingError(f"Field '{path}': unsupported target type {tp!r}")


def decode_dataclass(cls: Type[T], data: Any, path: str = '') -> T:
    """Decode a JSON object into dataclass ``cls``; unknown keys are ignored."""
    if not isinstance(data, dict):
        raise _fail(path or cls.__name__, 'object', data)

    hints = _type_hints(cls)
    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = json_key(f)
        field_path = f"{path}.{key}" if path else key
        tp = hints[f.name]
        if key not in data:
            if _is_optional(tp):
                kwargs[f.name] = None
                continue
            if f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING:
                continue
            raise DecodingError(f"Missing required field '{field_path}'")
        kwargs[f.name] = decode_value(tp, data[key], field_path, f.metadata.get('format'))
    return cls(**kwargs)


def encode_value(value: Any, fmt: Optional[str] = None) -> Any:
    """Inverse of decode_value: render a decoded value as JSON-compatible data."""
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        if fmt == 'unix':
            return int(value.timestamp())
        return format_rfc3339(value)
    if isinstance(value, list):
        return [encode_value(item, fmt) for item in value]
    if isinstance(value, dict):
        return {key: encode_value(item, fmt) for key, item in value.items()}
    if dataclasses.is_dataclass(value):
        return encode_dataclass(value)
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def encode_dataclass(instance: Any) -> Dict[str, Any]:
    return {
        json_key(f): encode_value(getattr(instance, f.name), f.metadata.get('format'))
        for f in dataclasses.fields(instance)
    }


def decode_response(text: str, response_type: Type[T]) -> T:
    """
    Decode a success body into ``response_type``.

    Raises:
        DecodingError: If the body is not JSON or does not match the type
    """
    try:
        data = parse_json(text)
    except ValueError as e:
        raise DecodingError(f"Response body is not valid JSON: {e}", body=text) from e

    try:
        return decode_dataclass(response_type, data, '')
    except DecodingError as e:
        logger.debug(f"Failed to decode {response_type.__name__}: {e}")
        raise DecodingError(f"Invalid {response_type.__name__} response: {e.message}", body=text) from e
