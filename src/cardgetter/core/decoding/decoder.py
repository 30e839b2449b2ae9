"""Generic decoder: flat tag map -> nested pydantic models.

Each leaf of a card has a unique key in the flat tag map, so decoding is a
walk over a declarative mapping table. For every field of a model the table
holds one of:

- a source key (``"og:title"``): copy and coerce the tag value;
- ``Directive.SQUASH``: the embedded model's own mappings behave as if they
  were declared on the enclosing model (same tag map, same level);
- ``Directive.FILL``: allocate the optional sub-model if needed and decode
  it against the same tag map, whether or not any of its keys are present.

Decoding never fails because data is missing or malformed. It only raises
`DecodeError` when the mapping table itself is wrong.
"""

from __future__ import annotations

import logging
import types
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Type, Union, get_args, get_origin

from pydantic import BaseModel

from cardgetter.exceptions import DecodeError

logger = logging.getLogger(__name__)

TRUTHY = frozenset({"1", "t", "true", "y", "yes", "on"})
FALSY = frozenset({"", "0", "f", "false", "n", "no", "off"})


class Directive(str, Enum):
    SQUASH = "squash"
    FILL = "fill"


FieldSource = Union[str, Directive]
FieldMappings = Mapping[Type[BaseModel], Mapping[str, FieldSource]]

# Returned by coercion when the raw value should leave the field untouched.
_SKIP = object()


def _unwrap_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _model_type(model: Type[BaseModel], name: str) -> Type[BaseModel]:
    annotation = _unwrap_optional(model.model_fields[name].annotation)
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation
    raise DecodeError(
        f"{model.__name__}.{name} is not a model field and cannot be squashed or filled"
    )


def _parse_datetime(raw: str) -> datetime:
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def coerce_value(annotation: Any, raw: str) -> Any:
    """Weakly coerce a tag value to `annotation`.

    Returns the sentinel `_SKIP` when the value cannot be parsed; source
    metadata is untrusted, so bad values are dropped instead of raising.
    """
    target = _unwrap_optional(annotation)

    if target is str or target is Any:
        return raw
    if target is bool:
        token = raw.strip().lower()
        if token in TRUTHY:
            return True
        if token in FALSY:
            return False
        return _SKIP
    if target is int:
        text = raw.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return _SKIP
        # "600.0" is an integer, "600.5" is not
        if number.is_integer():
            return int(number)
        return _SKIP
    if target is float:
        try:
            return float(raw.strip())
        except ValueError:
            return _SKIP
    if target is datetime:
        try:
            return _parse_datetime(raw)
        except ValueError:
            return _SKIP
    if get_origin(target) in (list, List):
        return [part.strip() for part in raw.split(",") if part.strip()]
    if isinstance(target, type) and issubclass(target, Enum):
        try:
            return target(raw)
        except ValueError:
            return _SKIP

    logger.debug("No coercion for %r, keeping default", target)
    return _SKIP


def _mapping_for(
    model: Type[BaseModel], mappings: FieldMappings
) -> Mapping[str, FieldSource]:
    try:
        mapping = mappings[model]
    except KeyError:
        raise DecodeError(f"No field mapping declared for {model.__name__}") from None
    unknown = [name for name in mapping if name not in model.model_fields]
    if unknown:
        raise DecodeError(
            f"Field mapping for {model.__name__} names unknown fields: {unknown}"
        )
    return mapping


def _allocate(target: BaseModel, name: str) -> BaseModel:
    child_type = _model_type(type(target), name)
    child = getattr(target, name)
    if child is None:
        child = child_type()
        setattr(target, name, child)
    elif not isinstance(child, BaseModel):
        raise DecodeError(
            f"{type(target).__name__}.{name} holds {type(child).__name__}, not a model"
        )
    return child


def decode(
    tags: Mapping[str, str], target: BaseModel, mappings: FieldMappings
) -> BaseModel:
    """Populate `target` in place from `tags` and return it."""
    model = type(target)
    mapping = _mapping_for(model, mappings)
    fills: List[str] = []

    for name, source in mapping.items():
        if source is Directive.FILL:
            fills.append(name)
            continue
        if source is Directive.SQUASH:
            decode(tags, _allocate(target, name), mappings)
            continue
        if source not in tags:
            continue
        value = coerce_value(model.model_fields[name].annotation, tags[source])
        if value is not _SKIP:
            setattr(target, name, value)

    for name in fills:
        decode(tags, _allocate(target, name), mappings)

    return target
