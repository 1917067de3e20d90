"""Class decorators that give dataclasses an RLP encoding and decoding."""

from __future__ import annotations

import dataclasses
from types import UnionType
from typing import Any, Optional, TypeVar, Union, get_args, get_origin

from .rlp_errors import DecoderError
from .rlp_stream import Encodable, RlpStream
from .rlp_view import Decodable, Rlp, UInt

C = TypeVar("C", bound=type)

_KIND = "rlp_kind"
_DEFAULT = "rlp_default"

_NAMES: dict[str, Any] = {
    "str": str,
    "bytes": bytes,
    "bytearray": bytearray,
    "int": int,
    "bool": bool,
    "list": list,
    "List": list,
    "None": type(None),
}


def rlp_field(kind: Any = None, default: bool = False) -> Any:
    """Declare a dataclass field with an explicit RLP kind or a decoding fallback.

    ``kind`` overrides the annotation (for example ``UInt.U16``). With
    ``default`` set, a field that fails to decode takes its type's empty value;
    at most one such field is allowed per class.
    """
    return dataclasses.field(metadata={_KIND: kind, _DEFAULT: default})


@dataclasses.dataclass(frozen=True)
class _FieldSpec:
    name: str
    kind: Any
    default: bool


def _split_top(text: str, sep: str) -> list[str]:
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        if char == sep and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _resolve_annotation(text: str) -> Any:
    """Resolve a string annotation built from builtin types, lists and optionals."""
    text = text.strip()
    alternatives = _split_top(text, "|")
    if len(alternatives) > 1:
        return Union[tuple(_resolve_annotation(part) for part in alternatives)]
    if text.endswith("]") and "[" in text:
        head, _, inner = text.partition("[")
        inner = inner[:-1]
        head = head.strip().removeprefix("typing.")
        if head == "Optional":
            return Optional[_resolve_annotation(inner)]
        if head in ("list", "List"):
            return list[_resolve_annotation(inner)]
        if head == "Union":
            return Union[tuple(_resolve_annotation(part) for part in _split_top(inner, ","))]
    else:
        name = text.removeprefix("typing.")
        if name in _NAMES:
            return _NAMES[name]
    raise TypeError(f"cannot resolve annotation {text!r}; declare it with rlp_field(kind=...)")


def _field_specs(cls: Any, derive: str) -> list[_FieldSpec]:
    if not isinstance(cls, type) or not dataclasses.is_dataclass(cls):
        raise TypeError(f"{derive} is only defined for dataclasses")
    specs = []
    for field in dataclasses.fields(cls):
        kind = field.metadata.get(_KIND)
        if kind is None:
            kind = field.type
            if isinstance(kind, str):
                kind = _resolve_annotation(kind)
        specs.append(_FieldSpec(field.name, kind, bool(field.metadata.get(_DEFAULT, False))))
    return specs


def _single_field(cls: Any, derive: str) -> _FieldSpec:
    specs = _field_specs(cls, derive)
    if len(specs) != 1:
        raise TypeError(f"{derive} is only defined for dataclasses with one field")
    return specs[0]


def _is_optional(kind: Any) -> bool:
    origin = get_origin(kind)
    if origin is Union or origin is UnionType:
        args = get_args(kind)
        return len(args) == 2 and type(None) in args
    return False


def _optional_inner(kind: Any) -> Any:
    return next(arg for arg in get_args(kind) if arg is not type(None))


def _is_list(kind: Any) -> bool:
    return kind is list or get_origin(kind) is list


def _append_typed(stream: RlpStream, value: Any, kind: Any) -> None:
    if _is_optional(kind):
        if value is None:
            stream.begin_list(0)
        else:
            stream.begin_list(1)
            _append_typed(stream, value, _optional_inner(kind))
    elif _is_list(kind):
        args = get_args(kind)
        items = list(value)
        stream.begin_list(len(items))
        for item in items:
            if args:
                _append_typed(stream, item, args[0])
            else:
                stream.append(item)
    else:
        stream.append(value)


def _default_value(kind: Any) -> Any:
    if _is_optional(kind):
        return None
    if _is_list(kind):
        return []
    if isinstance(kind, UInt):
        return 0
    if isinstance(kind, type):
        return kind()
    raise TypeError(f"no default value for {kind!r}")


def rlp_encodable(cls: C) -> C:
    """Encode a dataclass as an RLP list of its fields, in order."""
    specs = _field_specs(cls, "rlp_encodable")

    def rlp_append(self: Any, stream: RlpStream) -> None:
        stream.begin_list(len(specs))
        for spec in specs:
            _append_typed(stream, getattr(self, spec.name), spec.kind)

    cls.rlp_append = rlp_append  # type: ignore[attr-defined]
    Encodable.register(cls)
    return cls


def rlp_encodable_wrapper(cls: C) -> C:
    """Encode a one-field dataclass exactly as its field."""
    spec = _single_field(cls, "rlp_encodable_wrapper")

    def rlp_append(self: Any, stream: RlpStream) -> None:
        value = getattr(self, spec.name)
        if _is_optional(spec.kind) or _is_list(spec.kind):
            _append_typed(stream, value, spec.kind)
        else:
            stream.append_internal(value)

    cls.rlp_append = rlp_append  # type: ignore[attr-defined]
    Encodable.register(cls)
    return cls


def rlp_decodable(cls: C) -> C:
    """Decode a dataclass from an RLP list of its fields, in order."""
    specs = _field_specs(cls, "rlp_decodable")
    plan: list[tuple[_FieldSpec, int]] = []
    default_seen = False
    for position, spec in enumerate(specs):
        index = position - 1 if default_seen else position
        if spec.default:
            if default_seen:
                raise TypeError("only one rlp default field is allowed in a class")
            default_seen = True
        plan.append((spec, index))

    def rlp_decode(klass: Any, rlp: Rlp) -> Any:
        values = {}
        for spec, index in plan:
            if spec.default:
                try:
                    values[spec.name] = rlp.val_at(index, spec.kind)
                except DecoderError:
                    values[spec.name] = _default_value(spec.kind)
            else:
                values[spec.name] = rlp.val_at(index, spec.kind)
        return klass(**values)

    cls.rlp_decode = classmethod(rlp_decode)  # type: ignore[attr-defined]
    Decodable.register(cls)
    return cls


def rlp_decodable_wrapper(cls: C) -> C:
    """Decode a one-field dataclass directly from its field's encoding."""
    spec = _single_field(cls, "rlp_decodable_wrapper")

    def rlp_decode(klass: Any, rlp: Rlp) -> Any:
        return klass(**{spec.name: rlp.as_val(spec.kind)})

    cls.rlp_decode = classmethod(rlp_decode)  # type: ignore[attr-defined]
    Decodable.register(cls)
    return cls