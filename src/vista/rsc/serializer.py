"""RSC payload serializer.

Wire format for server-rendered pages: HTML, client component references
with typed props, and route data. Prop values use a closed tagged union
(``SerializedValue``) encoded as ``{"type": <tag>, "value": <content>}``.

Host values use a few conventions for types JSON lacks:

- strings prefixed ``__DATE__:`` / ``__SYMBOL__:`` are dates and symbols
- objects with a ``__type`` field of ``undefined``, ``Date``,
  ``ReactElement`` or ``Function`` are the matching tagged variant

Functions cannot cross the server/client boundary; only their name
survives as a marker.
"""

from __future__ import annotations

import itertools
import json
import math
from collections.abc import Callable, Mapping
from datetime import date, datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vista.logging import get_logger

DATE_PREFIX = "__DATE__:"
SYMBOL_PREFIX = "__SYMBOL__:"
TYPE_FIELD = "__type"
MOUNT_ID_PREFIX = "__vista_cc_"


class _Tagged(BaseModel):
    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")


class NullValue(_Tagged):
    type: Literal["Null"] = "Null"


class UndefinedValue(_Tagged):
    type: Literal["Undefined"] = "Undefined"


class BooleanValue(_Tagged):
    type: Literal["Boolean"] = "Boolean"
    value: bool


class NumberValue(_Tagged):
    type: Literal["Number"] = "Number"
    value: float


class StringValue(_Tagged):
    type: Literal["String"] = "String"
    value: str


class DateValue(_Tagged):
    type: Literal["Date"] = "Date"
    value: str


class ArrayValue(_Tagged):
    type: Literal["Array"] = "Array"
    value: list[SerializedValue] = Field(default_factory=list)


class ObjectValue(_Tagged):
    type: Literal["Object"] = "Object"
    value: dict[str, SerializedValue] = Field(default_factory=dict)


class ElementRef(_Tagged):
    id: str


class ReactElementValue(_Tagged):
    type: Literal["ReactElement"] = "ReactElement"
    value: ElementRef


class SymbolValue(_Tagged):
    type: Literal["Symbol"] = "Symbol"
    value: str


class FunctionRef(_Tagged):
    name: str


class FunctionValue(_Tagged):
    type: Literal["Function"] = "Function"
    value: FunctionRef


SerializedValue = Annotated[
    Union[
        NullValue,
        UndefinedValue,
        BooleanValue,
        NumberValue,
        StringValue,
        DateValue,
        ArrayValue,
        ObjectValue,
        ReactElementValue,
        SymbolValue,
        FunctionValue,
    ],
    Field(discriminator="type"),
]

ArrayValue.model_rebuild()
ObjectValue.model_rebuild()


class ClientReference(BaseModel):
    """A client component hole in the server-rendered HTML."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    id: str = Field(description="Module ID from the client manifest")
    mount_id: str = Field(description="DOM element ID where the component mounts")
    props: dict[str, SerializedValue] = Field(default_factory=dict)
    chunk_url: str
    export_name: str = "default"


class RouteData(BaseModel):
    """Route-specific data for the current request."""

    route: str
    params: dict[str, str] = Field(default_factory=dict)
    search_params: dict[str, str] = Field(default_factory=dict)


class RSCPayload(BaseModel):
    """Complete payload sent to the client."""

    model_config = ConfigDict(ser_json_inf_nan="constants")

    html: str
    client_references: list[ClientReference] = Field(default_factory=list)
    data: RouteData
    build_id: str


# =============================================================================
# Value conversion
# =============================================================================


def _serialize_tagged(obj: Mapping[str, Any]) -> SerializedValue | None:
    """Recognize host objects carrying the ``__type`` discriminator."""
    tag = obj.get(TYPE_FIELD)
    if tag == "undefined":
        return UndefinedValue()
    if tag == "Date" and isinstance(obj.get("value"), str):
        return DateValue(value=obj["value"])
    if tag == "ReactElement" and isinstance(obj.get("id"), str):
        return ReactElementValue(value=ElementRef(id=obj["id"]))
    if tag == "Function" and isinstance(obj.get("name"), str):
        return FunctionValue(value=FunctionRef(name=obj["name"]))
    return None


def serialize_value(value: Any) -> SerializedValue:
    """Convert a host value into a ``SerializedValue``.

    Unsupported shapes degrade to a lossy marker rather than failing:
    callables become ``Function`` markers, anything else ``Undefined``.
    """
    if value is None:
        return NullValue()
    if isinstance(value, bool):
        return BooleanValue(value=value)
    if isinstance(value, (int, float)):
        try:
            return NumberValue(value=float(value))
        except OverflowError:
            return NumberValue(value=math.inf if value > 0 else -math.inf)
    if isinstance(value, str):
        if value.startswith(DATE_PREFIX):
            return DateValue(value=value[len(DATE_PREFIX) :])
        if value.startswith(SYMBOL_PREFIX):
            return SymbolValue(value=value[len(SYMBOL_PREFIX) :])
        return StringValue(value=value)
    if isinstance(value, (datetime, date)):
        return DateValue(value=value.isoformat())
    if isinstance(value, (list, tuple)):
        return ArrayValue(value=[serialize_value(v) for v in value])
    if isinstance(value, Mapping):
        tagged = _serialize_tagged(value)
        if tagged is not None:
            return tagged
        return ObjectValue(value={str(k): serialize_value(v) for k, v in value.items()})
    if callable(value):
        return FunctionValue(value=FunctionRef(name=getattr(value, "__name__", "anonymous")))

    get_logger().debug(f"Cannot serialize {type(value).__name__}, using Undefined")
    return UndefinedValue()


def serialize_props(props: Mapping[str, Any]) -> dict[str, SerializedValue]:
    """Serialize a props mapping."""
    return {str(k): serialize_value(v) for k, v in props.items()}


def deserialize_value(value: SerializedValue) -> Any:
    """Convert a ``SerializedValue`` back into its host form."""
    if isinstance(value, NullValue):
        return None
    if isinstance(value, UndefinedValue):
        return {TYPE_FIELD: "undefined"}
    if isinstance(value, (BooleanValue, NumberValue, StringValue)):
        return value.value
    if isinstance(value, DateValue):
        return {TYPE_FIELD: "Date", "value": value.value}
    if isinstance(value, ArrayValue):
        return [deserialize_value(v) for v in value.value]
    if isinstance(value, ObjectValue):
        return {k: deserialize_value(v) for k, v in value.value.items()}
    if isinstance(value, ReactElementValue):
        return {TYPE_FIELD: "ReactElement", "id": value.value.id}
    if isinstance(value, SymbolValue):
        return f"{SYMBOL_PREFIX}{value.value}"
    if isinstance(value, FunctionValue):
        return {TYPE_FIELD: "Function", "name": value.value.name}
    raise TypeError(f"Not a serialized value: {type(value).__name__}")


# =============================================================================
# Mount IDs
# =============================================================================


class MountIdSequence:
    """Caller-owned mount ID generator.

    IDs are unique within one epoch (between resets). Hosts typically keep
    one sequence per request.
    """

    def __init__(self, prefix: str = MOUNT_ID_PREFIX) -> None:
        self.prefix = prefix
        self._counter = itertools.count()

    def next_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"

    def reset(self) -> None:
        self._counter = itertools.count()


_default_sequence = MountIdSequence()


def generate_mount_id() -> str:
    """Next mount ID from the process-wide sequence."""
    return _default_sequence.next_id()


def reset_mount_counter() -> None:
    """Reset the process-wide sequence (call at the start of each request)."""
    _default_sequence.reset()


def create_client_reference(
    module_id: str,
    chunk_url: str,
    props: Mapping[str, Any] | None = None,
    export_name: str = "default",
    sequence: MountIdSequence | None = None,
) -> ClientReference:
    """Create a reference for a client component with a fresh mount ID.

    ``props`` may hold host values or already serialized values.
    """
    next_id: Callable[[], str] = sequence.next_id if sequence else generate_mount_id
    serialized = {
        str(k): v if isinstance(v, _Tagged) else serialize_value(v)
        for k, v in (props or {}).items()
    }
    return ClientReference(
        id=module_id,
        mount_id=next_id(),
        props=serialized,
        chunk_url=chunk_url,
        export_name=export_name,
    )


# =============================================================================
# Encoding and hydration
# =============================================================================


def encode_payload(payload: RSCPayload) -> bytes:
    """Encode a payload as UTF-8 JSON bytes."""
    return payload.model_dump_json().encode("utf-8")


def decode_payload(data: bytes | str) -> RSCPayload | None:
    """Decode payload bytes, or None if they are not a valid payload."""
    try:
        return RSCPayload.model_validate_json(data)
    except ValidationError as e:
        get_logger().debug(f"Invalid RSC payload: {e.error_count()} error(s)")
        return None
    except UnicodeDecodeError:
        get_logger().debug("Invalid RSC payload: not UTF-8")
        return None


def _inline_json(data: Any) -> str:
    """JSON safe to embed in an inline <script>."""
    return json.dumps(data).replace("</", "<\\/")


_HYDRATION_RUNTIME = """
<script type="module">
    const refs = window.__VISTA_CLIENT_REFERENCES__ || [];

    function deserializeProps(props) {
        const result = {};
        for (const [k, v] of Object.entries(props || {})) {
            result[k] = deserializeValue(v);
        }
        return result;
    }

    function deserializeValue(v) {
        if (!v || typeof v !== 'object') return v;
        switch (v.type) {
            case 'Null': return null;
            case 'Undefined': return undefined;
            case 'Boolean': return v.value;
            case 'Number': return v.value;
            case 'String': return v.value;
            case 'Date': return new Date(v.value);
            case 'Array': return v.value.map(deserializeValue);
            case 'Object': return deserializeProps(v.value);
            case 'Symbol': return Symbol.for(v.value);
            case 'ReactElement': return null;
            case 'Function': return undefined;
            default: return v.value;
        }
    }

    async function hydrateAll() {
        const { hydrateRoot } = await import('react-dom/client');
        const React = await import('react');
        for (const ref of refs) {
            try {
                const mod = await import(ref.chunk_url);
                const Comp = mod[ref.export_name] || mod.default;
                const el = document.getElementById(ref.mount_id);
                if (el && Comp) {
                    hydrateRoot(el, React.createElement(Comp, deserializeProps(ref.props)));
                    el.setAttribute('data-hydrated', 'true');
                }
            } catch (e) {
                console.error('[Vista RSC] Hydration error:', ref.id, e);
            }
        }
    }

    if (document.readyState === 'loading') {
        document.addEventListener('DOMContentLoaded', hydrateAll);
    } else {
        hydrateAll();
    }
</script>
"""


def generate_hydration_script(payload: RSCPayload) -> str:
    """Generate the inline bootstrap that hydrates every client reference.

    Each reference hydrates independently; one failing component is
    logged in the browser console and the rest continue.
    """
    dumped = payload.model_dump(mode="json")
    data_json = _inline_json(dumped["data"])
    refs_json = _inline_json(dumped["client_references"])
    build_id_json = _inline_json(payload.build_id)

    return (
        "\n<script>\n"
        f"    window.__VISTA_RSC_DATA__ = {data_json};\n"
        f"    window.__VISTA_CLIENT_REFERENCES__ = {refs_json};\n"
        f"    window.__VISTA_BUILD_ID__ = {build_id_json};\n"
        "</script>"
        f"{_HYDRATION_RUNTIME}"
    )


__all__ = [
    "ArrayValue",
    "BooleanValue",
    "ClientReference",
    "DateValue",
    "ElementRef",
    "FunctionRef",
    "FunctionValue",
    "MountIdSequence",
    "NullValue",
    "NumberValue",
    "ObjectValue",
    "RSCPayload",
    "ReactElementValue",
    "RouteData",
    "SerializedValue",
    "StringValue",
    "SymbolValue",
    "UndefinedValue",
    "create_client_reference",
    "decode_payload",
    "deserialize_value",
    "encode_payload",
    "generate_hydration_script",
    "generate_mount_id",
    "reset_mount_counter",
    "serialize_props",
    "serialize_value",
]
