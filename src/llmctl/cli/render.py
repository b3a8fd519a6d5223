"""Response rendering to tab-indented JSON on stdout.

Two independent paths:

* :func:`print_json` — generic values (dicts, dataclasses,
  :class:`~llmctl.core.protocols.Renderable` objects).  A value that
  cannot be serialised is a programming error and ends the process via
  :func:`~llmctl.cli.boundary.fatal`.
* :func:`print_resp_json` — protobuf messages from the network.  Keeps
  the original field names, prints zero-valued fields, and renders
  ``bytes`` as hex.  Failure is reported and rendering is abandoned.
"""

from __future__ import annotations

import dataclasses
import json
import sys
from typing import Any

from google.protobuf import json_format
from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message

from llmctl.cli.boundary import fatal
from llmctl.core.protocols import Renderable
from llmctl.exceptions import SerializationError

INDENT: str = "\t"


# ---------------------------------------------------------------------------
# Generic renderer
# ---------------------------------------------------------------------------

def _default(obj: Any) -> Any:
    if isinstance(obj, Renderable):
        return obj.to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def print_json(value: Any) -> None:
    """Write *value* as tab-indented JSON plus a newline to stdout."""
    try:
        text = json.dumps(value, indent=INDENT, default=_default)
    except (TypeError, ValueError) as exc:
        fatal(SerializationError(f"unable to encode response: {exc}"))
    sys.stdout.write(text + "\n")


# ---------------------------------------------------------------------------
# Protocol-message renderer
# ---------------------------------------------------------------------------

def _map_key(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    return str(key)


def _hex_map(field: FieldDescriptor, value: Any, rendered: dict[str, Any]) -> None:
    value_field = field.message_type.fields_by_name["value"]
    for key, item in value.items():
        json_key = _map_key(key)
        if json_key not in rendered:
            continue
        if value_field.type == FieldDescriptor.TYPE_BYTES:
            rendered[json_key] = item.hex()
        elif value_field.type == FieldDescriptor.TYPE_MESSAGE and isinstance(
            rendered[json_key], dict,
        ):
            _hex_bytes(item, rendered[json_key])


def _hex_bytes(message: Message, data: dict[str, Any]) -> None:
    """Replace base64 ``bytes`` values in *data* with lowercase hex, in place."""
    for field in message.DESCRIPTOR.fields:
        if field.name not in data:
            continue
        value = getattr(message, field.name)
        rendered = data[field.name]
        if field.message_type is not None and field.message_type.GetOptions().map_entry:
            if isinstance(rendered, dict):
                _hex_map(field, value, rendered)
        elif field.type == FieldDescriptor.TYPE_BYTES:
            if isinstance(value, bytes):
                data[field.name] = value.hex()
            else:
                data[field.name] = [item.hex() for item in value]
        elif field.type == FieldDescriptor.TYPE_MESSAGE:
            if isinstance(rendered, list):
                for item, item_data in zip(value, rendered):
                    if isinstance(item_data, dict):
                        _hex_bytes(item, item_data)
            elif isinstance(rendered, dict) and isinstance(value, Message):
                _hex_bytes(value, rendered)


def message_to_json(message: Message) -> str:
    """Serialise *message* with original names and explicit zero values."""
    data = json_format.MessageToDict(
        message,
        preserving_proto_field_name=True,
        always_print_fields_with_no_presence=True,
    )
    _hex_bytes(message, data)
    return json.dumps(data, indent=INDENT)


def print_resp_json(message: Message) -> None:
    """Write *message* as JSON to stdout, or report why it could not be."""
    try:
        text = message_to_json(message)
    except (json_format.Error, AttributeError, TypeError, ValueError) as exc:
        print(f"unable to decode response: {exc}")
        return
    print(text)
