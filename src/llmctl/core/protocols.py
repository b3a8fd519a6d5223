"""Protocols (interfaces) consumed by the rendering layer.

Response types opt into the generic JSON renderer by satisfying
:class:`Renderable` structurally — no explicit inheritance required.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Renderable(Protocol):
    """Contract for values printed by :func:`llmctl.cli.render.print_json`."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping describing the value.

        Nested values may themselves be :class:`Renderable`, dataclasses,
        ``bytes`` (printed as hex) or plain JSON types.
        """
        ...  # pragma: no cover
