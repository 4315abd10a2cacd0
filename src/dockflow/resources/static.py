# src/dockflow/resources/static.py
"""Recurso `static_value`: expõe um valor de configuração resolvido."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from dockflow.core.graph.resource import BaseResource


@runtime_checkable
class ValueSource(Protocol):
    def value(self) -> Any:
        ...


class StaticValueResource(BaseResource):
    type_name = "static_value"
    summary = "Holds a single value resolved from its `value` config entry."

    def value(self) -> Any:
        return self.resolved.get("value")
