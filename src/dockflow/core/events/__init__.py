# src/dockflow/core/events/__init__.py
"""
Emissão de eventos de progresso de runs.
"""

from .emitter import CallbackEventEmitter, EventEmitter, PollingEventEmitter

__all__ = ["CallbackEventEmitter", "EventEmitter", "PollingEventEmitter"]
