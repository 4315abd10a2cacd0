# src/dockflow/core/events/emitter.py
"""
Emissores de eventos de progresso.

Canal lateral opcional: o engine publica eventos (`flow.started`,
`node.finished`, ...) via `ExecutionContext.emit_event`, que delega ao
emissor vinculado ao contexto.

Implementações:
    - CallbackEventEmitter → repassa cada evento ao sink; `finish` envia `{"type": "done"}`
    - PollingEventEmitter  → acrescenta linhas JSON `{"ts", "event"}` a um arquivo
                             para consumo por polling; sink opcional; `finish`
                             emite `done`

Limites explícitos:
    - Não garante entrega (sink ausente → evento descartado no callback)
    - Não faz rotação nem limpeza do arquivo de polling além da criação
"""

from __future__ import annotations

import json
import tempfile
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Union, runtime_checkable

Sink = Callable[[Dict[str, Any]], None]

DONE_EVENT: Dict[str, Any] = {"type": "done"}


@runtime_checkable
class EventEmitter(Protocol):
    def set_sink(self, sink: Sink) -> None:
        ...

    def emit_event(self, event: Dict[str, Any]) -> None:
        ...

    def finish(self) -> None:
        ...


class BaseEventEmitter:
    def __init__(self, sink: Optional[Sink] = None):
        self.sink: Optional[Sink] = sink

    def set_sink(self, sink: Sink) -> None:
        self.sink = sink

    def emit_event(self, event: Dict[str, Any]) -> None:
        raise NotImplementedError

    def finish(self) -> None:
        return None


class CallbackEventEmitter(BaseEventEmitter):
    def emit_event(self, event: Dict[str, Any]) -> None:
        if self.sink is not None:
            self.sink(event)

    def finish(self) -> None:
        if self.sink is not None:
            self.sink(dict(DONE_EVENT))


class PollingEventEmitter(BaseEventEmitter):
    """
    Fila de eventos em arquivo JSON Lines.

    Sem `path`, usa `<tmp>/dockflow_poll_<id>.jsonl`. O arquivo é truncado
    na criação do emissor.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, sink: Optional[Sink] = None):
        super().__init__(sink)
        if path is None:
            path = Path(tempfile.gettempdir()) / f"dockflow_poll_{uuid.uuid4().hex}.jsonl"
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("", encoding="utf-8")

    def emit_event(self, event: Dict[str, Any]) -> None:
        line = json.dumps({"ts": time.time(), "event": event}, ensure_ascii=False, default=str)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

        if self.sink is not None:
            self.sink(event)

    def finish(self) -> None:
        self.emit_event(dict(DONE_EVENT))

    def read_events(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        records: List[Dict[str, Any]] = []
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    records.append(json.loads(line))
        return records
