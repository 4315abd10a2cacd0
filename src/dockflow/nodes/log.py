# src/dockflow/nodes/log.py
"""
Nó `log_message`: escreve uma mensagem nos loggers vinculados ao dock `logger`.

Sem logger vinculado, o nó degrada para no-op (`logged: False`).
"""

from __future__ import annotations

from typing import Any, Dict, List

from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Dock, Port
from dockflow.resources.logger import Logger


class LogMessageNode(BaseNode):
    type_name = "log_message"
    summary = "Writes a scoped message to the docked logger resources."

    def input_ports(self) -> List[Port]:
        return [
            Port("scope", "Log scope or channel.", default="default", required=False),
            Port("message", "Message to log.", default=""),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("logged", type="bool", required=False),
            Port("error", required=False),
        ]

    def dock_ports(self) -> List[Dock]:
        return [Dock("logger", "Logger resources that receive the message.", capability=Logger)]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        loggers = resources.get("logger") or []
        if not loggers:
            return {"logged": False}

        scope = inputs.get("scope")
        message = "" if inputs.get("message") is None else str(inputs.get("message"))
        logged = True
        for logger in loggers:
            logged = bool(logger.log(scope, message, context)) and logged
        return {"logged": logged}
