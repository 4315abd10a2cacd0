# src/dockflow/nodes/http.py
"""
Nó `http_get`: requisição HTTP GET simples via `requests`.

Config:
    - timeout: segundos (padrão 10), aceita `{mode, value}`
    - headers: mapa de cabeçalhos opcional
"""

from __future__ import annotations

from typing import Any, Dict, List

import requests

from dockflow.core.graph.node import BaseNode
from dockflow.core.graph.ports import Port

DEFAULT_TIMEOUT = 10


class HttpGetNode(BaseNode):
    type_name = "http_get"
    summary = "Performs an HTTP GET request and returns the response body."

    def input_ports(self) -> List[Port]:
        return [
            Port("url", "Full URL to fetch."),
            Port("active", "Whether to run this node.", type="bool", default=True, required=False),
        ]

    def output_ports(self) -> List[Port]:
        return [
            Port("body", "Raw response body.", required=False),
            Port("status", "HTTP status code.", type="int", required=False),
            Port("error", required=False),
        ]

    def execute(self, inputs, resources, context) -> Dict[str, Any]:
        if not inputs.get("active", True):
            return {}

        url = inputs.get("url")
        if not isinstance(url, str) or not url.startswith(("http://", "https://")):
            return self.error("invalid or missing URL")

        timeout = self.setting("timeout", default=DEFAULT_TIMEOUT)
        headers = self.setting("headers", default={}) or {}

        try:
            response = requests.get(url, headers=headers, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            return self.error(f"failed to fetch URL: {url} ({exc})")

        return {"body": response.text, "status": response.status_code}
