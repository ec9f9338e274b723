"""JSON-lines messages exchanged with a presentation front end."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Request:
    """Keypad or control event sent by the front end."""
    id: int
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> Request:
        if "method" not in data:
            raise ValueError("Request is missing 'method'")
        return cls(
            id=data.get("id", 0),
            method=data["method"],
            params=data.get("params") or {},
        )

    @classmethod
    def from_json_line(cls, line: str) -> Request:
        data = json.loads(line)
        if not isinstance(data, dict):
            raise ValueError("Request must be a JSON object")
        return cls.from_dict(data)


@dataclass
class Response:
    """Reply to a single request; carries either a result or an error."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    def to_json_line(self) -> str:
        payload: dict = {"id": self.id}
        if self.error is None:
            payload["result"] = self.result
        else:
            payload["error"] = self.error
        return json.dumps(payload, ensure_ascii=False) + "\n"


@dataclass
class Notification:
    """Pushed by the engine whenever the session state changes."""
    method: str
    params: dict = field(default_factory=dict)

    @classmethod
    def state_changed(cls, state: dict) -> Notification:
        return cls("stateChanged", {"state": state})

    def to_json_line(self) -> str:
        return json.dumps({"method": self.method, "params": self.params}, ensure_ascii=False) + "\n"
