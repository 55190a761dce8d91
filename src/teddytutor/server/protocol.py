"""JSON-lines protocol messages for the host UI bridge."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Request:
    """Incoming request from the host UI process."""
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


@dataclass
class Response:
    """Outgoing response; exactly one of result or error is serialized."""
    id: int
    result: Optional[dict] = None
    error: Optional[str] = None

    @classmethod
    def failure(cls, id: int, error: object) -> Response:
        """Error response carrying the message of an exception or string."""
        return cls(id=id, error=str(error))

    def to_json_line(self) -> str:
        d = {"id": self.id}
        if self.error is not None:
            d["error"] = self.error
        else:
            d["result"] = self.result
        return json.dumps(d) + "\n"
