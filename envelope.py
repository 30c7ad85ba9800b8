"""
Response envelope returned by every phpList REST API command.

The server always answers with a JSON object shaped like::

    {"status": "success" | "error", "data": <anything, optional>}

`Envelope` turns that (or whatever else came back) into a tagged result.
Accessors fail closed: they return None instead of raising when the
envelope is an error or the payload does not have the expected shape.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

SUCCESS = "success"


def decode_body(raw):
    """JSON-decode a response body; None when it is not valid JSON."""
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return None


def is_success(result) -> bool:
    return isinstance(result, dict) and result.get("status") == SUCCESS


def _is_empty(value) -> bool:
    # 0, "", "0", False and None all count as "no id"
    return value in (None, False, 0, "", "0")


@dataclass(frozen=True)
class Envelope:
    ok: bool
    data: Any = None
    status: Optional[str] = None

    @classmethod
    def parse(cls, raw):
        """Decode a raw response body (text or bytes) exactly once."""
        return cls.from_result(decode_body(raw))

    @classmethod
    def from_result(cls, result):
        """Envelope for an already-decoded body; only a JSON object can succeed."""
        if not isinstance(result, dict):
            return cls(ok=False)
        status = result.get("status")
        return cls(
            ok=is_success(result),
            data=result.get("data"),
            status=status if isinstance(status, str) else None,
        )

    def payload(self):
        if not self.ok:
            return None
        return self.data

    def field(self, name):
        if not self.ok or not isinstance(self.data, dict):
            return None
        return self.data.get(name)

    def identifier(self):
        value = self.field("id")
        return None if _is_empty(value) else value
