"""Result taxonomy for a single link probe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProbeStatus(str, Enum):
    OK = "OK"
    NOT_OK = "NOT OK"
    ERROR = "ERROR"


@dataclass(frozen=True)
class ProbeResult:
    """The classified outcome of probing one resolved link.

    ``code`` is set for :attr:`ProbeStatus.NOT_OK`, ``detail`` for
    :attr:`ProbeStatus.ERROR`.
    """

    url: str
    status: ProbeStatus
    code: Optional[int] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, url: str) -> ProbeResult:
        return cls(url=url, status=ProbeStatus.OK)

    @classmethod
    def not_ok(cls, url: str, code: int) -> ProbeResult:
        return cls(url=url, status=ProbeStatus.NOT_OK, code=code)

    @classmethod
    def error(cls, url: str, detail: str) -> ProbeResult:
        return cls(url=url, status=ProbeStatus.ERROR, detail=detail)

    @property
    def label(self) -> str:
        """``OK``, ``NOT OK (404)`` or ``ERROR (timeout)``."""
        if self.status is ProbeStatus.NOT_OK:
            return f"{self.status.value} ({self.code})"
        if self.status is ProbeStatus.ERROR:
            return f"{self.status.value} ({self.detail})"
        return self.status.value

    def line(self) -> str:
        """Render the result as an output line: ``<url> -> <label>``."""
        return f"{self.url} -> {self.label}"
