"""Centralised settings for the link checker.

All runtime tunables are resolved here in one place.  There is no config
file and no environment lookup: the defaults below are the only source, and
tests override individual fields with ``monkeypatch.setattr``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------
    request_timeout: float = 10.0
    max_redirects: int = 5
    user_agent: str = (
        "Mozilla/5.0 (compatible; LinkCheck-Bot/1.0; +https://github.com/linkcheck-bot)"
    )

    # ------------------------------------------------------------------
    # Probing
    # ------------------------------------------------------------------
    max_concurrency: int = 200

    @property
    def headers(self) -> dict[str, str]:
        """Default headers sent with every request."""
        return {"User-Agent": self.user_agent}


# Module-level singleton — import this everywhere:
#   from linkcheck.config import settings
settings = Settings()
