"""User reference.

The core only needs to know who owns an order and where to send their
notifications; profile management lives elsewhere.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    id: str
    name: str
    push_token: str | None = None
