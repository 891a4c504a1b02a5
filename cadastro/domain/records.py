from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UserRecord:
    """Detached snapshot of one row of the users table."""

    id: int
    name: str
    email: str

    @property
    def initial(self) -> str:
        return self.name[:1].upper()
