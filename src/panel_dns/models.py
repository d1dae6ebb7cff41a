"""Value objects shared between the credential stores and the panel client."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Panel login. The password is kept out of ``repr`` so it never reaches a log line."""

    username: str
    password: str = field(repr=False)

    def to_dict(self) -> dict:
        return {
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Credentials:
        return cls(
            username=data["username"],
            password=data["password"],
        )
