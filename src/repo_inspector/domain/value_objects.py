"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Credential:
    """Caller-supplied bearer token, scoped to a single request.

    The token is forwarded verbatim to the host and never shown in ``repr``.
    """

    token: str

    def __repr__(self) -> str:
        return "Credential('**********')"

    @property
    def authorization(self) -> str:
        return f"token {self.token}"


@dataclass(frozen=True, slots=True)
class RepoRef:
    """An ``owner/name`` pair identifying one repository on the host."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
