"""
Credential Store Interface.
Where the session keeps its opaque bearer token between runs.
"""

from typing import Optional, Protocol


class CredentialStore(Protocol):
    """Interface for a single persisted credential."""

    def get(self) -> Optional[str]:
        """Return the stored token, if any."""
        ...

    def set(self, token: str) -> None:
        """Persist a token, replacing any previous one."""
        ...

    def clear(self) -> None:
        """Forget the token. Must be a no-op when nothing is stored."""
        ...
