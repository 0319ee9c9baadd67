"""Single-slot access-token store with pluggable persistence."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .config import TOKEN_PATH

log = logging.getLogger(__name__)


class TokenBackend(Protocol):
    def load(self) -> str | None: ...

    def save(self, token: str) -> None: ...

    def delete(self) -> None: ...


class TokenFile:
    """Token persisted as a 0600 text file."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else TOKEN_PATH

    def load(self) -> str | None:
        try:
            if self.path.exists():
                t = self.path.read_text().strip()
                return t if t else None
        except OSError as exc:
            log.warning("Could not read token file %s: %s", self.path, exc)
        return None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token + "\n")
        self.path.chmod(0o600)

    def delete(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryBackend:
    """Process-local backend, used for tokens passed on the command line."""

    def __init__(self, token: str | None = None):
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def delete(self) -> None:
        self._token = None


class CredentialStore:
    """Owns the bearer token. Reads the backend lazily, once."""

    def __init__(self, backend: TokenBackend | None = None):
        self._backend = backend if backend is not None else TokenFile()
        self._token: str | None = None
        self._loaded = False

    def get(self) -> str | None:
        if not self._loaded:
            self._token = self._backend.load()
            self._loaded = True
        return self._token

    def set(self, token: str) -> None:
        token = token.strip()
        if not token:
            raise ValueError("Token must not be empty")
        self._backend.save(token)
        self._token = token
        self._loaded = True

    def clear(self) -> None:
        # Cache first, so nothing can reuse a revoked token if the backend fails.
        self._token = None
        self._loaded = True
        self._backend.delete()
        log.debug("Credential cleared")
