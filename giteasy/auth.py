from __future__ import annotations

import logging

from .async_client import AsyncGitHubClient, GitHubApiError
from .credentials import CredentialStore
from .models import User

log = logging.getLogger(__name__)


async def login(client: AsyncGitHubClient, store: CredentialStore, token: str) -> User:
    """Store ``token`` and validate it against ``/user``.

    A rejected token is cleared before the error propagates.
    """
    store.set(token)
    try:
        return await client.get_current_user()
    except GitHubApiError:
        store.clear()
        raise


async def restore_session(client: AsyncGitHubClient, store: CredentialStore) -> User | None:
    if not store.get():
        return None
    try:
        return await client.get_current_user()
    except GitHubApiError as exc:
        log.warning("Saved token rejected (%s); clearing it", exc)
        store.clear()
        raise


def logout(store: CredentialStore) -> None:
    store.clear()
