from __future__ import annotations

import stat

import pytest

from giteasy import auth
from giteasy.async_client import GitHubApiError
from giteasy.credentials import CredentialStore, MemoryBackend, TokenFile
from giteasy.models import User


class CountingBackend(MemoryBackend):
    def __init__(self, token=None):
        super().__init__(token)
        self.loads = 0

    def load(self):
        self.loads += 1
        return super().load()


class TestCredentialStore:
    def test_reads_backend_once(self):
        backend = CountingBackend("abc")
        store = CredentialStore(backend)
        assert store.get() == "abc"
        assert store.get() == "abc"
        assert backend.loads == 1

    def test_set_strips_and_persists(self):
        backend = MemoryBackend()
        store = CredentialStore(backend)
        store.set("  ghp_token\n")
        assert store.get() == "ghp_token"
        assert backend.load() == "ghp_token"

    def test_empty_token_rejected(self):
        with pytest.raises(ValueError):
            CredentialStore(MemoryBackend()).set("   ")

    def test_clear_empties_cache_and_backend(self):
        backend = MemoryBackend("abc")
        store = CredentialStore(backend)
        store.get()
        store.clear()
        assert store.get() is None
        assert backend.load() is None


class TestTokenFile:
    def test_round_trip_and_permissions(self, tmp_path):
        path = tmp_path / "nested" / "token"
        token_file = TokenFile(path)
        token_file.save("xyz")
        assert token_file.load() == "xyz"
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_or_blank(self, tmp_path):
        path = tmp_path / "token"
        assert TokenFile(path).load() is None
        path.write_text("\n")
        assert TokenFile(path).load() is None

    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / "token"
        store = CredentialStore(TokenFile(path))
        store.set("xyz")
        store.clear()
        assert not path.exists()
        store.clear()


class FakeUserClient:
    def __init__(self, result):
        self.result = result

    async def get_current_user(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class TestAuth:
    @pytest.mark.asyncio
    async def test_login_success_keeps_token(self):
        store = CredentialStore(MemoryBackend())
        user = await auth.login(FakeUserClient(User(login="alice")), store, "tok")
        assert user.login == "alice"
        assert store.get() == "tok"

    @pytest.mark.asyncio
    async def test_login_failure_clears_token(self):
        store = CredentialStore(MemoryBackend())
        client = FakeUserClient(GitHubApiError("Bad credentials", status=401))
        with pytest.raises(GitHubApiError):
            await auth.login(client, store, "bad")
        assert store.get() is None

    @pytest.mark.asyncio
    async def test_restore_without_token(self):
        store = CredentialStore(MemoryBackend())
        assert await auth.restore_session(FakeUserClient(User(login="x")), store) is None

    @pytest.mark.asyncio
    async def test_restore_rejected_token(self, caplog):
        store = CredentialStore(MemoryBackend("stale"))
        client = FakeUserClient(GitHubApiError("Bad credentials", status=401))
        with pytest.raises(GitHubApiError):
            await auth.restore_session(client, store)
        assert store.get() is None
        assert "Saved token rejected" in caplog.text

    def test_logout(self):
        store = CredentialStore(MemoryBackend("tok"))
        auth.logout(store)
        assert store.get() is None
