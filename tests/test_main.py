from __future__ import annotations

import pytest

from giteasy.credentials import MemoryBackend, TokenFile
from giteasy.main import _credentials, build_parser, main
from giteasy.watchlist import Watchlist


class TestParser:
    def test_search_defaults(self):
        args = build_parser().parse_args(["search"])
        assert args.sort == "updated"
        assert args.then is None
        assert args.top == 50

    def test_hybrid_flags(self):
        args = build_parser().parse_args(["search", "--language", "Rust", "--sort", "updated", "--then", "stars"])
        assert (args.language, args.sort, args.then) == ("Rust", "updated", "stars")

    def test_rejects_unknown_sort(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["search", "--sort", "comments"])


class TestCredentialSource:
    def test_flag_beats_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        store = _credentials(build_parser().parse_args(["--token", "from-flag", "whoami"]))
        assert isinstance(store._backend, MemoryBackend)
        assert store.get() == "from-flag"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        assert _credentials(build_parser().parse_args(["whoami"])).get() == "from-env"

    def test_token_file(self, monkeypatch, tmp_path):
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        path = tmp_path / "token"
        path.write_text("saved\n")
        store = _credentials(build_parser().parse_args(["--token-file", str(path), "whoami"]))
        assert isinstance(store._backend, TokenFile)
        assert store.get() == "saved"


class TestWatchCommand:
    def test_set_and_list_issue_types(self, tmp_path):
        path = tmp_path / "watchlist.json"
        assert main(["--watchlist", str(path), "watch", "types", "bug", "security"]) == 0
        assert Watchlist(path).issue_types == ("bug", "security")
        assert main(["--watchlist", str(path), "watch", "list"]) == 0

    def test_unknown_issue_type(self, tmp_path):
        path = tmp_path / "watchlist.json"
        assert main(["--watchlist", str(path), "watch", "types", "nonsense"]) == 1

    def test_monitor_without_repositories(self, tmp_path):
        path = tmp_path / "watchlist.json"
        assert main(["--watchlist", str(path), "monitor", "--once"]) == 1
