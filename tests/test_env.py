"""Tests for margin_tool.core.env — .env loading, walk-up logic and settings."""

import os
from pathlib import Path

import pytest
from margin_tool.core.env import DEFAULT_BLANK_THRESHOLD, _find_dotenv, _parse_dotenv, load_env, load_settings


class TestParseDotenv:
    def test_simple_key_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('FOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_quoted_values(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('KEY="hello world"\nKEY2=\'single\'\n')
        assert _parse_dotenv(f) == {'KEY': 'hello world', 'KEY2': 'single'}

    def test_comments_and_blank_lines_ignored(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('# comment\n\nFOO=bar\n\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}

    def test_no_value(self, tmp_path: Path) -> None:
        f = tmp_path / '.env'
        f.write_text('NOEQUALS\nFOO=bar\n')
        assert _parse_dotenv(f) == {'FOO': 'bar'}


class TestFindDotenv:
    def test_finds_in_parent(self, tmp_path: Path) -> None:
        subdir = tmp_path / 'sub'
        subdir.mkdir()
        dotenv = tmp_path / '.env'
        dotenv.write_text('X=1\n')
        assert _find_dotenv(subdir) == dotenv

    def test_stops_at_git_dir(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (repo / '.git').mkdir()
        subdir = repo / 'src'
        subdir.mkdir()
        assert _find_dotenv(subdir) is None

    def test_stops_at_git_file(self, tmp_path: Path) -> None:
        repo = tmp_path / 'repo'
        repo.mkdir()
        (tmp_path / '.env').write_text('X=1\n')
        (repo / '.git').write_text('gitdir: ../somewhere\n')
        assert _find_dotenv(repo) is None


class TestLoadEnv:
    def test_sets_missing_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('MARGIN_TOOL_STRICT', raising=False)
        (tmp_path / '.env').write_text('MARGIN_TOOL_STRICT=1\n')
        monkeypatch.chdir(tmp_path)
        assert load_env() == tmp_path / '.env'
        assert os.environ.get('MARGIN_TOOL_STRICT') == '1'
        os.environ.pop('MARGIN_TOOL_STRICT', None)

    def test_does_not_overwrite_existing(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('MARGIN_TOOL_BLANK_THRESHOLD', '3')
        (tmp_path / '.env').write_text('MARGIN_TOOL_BLANK_THRESHOLD=99\n')
        monkeypatch.chdir(tmp_path)
        load_env()
        assert os.environ.get('MARGIN_TOOL_BLANK_THRESHOLD') == '3'

    def test_explicit_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('TEST_MARGIN_KEY', raising=False)
        dotenv = tmp_path / 'custom.env'
        dotenv.write_text('TEST_MARGIN_KEY=custom\n')
        load_env(env_file=str(dotenv))
        assert os.environ.get('TEST_MARGIN_KEY') == 'custom'
        os.environ.pop('TEST_MARGIN_KEY', None)

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        assert load_env(env_file=str(tmp_path / 'nope.env')) is None

    def test_returns_none_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / '.git').mkdir()
        monkeypatch.chdir(tmp_path)
        assert load_env() is None


class TestLoadSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv('MARGIN_TOOL_STRICT', raising=False)
        monkeypatch.delenv('MARGIN_TOOL_BLANK_THRESHOLD', raising=False)
        settings = load_settings()
        assert settings.strict is False
        assert settings.blank_threshold == DEFAULT_BLANK_THRESHOLD

    @pytest.mark.parametrize('raw', ['1', 'true', 'YES', ' on '])
    def test_strict_truthy(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv('MARGIN_TOOL_STRICT', raw)
        assert load_settings().strict is True

    def test_strict_falsy(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('MARGIN_TOOL_STRICT', '0')
        assert load_settings().strict is False

    def test_threshold(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('MARGIN_TOOL_BLANK_THRESHOLD', '2.5')
        assert load_settings().blank_threshold == 2.5

    def test_bad_threshold(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv('MARGIN_TOOL_BLANK_THRESHOLD', 'lots')
        with pytest.raises(ValueError, match='MARGIN_TOOL_BLANK_THRESHOLD'):
            load_settings()
