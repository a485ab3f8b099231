"""Tests for settings.py — load_settings defaults and env overrides."""
from __future__ import annotations

import pytest

from guideline_help.settings import Paths, SearchSettings, load_settings

_ENV_VARS = ("HELP_DATA_DIR", "HELP_BM25_K1", "HELP_KEYWORD_BOOST", "HELP_MAX_RESULTS", "HELP_CORPUS_PATH", "HELP_LOG_FILE")


@pytest.fixture()
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSearchSettings:
    def test_defaults(self):
        s = SearchSettings()
        assert s.k1 == 1.5
        assert s.keyword_boost == 1.5
        assert s.max_results == 5


class TestPaths:
    def test_defaults(self):
        p = Paths()
        assert p.data_dir == "data"
        assert p.corpus_file == "data/help_corpus.json"
        assert p.log_file is None

    def test_corpus_file_follows_data_dir(self):
        p = Paths(data_dir="/srv/help")
        assert p.corpus_file == "/srv/help/help_corpus.json"
        assert p.queries_file == "/srv/help/queries.jsonl"

    def test_explicit_corpus_file_kept(self):
        assert Paths(data_dir="/srv/help", corpus_file="other.json").corpus_file == "other.json"


class TestLoadSettings:
    def test_defaults_when_env_vars_absent(self, clean_env):
        settings, paths = load_settings()
        assert settings == SearchSettings()
        assert paths == Paths()

    def test_env_vars_override_defaults(self, clean_env):
        clean_env.setenv("HELP_BM25_K1", "1.2")
        clean_env.setenv("HELP_KEYWORD_BOOST", "2")
        clean_env.setenv("HELP_MAX_RESULTS", "10")
        clean_env.setenv("HELP_CORPUS_PATH", "/tmp/corpus.json")
        clean_env.setenv("HELP_LOG_FILE", "logs/help.log")
        settings, paths = load_settings()
        assert settings == SearchSettings(k1=1.2, keyword_boost=2.0, max_results=10)
        assert paths.corpus_file == "/tmp/corpus.json"
        assert paths.log_file == "logs/help.log"

    def test_invalid_number_falls_back(self, clean_env, caplog):
        clean_env.setenv("HELP_MAX_RESULTS", "many")
        settings, _ = load_settings()
        assert settings.max_results == 5
        assert "HELP_MAX_RESULTS" in caplog.text

    def test_data_dir_env_moves_corpus_file(self, clean_env):
        clean_env.setenv("HELP_DATA_DIR", "/srv/help")
        _, paths = load_settings()
        assert paths.data_dir == "/srv/help"
        assert paths.corpus_file == "/srv/help/help_corpus.json"

    @pytest.mark.parametrize("raw", ["0", "-1.5", "nan", "inf"])
    def test_out_of_range_k1_falls_back(self, clean_env, caplog, raw):
        clean_env.setenv("HELP_BM25_K1", raw)
        settings, _ = load_settings()
        assert settings.k1 == 1.5
        assert "HELP_BM25_K1" in caplog.text

    def test_non_positive_keyword_boost_falls_back(self, clean_env):
        clean_env.setenv("HELP_KEYWORD_BOOST", "0")
        settings, _ = load_settings()
        assert settings.keyword_boost == 1.5
