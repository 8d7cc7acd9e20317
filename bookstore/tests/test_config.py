import importlib

from bookstore.percolator import config as config_module
from bookstore.percolator.config import _env_flag


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("MATCHING_BACKEND", "opensearch")
    monkeypatch.setenv("PERCOLATOR_INDEX", "book_preferences")
    monkeypatch.setenv("OPENSEARCH_TIMEOUT", "2.5")
    monkeypatch.setenv("PERCOLATOR_CREATE_INDEX", "false")
    try:
        reloaded = importlib.reload(config_module)
        config = reloaded.DEFAULT_PERCOLATOR_CONFIG
        assert config.backend == "opensearch"
        assert config.index == "book_preferences"
        assert config.timeout == 2.5
        assert config.create_index is False
    finally:
        monkeypatch.undo()
        importlib.reload(config_module)


def test_env_flag_parsing(monkeypatch):
    monkeypatch.setenv("PERCOLATOR_TEST_FLAG", "yes")
    assert _env_flag("PERCOLATOR_TEST_FLAG", False) is True
    monkeypatch.setenv("PERCOLATOR_TEST_FLAG", "0")
    assert _env_flag("PERCOLATOR_TEST_FLAG", True) is False
    monkeypatch.delenv("PERCOLATOR_TEST_FLAG")
    assert _env_flag("PERCOLATOR_TEST_FLAG", True) is True
