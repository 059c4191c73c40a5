import logging

from expense_tracker import config


def test_configure_logging_resolves_level(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: captured.update(kwargs))
    config.configure_logging('debug')
    assert captured['level'] == logging.DEBUG
    assert captured['format'] == config.LOG_FORMAT


def test_configure_logging_falls_back_to_info(monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, 'basicConfig', lambda **kwargs: captured.update(kwargs))
    config.configure_logging('chatty')
    assert captured['level'] == logging.INFO


def test_storage_keys_and_cache_file():
    assert config.BUDGET_KEY == 'studentBudget'
    assert config.EXPENSES_KEY == 'studentExpenses'
    assert config.CACHE_PATH.name.endswith('.json')
