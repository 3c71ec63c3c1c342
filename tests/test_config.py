"""Tests for DuplicateSetConfig construction."""

import argparse
import logging

from dupsets.config import DuplicateSetConfig, configure_logging


def test_defaults():
    config = DuplicateSetConfig()
    assert config.umi_aware is True
    assert config.show_progress is False
    assert config.log_summary is True


def test_from_args_reads_namespace():
    args = argparse.Namespace(umi_aware=False, show_progress=True)
    config = DuplicateSetConfig.from_args(args)

    assert config.umi_aware is False
    assert config.show_progress is True
    assert config.log_summary is True


def test_from_args_empty_namespace_uses_defaults():
    assert DuplicateSetConfig.from_args(argparse.Namespace()) == DuplicateSetConfig()


def test_from_dict_ignores_unknown_keys():
    config = DuplicateSetConfig.from_dict({'umi_aware': False, 'threads': 4})
    assert config == DuplicateSetConfig(umi_aware=False)


def test_configure_logging_sets_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")

    assert calls["level"] == logging.DEBUG
    assert "%(levelname)s" in calls["format"]
