"""Test loading forth.toml"""
from pathlib import Path

import pytest

from forth_lang import config
from forth_lang.config_classes import InterpreterConfig, stack_size_from_bytes


@pytest.fixture
def in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(in_tmp):
    cfg = config.load()
    assert cfg.config_file is None
    assert cfg.interpreter.stack_size == 128 * 1024
    assert cfg.interpreter.max_elements == 64 * 1024
    assert cfg.interpreter.stack_file == Path("stack.fth")
    assert cfg.interpreter.preserve_stack_on == ("stack-overflow",)


def test_default_file(in_tmp):
    (in_tmp / "forth.toml").write_text(
        '[interpreter]\nstack_size = 10\nstack_file = "out.fth"\npreserve_stack_on = []\n'
    )
    cfg = config.load()
    assert cfg.config_file == Path("forth.toml")
    assert cfg.interpreter.max_elements == 5
    assert cfg.interpreter.stack_file == Path("out.fth")
    assert cfg.interpreter.preserve_stack_on == ()


def test_explicit_file(in_tmp):
    path = in_tmp / "other.toml"
    path.write_text("[interpreter]\nstack_size = 64\n")
    cfg = config.load(path)
    assert cfg.interpreter.stack_size == 64
    assert cfg.interpreter.stack_file == Path("stack.fth")


def test_missing_explicit_file(in_tmp):
    with pytest.raises(config.ConfigError):
        config.load("nope.toml")


def test_unparseable(in_tmp):
    (in_tmp / "forth.toml").write_text("[interpreter\n")
    with pytest.raises(config.ConfigError):
        config.load()


def test_unknown_key(in_tmp):
    (in_tmp / "forth.toml").write_text("[interpreter]\nstack_depth = 10\n")
    with pytest.raises(config.ConfigError):
        config.load()


@pytest.mark.parametrize("value", ["-2", '"big"'])
def test_bad_stack_size(in_tmp, value):
    (in_tmp / "forth.toml").write_text(f"[interpreter]\nstack_size = {value}\n")
    with pytest.raises(config.ConfigError):
        config.load()


def test_unknown_section_ignored(in_tmp):
    (in_tmp / "forth.toml").write_text("[other]\nx = 1\n")
    cfg = config.load()
    assert cfg.interpreter == InterpreterConfig()


@pytest.mark.parametrize("size, elements", [(0, 0), (1, 0), (10, 5), (131072, 65536)])
def test_stack_size_from_bytes(size, elements):
    assert stack_size_from_bytes(size) == elements
