"""Tests for jsonshape.options."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsonshape.errors import ConfigError
from jsonshape.options import GenerateOptions, load_options, resolve_options


def test_defaults() -> None:
    options = GenerateOptions()

    assert options.root_name == "rootType"
    assert options.singularize is True
    assert options.literal_threshold == 0
    assert options.null_as_optional is False
    assert options.indent == 2
    assert options.quote == "single"
    assert options.extract_objects is True
    assert options.declaration_order == "discovery"
    assert options.quote_char == "'"
    assert not options.tracks_literals


@pytest.mark.parametrize(
    "changes",
    [
        {"root_name": ""},
        {"root_name": "   "},
        {"singularize": "yes"},
        {"literal_threshold": -1},
        {"literal_threshold": True},
        {"indent": 1.5},
        {"max_depth": 0},
        {"quote": "backtick"},
        {"declaration_order": "alphabetical"},
        {"singular_overrides": {"data": 1}},
        {"singular_overrides": ["data"]},
    ],
)
def test_invalid_values_raise_config_error(changes: dict) -> None:
    with pytest.raises(ConfigError):
        GenerateOptions(**changes)


def test_from_mapping_accepts_camel_and_snake_case() -> None:
    options = GenerateOptions.from_mapping({
        "rootName": "user",
        "literal_threshold": 3,
        "nullAsOptional": True,
        "singularOverrides": {"Data": "datum"},
    })

    assert options.root_name == "user"
    assert options.literal_threshold == 3
    assert options.tracks_literals
    assert options.null_as_optional is True
    assert options.singular_overrides == {"data": "datum"}


def test_from_mapping_rejects_unknown_keys() -> None:
    with pytest.raises(ConfigError, match="Unknown option"):
        GenerateOptions.from_mapping({"colour": "red"})
    with pytest.raises(ConfigError):
        GenerateOptions.from_mapping(["root_name"])


def test_replace_validates_and_copies() -> None:
    options = GenerateOptions()

    changed = options.replace(rootName="user", quote="double")

    assert changed.root_name == "user"
    assert changed.quote_char == '"'
    assert options.root_name == "rootType"
    with pytest.raises(ConfigError):
        options.replace(indent=-1)


def test_resolve_options() -> None:
    assert resolve_options() == GenerateOptions()
    base = GenerateOptions(indent=4)
    assert resolve_options(base) is base
    assert resolve_options(base, indent=0).indent == 0
    with pytest.raises(ConfigError):
        resolve_options({"indent": 4})


def test_load_options_missing_file_gives_defaults(tmp_path: Path) -> None:
    assert load_options(tmp_path / "absent.yml") == GenerateOptions()


def test_load_options_reads_root_mapping(tmp_path: Path) -> None:
    config = tmp_path / "options.yml"
    config.write_text("rootName: order\nliteralThreshold: 2\nquote: double\n", encoding="utf-8")

    options = load_options(config)

    assert options.root_name == "order"
    assert options.literal_threshold == 2
    assert options.quote == "double"


def test_load_options_reads_section(tmp_path: Path) -> None:
    config = tmp_path / "tools.yml"
    config.write_text("other_tool:\n  x: 1\njsonshape:\n  indent: 4\n", encoding="utf-8")

    assert load_options(config).indent == 4


@pytest.mark.parametrize("text", ["", "jsonshape:\n"])
def test_load_options_empty_documents_give_defaults(tmp_path: Path, text: str) -> None:
    config = tmp_path / "empty.yml"
    config.write_text(text, encoding="utf-8")

    assert load_options(config) == GenerateOptions()


@pytest.mark.parametrize("text", ["- a\n- b\n", "root_name: [unclosed\n", "indent: wide\n"])
def test_load_options_bad_documents_raise(tmp_path: Path, text: str) -> None:
    config = tmp_path / "bad.yml"
    config.write_text(text, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_options(config)
