"""Unit tests for GeneratorConfig (schemascaffold.config).

Tests cover:
- defaults and derived values
- save/load
- from_env
- parse_plural_overrides
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from schemascaffold.config import GeneratorConfig, parse_plural_overrides

_ENV_VARS = [
    "SCAFFOLD_LANGUAGE",
    "SCAFFOLD_FLAVOR",
    "SCAFFOLD_TEMPLATE_DIR",
    "SCAFFOLD_OUTPUT_DIR",
    "SCAFFOLD_OVERWRITE",
    "SCAFFOLD_PARALLEL",
    "SCAFFOLD_INIT_GIT",
    "SCAFFOLD_VERBOSE",
    "SCAFFOLD_PLURALS",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.language == "java"
        assert config.flavor == "spring"
        assert config.template_dir is None
        assert config.output_dir == Path("./output")
        assert config.overwrite is False
        assert config.parallel is True
        assert config.init_git is False
        assert config.verbose is False
        assert config.plural_overrides == {}

    @pytest.mark.unit
    def test_template_set_name(self):
        assert GeneratorConfig(language="python", flavor="fastapi").template_set_name == "python/fastapi"

    @pytest.mark.unit
    def test_project_dir(self, tmp_path: Path):
        config = GeneratorConfig(output_dir=tmp_path)
        assert config.project_dir("shopdb") == tmp_path / "shopdb"

    @pytest.mark.unit
    def test_invalid_flag_rejected(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(parallel="sometimes")


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


class TestSaveLoad:
    @pytest.mark.unit
    def test_save_then_load(self, tmp_path: Path):
        config = GeneratorConfig(
            language="python",
            flavor="fastapi",
            output_dir=tmp_path / "out",
            plural_overrides={"person": "people"},
        )
        path = config.save(tmp_path / "cfg" / "scaffold.json")
        assert path.exists()
        assert GeneratorConfig.load(path) == config

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            GeneratorConfig.load(tmp_path / "missing.json")


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------


class TestFromEnv:
    @pytest.mark.unit
    def test_empty_env_gives_defaults(self, clean_env):
        assert GeneratorConfig.from_env() == GeneratorConfig()

    @pytest.mark.unit
    def test_reads_every_variable(self, clean_env, tmp_path: Path):
        clean_env.setenv("SCAFFOLD_LANGUAGE", "python")
        clean_env.setenv("SCAFFOLD_FLAVOR", "fastapi")
        clean_env.setenv("SCAFFOLD_TEMPLATE_DIR", str(tmp_path / "tpl"))
        clean_env.setenv("SCAFFOLD_OUTPUT_DIR", str(tmp_path / "out"))
        clean_env.setenv("SCAFFOLD_OVERWRITE", "true")
        clean_env.setenv("SCAFFOLD_PARALLEL", "0")
        clean_env.setenv("SCAFFOLD_INIT_GIT", "yes")
        clean_env.setenv("SCAFFOLD_VERBOSE", "1")
        clean_env.setenv("SCAFFOLD_PLURALS", "person=people, Child=children")

        config = GeneratorConfig.from_env()
        assert config.template_set_name == "python/fastapi"
        assert config.template_dir == tmp_path / "tpl"
        assert config.output_dir == tmp_path / "out"
        assert config.overwrite is True
        assert config.parallel is False
        assert config.init_git is True
        assert config.verbose is True
        assert config.plural_overrides == {"person": "people", "child": "children"}

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["false", "no", "off", "0"])
    def test_false_flags(self, clean_env, value):
        clean_env.setenv("SCAFFOLD_PARALLEL", value)
        assert GeneratorConfig.from_env().parallel is False

    @pytest.mark.unit
    def test_bad_plurals(self, clean_env):
        clean_env.setenv("SCAFFOLD_PLURALS", "person")
        with pytest.raises(ValueError, match="singular=plural"):
            GeneratorConfig.from_env()


# ---------------------------------------------------------------------------
# parse_plural_overrides
# ---------------------------------------------------------------------------


class TestParsePluralOverrides:
    @pytest.mark.unit
    def test_pairs(self):
        assert parse_plural_overrides(["person=people", "Mouse = mice"]) == {
            "person": "people",
            "mouse": "mice",
        }

    @pytest.mark.unit
    def test_blank_entries_ignored(self):
        assert parse_plural_overrides(["", "  "]) == {}

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", ["person", "=people", "person=", "person = "])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_plural_overrides([bad])
