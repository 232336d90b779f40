"""Tests for project configuration loading."""

import json
from pathlib import Path

import pytest

from lexgen.config import (
    DEFAULT_OUTPUT,
    GeneratorConfig,
    apply_cli_overrides,
    load_config,
    locate_config_file,
)


class TestLocateConfigFile:
    """Test config file discovery."""

    def test_none_found(self, tmp_path):
        assert locate_config_file(tmp_path) is None

    def test_prefers_lexgen_toml(self, tmp_path):
        (tmp_path / "lexgen.toml").write_text('output = "gen"\n', encoding="utf-8")
        (tmp_path / ".lexgenrc").write_text("{}", encoding="utf-8")
        assert locate_config_file(tmp_path) == tmp_path / "lexgen.toml"

    def test_pyproject_without_section_is_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "x"\n', encoding="utf-8")
        assert locate_config_file(tmp_path) is None

    def test_pyproject_with_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text('[tool.lexgen]\njobs = 2\n', encoding="utf-8")
        assert locate_config_file(tmp_path) == tmp_path / "pyproject.toml"

    def test_explicit_missing(self, tmp_path):
        assert locate_config_file(tmp_path, tmp_path / "nope.toml") is None


class TestLoadConfig:
    """Test parsing of the supported formats."""

    def test_defaults(self, tmp_path):
        config = load_config(tmp_path)
        assert config == GeneratorConfig()
        assert config.output == DEFAULT_OUTPUT

    def test_toml(self, tmp_path):
        (tmp_path / "lexgen.toml").write_text(
            'inputs = ["lexicons/**/*.json"]\n'
            'output = "src/atproto"\n'
            'package = "atproto"\n'
            "delete = true\n"
            "jobs = 4\n"
            "check_refs = true\n",
            encoding="utf-8",
        )
        config = load_config(tmp_path)
        root = tmp_path.resolve()
        assert config.inputs == [str(root / "lexicons/**/*.json")]
        assert config.output == root / "src" / "atproto"
        assert config.package == "atproto"
        assert config.delete is True
        assert config.jobs == 4
        assert config.check_refs is True
        assert config.source == root / "lexgen.toml"

    def test_json_rc(self, tmp_path):
        (tmp_path / ".lexgenrc").write_text(json.dumps({"inputs": "a.json"}), encoding="utf-8")
        config = load_config(tmp_path)
        assert config.inputs == [str(tmp_path.resolve() / "a.json")]
        assert config.jobs == 1

    def test_pyproject_section(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[tool.lexgen]\noutput = "/abs/out"\n', encoding="utf-8"
        )
        assert load_config(tmp_path).output == Path("/abs/out")

    def test_explicit_file_must_exist(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path, tmp_path / "missing.toml")


class TestOverrides:
    """Test CLI flag precedence."""

    def test_flags_win(self):
        base = GeneratorConfig(inputs=["a"], output=Path("x"), jobs=2, delete=True)
        updated = apply_cli_overrides(base, inputs=["b"], output="y", jobs=8, delete=None)
        assert updated.inputs == ["b"]
        assert updated.output == Path("y")
        assert updated.jobs == 8
        assert updated.delete is True

    def test_unset_flags_keep_file_values(self):
        base = GeneratorConfig(inputs=["a"], package="pkg", check_refs=True)
        updated = apply_cli_overrides(base)
        assert updated == base
        assert updated is not base
