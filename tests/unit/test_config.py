"""
Unit tests for the loader config model and YAML I/O (dsv_matrix.config).
"""

import pytest
from pydantic import ValidationError

from dsv_matrix.config import LoaderConfig, load_config, save_config
from dsv_matrix.exceptions import ConfigValidationError
from dsv_matrix.mapping import IncrementPolicy, MissingPolicy, NumericPolicy


class TestLoaderConfig:
    """Tests for LoaderConfig validation."""

    def test_defaults(self):
        cfg = LoaderConfig()
        assert cfg.transpose is True
        assert cfg.dtype == "float64"
        assert cfg.encoding == "utf-8-sig"
        assert cfg.policy == "numeric"

    def test_dtype_normalised(self):
        assert LoaderConfig(dtype="f4").dtype == "float32"
        assert LoaderConfig(dtype="int32").dtype == "int32"

    @pytest.mark.parametrize("dtype", ["str", "bool", "not-a-dtype"])
    def test_invalid_dtype_rejected(self, dtype):
        with pytest.raises(ValidationError):
            LoaderConfig(dtype=dtype)

    def test_unknown_policy_rejected(self):
        with pytest.raises(ValidationError):
            LoaderConfig(policy="median")

    def test_missing_policy_requires_float(self):
        with pytest.raises(ValidationError, match="float dtype"):
            LoaderConfig(policy="missing", dtype="int64")

    def test_no_delimiter_field(self):
        """The delimiter always comes from the file kind."""
        assert "delimiter" not in LoaderConfig.model_fields


class TestBuildMapper:
    """Tests for LoaderConfig.build_mapper()."""

    def test_numeric(self):
        mapper = LoaderConfig().build_mapper()
        assert isinstance(mapper.policy, NumericPolicy)
        assert mapper.dimensionality == 0

    def test_increment(self):
        mapper = LoaderConfig(policy="increment", force_all_mappings=True).build_mapper()
        assert isinstance(mapper.policy, IncrementPolicy)
        assert mapper.policy.force_all_mappings is True

    def test_missing(self):
        mapper = LoaderConfig(policy="missing", missing_values=["?", "NA"]).build_mapper()
        assert isinstance(mapper.policy, MissingPolicy)
        assert mapper.policy.missing_values == frozenset({"?", "NA"})

    def test_fresh_mapper_each_call(self):
        cfg = LoaderConfig()
        assert cfg.build_mapper() is not cfg.build_mapper()


class TestYamlIO:
    """Tests for load_config() / save_config()."""

    def test_roundtrip(self, tmp_path):
        cfg = LoaderConfig(transpose=False, dtype="float32", policy="missing",
                           missing_values=["?"])
        path = tmp_path / "sub" / "loader.yaml"
        save_config(cfg, path)
        assert path.exists()
        assert load_config(path) == cfg

    def test_saved_file_has_header(self, tmp_path):
        path = tmp_path / "loader.yaml"
        save_config(LoaderConfig(), path)
        assert path.read_text(encoding="utf-8").startswith("# dsv-matrix")

    def test_partial_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "loader.yaml"
        path.write_text("policy: increment\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.policy == "increment"
        assert cfg.transpose is True

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="empty"):
            load_config(path)

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("dtype: complex128\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)
