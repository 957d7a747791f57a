"""Tests for config models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from pockettopo.config.models import CheckConfig, ExportConfig


class TestDefaults:
    def test_section_defaults(self) -> None:
        assert CheckConfig().strict_trip_index is False
        assert ExportConfig().indent == 2
        assert ExportConfig().element_order == "file"

    def test_sparse_override(self) -> None:
        cfg = ExportConfig.model_validate({"element_order": "render"})
        assert cfg.element_order == "render"
        assert cfg.indent == 2

    def test_frozen(self) -> None:
        cfg = ExportConfig()
        with pytest.raises(ValidationError):
            cfg.indent = 4  # type: ignore[misc]


class TestValidation:
    @pytest.mark.parametrize("indent", [-1, 9])
    def test_indent_range(self, indent: int) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(indent=indent)

    def test_unknown_element_order(self) -> None:
        with pytest.raises(ValidationError):
            ExportConfig(element_order="newest")  # type: ignore[arg-type]
