"""Pydantic models for the ``pockettopo.toml`` sections.

Sparse TOML contract: defaults baked here, pockettopo.toml only contains
overrides. An empty or missing file is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    # Report shots whose trip index matches no trip as errors, not warnings.
    strict_trip_index: bool = False


class ExportConfig(BaseModel):
    """[export] section."""

    model_config = {"frozen": True}

    indent: int = Field(default=2, ge=0, le=8)
    # "render" lists drawing elements newest-first, the order they are painted.
    element_order: Literal["file", "render"] = "file"
