"""pockettopo — decoder and CLI for PocketTopo ``.top`` survey files."""

from __future__ import annotations

from pockettopo.codec.parser import parse

__version__ = "0.3.0"

__all__ = ["__version__", "parse"]
