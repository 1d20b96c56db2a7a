"""Unit tests for reading engine bundles from disk."""

from __future__ import annotations

import pytest

from mathjax_bridge.domain.errors import BundleMissingError
from mathjax_bridge.domain.interfaces import IBundleStore
from mathjax_bridge.infrastructure.engine import FileBundleStore
from mathjax_bridge.types import OutputFormat


def test_reads_bundle_by_format(tmp_path) -> None:
    (tmp_path / "svg.bundle.js").write_text("var svg = {};", encoding="utf-8")
    bundle = FileBundleStore(tmp_path).read(OutputFormat.SVG)

    assert bundle.format is OutputFormat.SVG
    assert bundle.path == tmp_path / "svg.bundle.js"
    assert bundle.source == "var svg = {};"
    assert "var svg" not in repr(bundle)


def test_missing_bundle(tmp_path) -> None:
    with pytest.raises(BundleMissingError) as excinfo:
        FileBundleStore(tmp_path).read(OutputFormat.CHTML)
    assert excinfo.value.location == str(tmp_path / "chtml.bundle.js")


def test_store_satisfies_protocol(tmp_path) -> None:
    assert isinstance(FileBundleStore(tmp_path), IBundleStore)
