"""Tests for configuration loading."""

import tempfile
from pathlib import Path

import pytest

from scholia.config import load_config
from scholia.runtime import build_runtime


def test_load_config_defaults():
    """Test loading config with defaults when no file exists."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config = load_config(config_path=Path(tmpdir) / "missing.toml")

    assert config.render.default_collapsed is False
    assert config.render.highlight_duration == 2000
    assert config.render.enable_quick_toolbar is True
    assert config.footnotes.default_type == "note"
    assert config.fences.open == '"""commentary'
    assert config.fences.close == '"""'


def test_load_config_from_file():
    """Test loading config from a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "scholia.toml"
        config_path.write_text("""
[render]
default_collapsed = true
highlight_duration = 750
enable_statistics = false
line_breaks = true

[footnotes]
default_type = "question"

[fences]
open = ":::commentary"
close = ":::"
""")

        config = load_config(config_path=config_path)

        assert config.render.default_collapsed is True
        assert config.render.highlight_duration == 750
        assert config.render.enable_statistics is False
        assert config.render.enable_block_tags is True
        assert config.render.line_breaks is True
        assert config.footnotes.default_type == "question"
        assert config.fences.open == ":::commentary"
        assert config.fences.close == ":::"


def test_load_config_search_cwd():
    """Test config search in current working directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        import os
        orig_cwd = os.getcwd()
        try:
            os.chdir(tmpdir)
            config_path = Path(tmpdir) / "scholia.toml"
            config_path.write_text("""
[footnotes]
default_type = "idea"
""")

            config = load_config()
            assert config.footnotes.default_type == "idea"
        finally:
            os.chdir(orig_cwd)


def test_load_config_rejects_unknown_type():
    """Test that an unknown default footnote type is an error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "scholia.toml"
        config_path.write_text('[footnotes]\ndefault_type = "aside"\n')

        with pytest.raises(ValueError, match="aside"):
            load_config(config_path=config_path)


def test_load_config_rejects_bad_duration():
    """Test that a non-positive highlight duration is an error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "scholia.toml"
        config_path.write_text("[render]\nhighlight_duration = 0\n")

        with pytest.raises(ValueError, match="highlight_duration"):
            load_config(config_path=config_path)


def test_build_runtime_wires_config():
    """Test that the runtime hands render options to the block renderer."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "scholia.toml"
        config_path.write_text("[render]\ndefault_collapsed = true\n")

        rt = build_runtime(config_path=config_path)

    assert rt.renderer.config is rt.config.render
    assert rt.renderer.markdown is rt.markdown
    assert rt.renderer.config.default_collapsed is True
    assert len(rt.session) == 0
