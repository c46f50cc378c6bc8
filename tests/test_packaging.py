"""Tests for package discovery settings."""

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def test_cli_packages_are_discovered():
    """The cli packages have no __init__.py, so discovery must include namespaces."""
    with open(ROOT / "pyproject.toml", "rb") as f:
        find = tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]

    assert find["namespaces"] is True
    assert find["where"] == ["src"]
    for package in ("cli", "cli/commands"):
        package_dir = ROOT / "src" / "shopkeep" / package
        assert package_dir.is_dir()
        assert any(package_dir.glob("*.py"))
