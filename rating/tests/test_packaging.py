"""
Unit Tests for Package Discovery

Checks that the pyproject package discovery picks up every importable
package, including `shared` and `rating.scripts`, which have no __init__.py.

Run with: pytest rating/tests/test_packaging.py -v
"""

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")
setuptools = pytest.importorskip("setuptools")


ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def find_config():
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)["tool"]["setuptools"]["packages"]["find"]


class TestDiscovery:
    """Namespace packages are part of the distribution."""

    def test_namespaces_enabled(self, find_config):
        assert find_config.get("namespaces") is True

    def test_all_packages_found(self, find_config):
        packages = setuptools.find_namespace_packages(
            where=str(ROOT / find_config["where"][0]),
            include=find_config["include"],
        )
        for package in ("shared.database", "shared.matching", "shared.rounding",
                        "rating", "rating.scripts", "rating.maintenance", "rating.data.loaders"):
            assert package in packages


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
