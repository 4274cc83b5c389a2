"""Shared test fixtures for Silhouette tests."""

import pytest


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Empty HOME and working directory with no SILHOUETTE_* variables.

    Returns the (home, project) directories so tests can drop config files
    where load_options looks for them.
    """
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(project)
    for name in ("SILHOUETTE_MAX_DEPTH", "SILHOUETTE_ARRAY_LIMIT", "SILHOUETTE_CYCLE_SCOPE"):
        monkeypatch.delenv(name, raising=False)
    return home, project


@pytest.fixture
def self_referencing():
    """Record whose "self" key points back at itself."""
    node = {"a": 1}
    node["self"] = node
    return node


@pytest.fixture
def deep_record():
    """Six levels of nesting, one more than the default max_depth."""
    return {"l1": {"l2": {"l3": {"l4": {"l5": {"l6": "too deep"}}}}}}


@pytest.fixture
def ml_output():
    """Model output mixing numpy buffers, lists and metadata."""
    import numpy as np

    return {
        "predictions": np.zeros(1000, dtype=np.float32),
        "labels": ["cat", "dog", "bird"],
        "confidence": 0.95,
        "metadata": {"model": "resnet-50", "version": "1.0"},
    }
