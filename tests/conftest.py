"""Conftest for tests.

Ensure beartype runtime checking is enabled before importing the package.

This module sets MESA_LITE_RUNTIME_TYPECHECKING=1 at import time so every
public call made by the tests is also checked against its annotations.
"""

import os

os.environ.setdefault("MESA_LITE_RUNTIME_TYPECHECKING", "1")

import pytest

from mesa_lite import Model


@pytest.fixture
def model() -> Model:
    return Model(seed=42)


@pytest.fixture
def grid_model() -> Model:
    """Ten agents on a 5x5 Moore torus."""
    return Model(10, 5, 5, seed=42)
