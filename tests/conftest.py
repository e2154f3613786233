"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os

import pytest

from birth_quality.config_species import BUILTIN_SPECIES, HUMAN
from birth_quality.domain.species import Species
from birth_quality.settings import BirthQualitySettings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all BQ__ env vars so tests are isolated from the developer's shell."""
    for key in list(os.environ):
        if key.startswith("BQ__"):
            monkeypatch.delenv(key)


@pytest.fixture
def human() -> Species:
    return HUMAN


@pytest.fixture
def kobold() -> Species:
    """Adult at 9, lives 40 years: half the human maturation age and lifespan."""
    return BUILTIN_SPECIES["kobold"]


@pytest.fixture
def default_settings() -> BirthQualitySettings:
    return BirthQualitySettings()


