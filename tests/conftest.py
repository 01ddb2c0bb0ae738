"""Shared fixtures for temperament tests."""

import pytest

from temperament.core import Temperament


@pytest.fixture
def equal():
    return Temperament.from_preset("equal")


@pytest.fixture
def meantone():
    return Temperament.from_preset("quarterCommaMeantone")


@pytest.fixture
def pythagorean():
    return Temperament.from_preset("pythagoreanD")


@pytest.fixture
def sample_data():
    """A small valid document; tests copy and modify it."""
    return {
        "name": "Sample temperament",
        "referenceName": "A",
        "referencePitch": 440,
        "referenceOctave": 4,
        "octaveBaseName": "C",
        "notes": {
            "C": ["A", 300],
            "D": ["A", 500],
            "E": ["A", 700],
        },
    }
