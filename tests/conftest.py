"""Shared fixtures for the competition and data-pack test suites."""

import random

import pytest

from src.competition_engine.match_engine import MatchEngine, StrengthLookup
from src.data_pack.ingestion import DataPackLoader


# ------------------------------------------------------------------
# Lightweight factories, cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def engine(rng):
    return MatchEngine(rng)


@pytest.fixture
def four_clubs():
    return ["A", "B", "C", "D"]


@pytest.fixture
def flat_lookup(four_clubs):
    """Every club rated 70."""
    return StrengthLookup({club: 70.0 for club in four_clubs})


# ------------------------------------------------------------------
# Data-pack fixtures, read from an empty temp dir, so the fallback
# pack is generated with a fixed seed
# ------------------------------------------------------------------

@pytest.fixture
def fallback_pack(tmp_path):
    return DataPackLoader(tmp_path / "empty_pack", rng=random.Random(7)).load()
