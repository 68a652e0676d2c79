"""Shared test fixtures."""

from pathlib import Path

import pytest

from weighmatch.reader import read_competitors


DATA_DIR = Path(__file__).resolve().parent.parent / 'data'


@pytest.fixture(scope='session')
def data_dir() -> Path:
    """Path to the data directory."""
    return DATA_DIR


@pytest.fixture(scope='session')
def sample_competitors():
    """All valid competitors from entries.csv."""
    return read_competitors(DATA_DIR / 'entries.csv')
