"""Shared test fixtures for windowed-selection."""

from dataclasses import dataclass

import numpy as np
import pandas as pd
import pytest

from windowed_selection.core.loaded_window import LoadedWindow


@dataclass(frozen=True)
class Run:
    """Attribute-style record, like a flat run row."""

    id: int
    name: str = ""


@pytest.fixture
def five_window():
    """Five loaded runs with IDs 10..14 at positions 0..4, total known."""
    runs = [Run(id=i, name=f"run-{i}") for i in range(10, 15)]
    return LoadedWindow.from_records(runs, total=5)


@pytest.fixture
def model_window():
    """Mapping-style records (model registry rows) with a gap at position 2."""
    models = [
        {"id": 1, "name": "resnet"},
        {"id": 2, "name": "bert"},
        None,
        {"id": 4, "name": "gpt"},
    ]
    return LoadedWindow.from_records(models, total=4)


@pytest.fixture
def sparse_window():
    """Huge dataset with two pages loaded far apart."""
    window = LoadedWindow.pending(total=5_000_000)
    window = window.with_page(0, [Run(id=100 + i) for i in range(10)])
    return window.with_page(1_000_000, [Run(id=900 + i) for i in range(5)])


@pytest.fixture
def runs_frame():
    """A page of runs as a DataFrame, one row not yet resolved."""
    return pd.DataFrame({
        "id": [7, 8, np.nan, 10],
        "state": ["COMPLETED", "RUNNING", None, "ERROR"],
    })
