"""Pytest fixtures for binning unit tests.

This module provides shared fixtures for testing individual functions
in isolation across the binning and metrics packages.
"""

import pytest
import numpy as np
import pandas as pd
import geopandas as gpd
from shapely.geometry import box


@pytest.fixture
def sample_config():
    """Sample configuration dictionary for testing."""
    return {
        "paths": {
            "input": "data/attributes.csv",
            "out": "out",
        },
        "classification": {
            "column": "value",
            "k": 5,
            "strategy": "natural_breaks",
            "cap_k": False,
            "precision": 0,
            "unit": "",
        },
        "diagnostics": {
            "kmin": 2,
            "kmax": 9,
            "gvf_threshold": 0.8,
            "strategies": ["equal_interval", "quantiles", "natural_breaks"],
        },
    }


@pytest.fixture
def ten_values():
    """Ten distinct, unevenly spaced attribute values."""
    return [5, 12, 18, 25, 31, 47, 52, 61, 73, 88]


@pytest.fixture
def tied_values():
    """Ten values with heavy ties (four distinct values)."""
    return [1, 1, 1, 1, 2, 2, 2, 3, 3, 4]


@pytest.fixture
def clustered_values():
    """Four well-separated groups of values, shuffled."""
    values = [1, 2, 3, 10, 11, 12, 30, 31, 33, 60, 61, 64]
    rng = np.random.default_rng(7)
    return list(rng.permutation(values))


@pytest.fixture
def county_gdf():
    """GeoDataFrame of six square 'counties' with a poverty rate column."""
    rates = [4.2, 7.9, 12.5, 15.1, 22.8, 31.0]
    geometry = [box(i, 0, i + 1, 1) for i in range(len(rates))]
    return gpd.GeoDataFrame(
        {"name": [f"county_{i}" for i in range(len(rates))], "pct_poverty": rates},
        geometry=geometry,
        crs="EPSG:4326",
    )


@pytest.fixture
def county_df(county_gdf):
    """Plain DataFrame version of county_gdf (no geometry)."""
    return pd.DataFrame(county_gdf.drop(columns="geometry"))
