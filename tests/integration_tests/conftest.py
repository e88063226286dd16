"""Pytest fixtures for end-to-end runner tests."""

import pytest
import geopandas as gpd
from shapely.geometry import box


RATES = [4.2, 7.9, 12.5, 15.1, 22.8, 31.0, 5.5, 9.3, 18.4, 27.6, 11.0, 14.2]


@pytest.fixture
def rates_csv(tmp_path):
    """CSV table with a county id and a poverty rate column."""
    path = tmp_path / "rates.csv"
    rows = ["geoid,pct_poverty"] + [f"51{i:03d},{r}" for i, r in enumerate(RATES)]
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def rates_geojson(tmp_path):
    """GeoJSON file with one square polygon per county."""
    gdf = gpd.GeoDataFrame(
        {"geoid": [f"51{i:03d}" for i in range(len(RATES))], "pct_poverty": RATES},
        geometry=[box(i, 0, i + 1, 1) for i in range(len(RATES))],
        crs="EPSG:4326",
    )
    path = tmp_path / "counties.geojson"
    gdf.to_file(path, driver="GeoJSON")
    return path


@pytest.fixture
def no_config(tmp_path):
    """Path to a config file that does not exist, so defaults apply."""
    return str(tmp_path / "missing_config.json")
