"""Utility functions for classification operations.

Provides helper functions for sample validation, class count resolution,
parameter hashing, and loading/writing attribute tables.
"""

import json
import hashlib
import os
import warnings
from typing import Tuple, Set, Dict, Any, Optional, Sequence
import numpy as np
import pandas as pd
import geopandas as gpd

from binning.errors import InvalidArgument, ClassCountWarning


def validate_sample(values: Any) -> np.ndarray:
    """Validate a sample and return it as a 1-D float array.

    Args:
        values: Sequence of numbers (list, tuple, ndarray, or pandas Series).

    Returns:
        1-D float64 array in the original order.

    Raises:
        InvalidArgument: If the sample is empty, not one-dimensional, not
            numeric, or contains NaN/Infinity.
    """
    if isinstance(values, pd.Series):
        values = values.to_numpy()
    try:
        arr = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidArgument(f"Sample must contain only numbers: {e}")

    if arr.ndim != 1:
        raise InvalidArgument(f"Sample must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidArgument("Sample is empty")

    bad = ~np.isfinite(arr)
    if bad.any():
        first = int(np.flatnonzero(bad)[0])
        raise InvalidArgument(
            f"Sample contains {int(bad.sum())} non-finite value(s) "
            f"(first at position {first}: {arr[first]})"
        )
    return arr


def distinct_count(values: np.ndarray) -> int:
    """Return the number of distinct values in a validated sample."""
    return int(np.unique(values).size)


def resolve_k(k: Any, n_distinct: int, cap_k: bool = False) -> int:
    """Check a requested class count against the sample.

    Args:
        k: Requested number of classes.
        n_distinct: Number of distinct values in the sample.
        cap_k: Lower k to n_distinct (with a ClassCountWarning) instead of
            raising when it is too large.

    Returns:
        Class count to use.

    Raises:
        InvalidArgument: If k is not a positive integer, or exceeds the
            distinct count while cap_k is False.
    """
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise InvalidArgument(f"Class count must be an integer, got {k!r}")
    k = int(k)
    if k <= 0:
        raise InvalidArgument(f"Class count must be positive, got {k}")

    if k > n_distinct:
        if not cap_k:
            raise InvalidArgument(
                f"Cannot form {k} classes from {n_distinct} distinct value(s)"
            )
        warnings.warn(
            f"Requested {k} classes but sample has only {n_distinct} distinct "
            f"value(s); using k={n_distinct}",
            ClassCountWarning,
            stacklevel=3,
        )
        k = n_distinct
    return k


def stable_sort(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Sort values, keeping input order among ties.

    Returns:
        Tuple of (sorted values, order) where sorted values == values[order].
    """
    order = np.argsort(values, kind="stable")
    return values[order], order


HYPERPARAM_KEYS: Dict[str, Set[str]] = {
    "equal_interval": {"k", "cap_k"},
    "quantiles": {"k", "cap_k"},
    "natural_breaks": {"k", "cap_k"},
    "user_defined": {"bins"},
}


def canonical_params_json(method: str, params: Dict[str, Any], include: Set[str]) -> str:
    """Create canonical JSON representation of hyperparameters.

    Args:
        method: Classification method name (e.g., "quantiles").
        params: Dictionary of all parameters.
        include: Set of parameter keys to include in hash.

    Returns:
        Canonical JSON string (sorted keys, compact separators).

    Note:
        Always includes __method__ so equal parameters of different methods
        hash differently.
    """
    filtered = {k: params[k] for k in sorted(params.keys()) if k in include}
    filtered["__method__"] = method
    return json.dumps(filtered, sort_keys=True, separators=(",", ":"))


def param_hash_from_json(params_json: str) -> str:
    """Generate deterministic SHA-1 hash from parameter JSON.

    Args:
        params_json: Canonical JSON string of parameters.

    Returns:
        10-character hex digest of SHA-1 hash.
    """
    return hashlib.sha1(params_json.encode()).hexdigest()[:10]


GEO_EXTENSIONS = (".geojson", ".shp", ".gpkg")


def load_values_df(path: str, column: str, dropna: bool = True) -> pd.DataFrame:
    """Load an attribute table from CSV/JSON/JSONL or a vector file.

    Vector files (.geojson, .shp, .gpkg) are read with geopandas and come
    back as a GeoDataFrame so the classes can be joined to their geometries.

    Args:
        path: Path to input file.
        column: Name of the numeric column to classify.
        dropna: Drop rows whose value is missing or non-numeric (with a
            warning). If False such rows are kept and classification of the
            column will fail.

    Returns:
        DataFrame (or GeoDataFrame) with `column` converted to float.

    Raises:
        FileNotFoundError: If input file doesn't exist.
        ValueError: If the column is missing or file format is unsupported.
    """
    from metrics.io import read_json_blocks

    if not os.path.exists(path):
        raise FileNotFoundError(f"Input file not found: {path}")

    ext = os.path.splitext(path)[1].lower()
    if ext in GEO_EXTENSIONS:
        df = gpd.read_file(path)
    elif ext in (".jsonl", ".json"):
        records = read_json_blocks(path)
        if len(records) == 1 and isinstance(records[0], list):
            records = records[0]
        if not records:
            raise ValueError(f"No valid JSON records found in {path}")
        df = pd.DataFrame(records)
    elif ext == ".csv":
        df = pd.read_csv(path)
    else:
        raise ValueError(
            f"Unsupported file format: {ext} "
            f"(use .csv, .json, .jsonl, .geojson, .shp or .gpkg)"
        )

    if column not in df.columns:
        raise ValueError(
            f"Missing required column: {column!r}. "
            f"Available columns: {sorted(str(c) for c in df.columns)}"
        )

    df = df.copy()
    df[column] = pd.to_numeric(df[column], errors="coerce")

    if dropna:
        missing = ~np.isfinite(df[column].to_numpy(dtype=float))
        if missing.any():
            warnings.warn(
                f"Dropping {int(missing.sum())} row(s) with missing or "
                f"non-numeric {column!r} values from {path}"
            )
            df = df[~missing]

    return df.reset_index(drop=True)


def classify_frame(
    df: pd.DataFrame,
    column: str,
    classifier,
    precision: int = 0,
    unit: str = "",
    class_col: str = "class",
    label_col: str = "label",
) -> pd.DataFrame:
    """Classify one column of a table and attach class index and label.

    Args:
        df: DataFrame or GeoDataFrame holding the attribute column.
        column: Name of the numeric column to classify.
        classifier: Unfitted or fitted Classifier; it is (re)fitted on the column.
        precision: Decimal digits for the labels.
        unit: Unit suffix for the labels (e.g. "%").
        class_col: Name of the output class index column.
        label_col: Name of the output label column.

    Returns:
        Copy of df with the two extra columns; GeoDataFrames stay GeoDataFrames.
    """
    classifier.fit(df[column])
    legend = classifier.legend(precision=precision, unit=unit)

    out = df.copy()
    out[class_col] = classifier.labels()
    out[label_col] = [legend[i] for i in out[class_col]]
    return out


def legend_records(classifier, precision: int = 0, unit: str = "") -> list:
    """Build legend rows (class, bounds, label, count) for a fitted classifier.

    Counts come from the fitted labels. For quantile classes these are
    rank-based, so a count can include values equal to the class's upper
    bound when a run of ties straddles the boundary.
    """
    bins = classifier.bins()
    labels = classifier.legend(precision=precision, unit=unit)
    counts = classifier.counts()
    return [
        {
            "class": i,
            "lower": bins[i],
            "upper": bins[i + 1],
            "label": labels[i],
            "count": int(counts[i]),
        }
        for i in range(len(labels))
    ]


def write_classes(df: pd.DataFrame, out_path: str) -> str:
    """Write a classified table to disk.

    GeoDataFrames are written as GeoJSON; plain DataFrames as a JSON array
    of objects.

    Args:
        df: Output of classify_frame().
        out_path: Output file path. For GeoDataFrames the extension is
            replaced with .geojson.

    Returns:
        Path actually written.
    """
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    if isinstance(df, gpd.GeoDataFrame):
        out_path = os.path.splitext(out_path)[0] + ".geojson"
        df.to_file(out_path, driver="GeoJSON")
        return out_path

    records = json.loads(df.to_json(orient="records"))
    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False, indent=2)
    return out_path
