#!/usr/bin/env python3
"""Classify an attribute column for a choropleth map.

Loads a table (CSV, JSON/JSONL, GeoJSON, shapefile or GeoPackage),
computes class breakpoints for one numeric column, and writes the classified
rows plus a legend.

Usage:
    # Run with defaults from binning_config.json (or built-in defaults)
    python run_classification.py

    # Or with custom arguments
    python run_classification.py --input counties.geojson --column pct_poverty \
        --k 5 --strategy quantiles --unit "%"
"""

import argparse
import os
import sys
import warnings

from binning import (
    make_classifier,
    load_values_df,
    classify_frame,
    legend_records,
    write_classes,
)
from metrics.config import load_config
from metrics.io import write_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify a numeric column into choropleth classes"
    )
    parser.add_argument(
        "--config",
        default="binning_config.json",
        help="Path to config file (default: binning_config.json)"
    )
    parser.add_argument("--input", default=None, help="Input table (default: paths.input)")
    parser.add_argument("--out", default=None, help="Output directory (default: paths.out)")
    parser.add_argument("--column", default=None, help="Column to classify (default: classification.column)")
    parser.add_argument("--k", type=int, default=None, help="Number of classes (default: classification.k)")
    parser.add_argument(
        "--strategy",
        choices=["equal_interval", "quantiles", "natural_breaks", "user_defined"],
        default=None,
        help="Classification strategy (default: classification.strategy)"
    )
    parser.add_argument(
        "--bins",
        type=float,
        nargs="+",
        default=None,
        help="Interior thresholds for --strategy user_defined"
    )
    parser.add_argument("--precision", type=int, default=None, help="Label decimal digits")
    parser.add_argument("--unit", default=None, help="Label unit suffix, e.g. %%")
    parser.add_argument(
        "--cap-k",
        action="store_true",
        default=None,
        help="Lower k to the number of distinct values instead of failing"
    )
    return parser


def main(argv=None) -> int:
    """Classify one column and write classes and legend.

    Returns:
        int: Exit code (0 on success, 1 on load or classification error).
    """
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except Exception as e:
        print(f"[ERROR] Failed to load config {args.config}: {e}")
        return 1

    opts = cfg["classification"]
    input_path = args.input or cfg["paths"]["input"]
    out_dir = args.out or cfg["paths"]["out"]
    column = args.column or opts["column"]
    k = args.k if args.k is not None else opts["k"]
    strategy = args.strategy or opts["strategy"]
    precision = args.precision if args.precision is not None else opts["precision"]
    unit = args.unit if args.unit is not None else opts["unit"]
    cap_k = args.cap_k if args.cap_k is not None else opts["cap_k"]

    print(f"[INFO] Loading {column!r} from {input_path}...")
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            df = load_values_df(input_path, column)
        for w in caught:
            print(f"[WARN] {w.message}")
        print(f"[INFO] Loaded {len(df)} rows")
    except Exception as e:
        print(f"[ERROR] Failed to load data: {e}")
        return 1

    if strategy == "user_defined" and not args.bins:
        print("[ERROR] --bins is required with --strategy user_defined")
        return 1

    try:
        if strategy == "user_defined":
            classifier = make_classifier(strategy, bins=args.bins)
        else:
            classifier = make_classifier(strategy, k=k, cap_k=cap_k)
        print(f"[INFO] Classifying with {strategy}, k={classifier.k}...")
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            classified = classify_frame(df, column, classifier, precision=precision, unit=unit)
            legend = legend_records(classifier, precision=precision, unit=unit)
        for message in dict.fromkeys(str(w.message) for w in caught):
            print(f"[WARN] {message}")
    except ValueError as e:
        print(f"[ERROR] Classification failed: {e}")
        return 1

    os.makedirs(out_dir, exist_ok=True)
    classes_path = write_classes(classified, os.path.join(out_dir, "classes.json"))
    print(f"  Saved: {classes_path}")

    info = classifier.info()
    legend_path = write_json(
        {
            "column": column,
            "method": info["method"],
            "params_hash": info["params_hash"],
            "k": info["k"],
            "gvf": info["gvf"],
            "classes": legend,
        },
        os.path.join(out_dir, "legend.json"),
    )
    print(f"  Saved: {legend_path}")

    print(f"[INFO] Classes (GVF={info['gvf']:.4f}):")
    for row in legend:
        print(f"  {row['class']}: {row['label']} ({row['count']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
