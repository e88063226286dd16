#!/usr/bin/env python3
"""Class-count diagnostics runner.

Sweeps k from kmin to kmax for each strategy, computes goodness of variance
fit (GVF) and tabular accuracy (TAI), plots the GVF curves and a histogram
with the selected breaks, and writes the sweep to JSON.

Usage:
    # Run with defaults from binning_config.json (or built-in defaults)
    python run_breaks_diagnostics.py

    # Or with custom arguments
    python run_breaks_diagnostics.py --input data.csv --column rate --kmin 3 --kmax 8
"""

import argparse
import os
import sys
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from binning import load_values_df
from metrics.config import load_config
from metrics.diagnostics import calc_diagnostics, select_k
from metrics.io import write_json


def plot_gvf_curve(ks: List[int], gvfs: List[float], strategy: str, threshold: float, out_path: str) -> str:
    """Plot GVF against k with the target threshold."""
    plt.figure(figsize=(10, 6))
    plt.plot(ks, gvfs, marker="o", linestyle="-", linewidth=2, markersize=8)
    plt.axhline(threshold, color="grey", linestyle="--", linewidth=1)
    plt.xlabel("Number of Classes (k)", fontsize=12)
    plt.ylabel("Goodness of Variance Fit", fontsize=12)
    plt.title(f"GVF by Class Count ({strategy})", fontsize=14, fontweight="bold")
    plt.ylim(0, 1.05)
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close()
    return out_path


def plot_breaks_histogram(values: np.ndarray, bins: List[float], strategy: str, out_path: str) -> str:
    """Plot the sample histogram with class breakpoints overlaid."""
    plt.figure(figsize=(10, 6))
    plt.hist(values, bins=min(50, max(10, len(values) // 5)), color="steelblue", alpha=0.7)
    for b in bins[1:-1]:
        plt.axvline(b, color="darkred", linestyle="-", linewidth=1.5)
    plt.xlabel("Value", fontsize=12)
    plt.ylabel("Count", fontsize=12)
    plt.title(f"{strategy} breaks (k={len(bins) - 1})", fontsize=14, fontweight="bold")
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close()
    return out_path


def main(argv=None) -> int:
    """Run the k-sweep and export plots and JSON.

    Returns:
        int: Exit code (0 on success, 1 on load or validation error).
    """
    parser = argparse.ArgumentParser(
        description="Choropleth class-count diagnostics with k-sweep"
    )
    parser.add_argument("--config", default="binning_config.json", help="Path to config file (default: binning_config.json)")
    parser.add_argument("--input", default=None, help="Input table (default: paths.input)")
    parser.add_argument("--out", default=None, help="Output directory (default: paths.out)")
    parser.add_argument("--column", default=None, help="Column to classify (default: classification.column)")
    parser.add_argument("--kmin", type=int, default=None, help="Minimum k (default: diagnostics.kmin)")
    parser.add_argument("--kmax", type=int, default=None, help="Maximum k (default: diagnostics.kmax)")
    parser.add_argument(
        "--strategy",
        action="append",
        choices=["equal_interval", "quantiles", "natural_breaks"],
        default=None,
        help="Strategy to sweep; repeat for several (default: diagnostics.strategies)"
    )
    parser.add_argument("--threshold", type=float, default=None, help="Target GVF (default: diagnostics.gvf_threshold)")
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except Exception as e:
        print(f"[ERROR] Failed to load config {args.config}: {e}")
        return 1

    diag = cfg["diagnostics"]
    input_path = args.input or cfg["paths"]["input"]
    out_dir = args.out or cfg["paths"]["out"]
    column = args.column or cfg["classification"]["column"]
    kmin = args.kmin if args.kmin is not None else diag["kmin"]
    kmax = args.kmax if args.kmax is not None else diag["kmax"]
    strategies = args.strategy or diag["strategies"]
    threshold = args.threshold if args.threshold is not None else diag["gvf_threshold"]

    if kmin < 1:
        print("[ERROR] kmin must be >= 1")
        return 1
    if kmax < kmin:
        print("[ERROR] kmax must be >= kmin")
        return 1

    os.makedirs(os.path.join(out_dir, "plots"), exist_ok=True)

    print(f"[INFO] Loading {column!r} from {input_path}...")
    try:
        df = load_values_df(input_path, column)
        values = df[column].to_numpy(dtype=float)
        print(f"[INFO] Loaded {len(values)} values")
    except Exception as e:
        print(f"[ERROR] Failed to load data: {e}")
        return 1

    print(f"[INFO] Performing k-sweep from k={kmin} to k={kmax}...")
    try:
        result = calc_diagnostics(values, kmin=kmin, kmax=kmax, strategies=strategies)
    except ValueError as e:
        print(f"[ERROR] Diagnostics failed: {e}")
        return 1
    for w in result["warnings"]:
        print(f"[WARN] {w}")

    result["selected"] = {}
    for strategy, rows in result["diagnostics"].items():
        if not rows:
            print(f"[WARN] No class counts evaluated for {strategy}")
            continue
        ks = [r["k"] for r in rows]
        gvfs = [r["gvf"] for r in rows]
        for r in rows:
            print(f"  {strategy} k={r['k']}: gvf={r['gvf']:.4f}, tai={r['tai']:.4f}")

        best_k = select_k(ks, gvfs, threshold)
        best = rows[ks.index(best_k)]
        result["selected"][strategy] = {"k": best_k, "gvf": best["gvf"], "bins": best["bins"]}
        print(f"  Selected {strategy} k: {best_k} (gvf={best['gvf']:.4f})")

        gvf_path = plot_gvf_curve(
            ks, gvfs, strategy, threshold,
            os.path.join(out_dir, "plots", f"gvf_{strategy}.png"),
        )
        print(f"  Saved: {gvf_path}")
        hist_path = plot_breaks_histogram(
            values, best["bins"], strategy,
            os.path.join(out_dir, "plots", f"breaks_{strategy}.png"),
        )
        print(f"  Saved: {hist_path}")

    json_path = write_json(result, os.path.join(out_dir, "diagnostics.json"))
    print(f"[INFO] Saved: {json_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
