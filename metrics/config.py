"""Configuration management for classification runners.

Provides default settings, loading of an optional JSON override file, and
schema validation of the merged result.
"""
from __future__ import annotations

import copy
import json
import pathlib

from jsonschema import validate

_DEFAULT = {
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

_STRATEGIES = ["equal_interval", "quantiles", "natural_breaks"]

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "paths": {
            "type": "object",
            "properties": {
                "input": {"type": "string"},
                "out": {"type": "string"},
            },
        },
        "classification": {
            "type": "object",
            "properties": {
                "column": {"type": "string"},
                "k": {"type": "integer", "minimum": 1},
                "strategy": {"enum": _STRATEGIES},
                "cap_k": {"type": "boolean"},
                "precision": {"type": "integer", "minimum": 0},
                "unit": {"type": "string"},
            },
        },
        "diagnostics": {
            "type": "object",
            "properties": {
                "kmin": {"type": "integer", "minimum": 1},
                "kmax": {"type": "integer", "minimum": 1},
                "gvf_threshold": {"type": "number", "minimum": 0, "maximum": 1},
                "strategies": {
                    "type": "array",
                    "items": {"enum": _STRATEGIES},
                    "minItems": 1,
                },
            },
        },
    },
}


def validate_config(cfg: dict) -> dict:
    """Validate a configuration dictionary against CONFIG_SCHEMA.

    Raises:
        jsonschema.ValidationError: If a known key has the wrong type or value.
    """
    validate(instance=cfg, schema=CONFIG_SCHEMA)
    return cfg


def load_config(path: str | None = "binning_config.json") -> dict:
    """Load classification configuration from JSON file.

    Loads user configuration file and merges it into a copy of the default
    configuration. Nested sections are updated key by key; other keys are
    replaced.

    Args:
        path: Path to configuration JSON file. If None or file doesn't exist,
            returns a copy of the default configuration.

    Returns:
        dict: Merged, validated configuration dictionary.

    Raises:
        json.JSONDecodeError: If the file is not valid JSON.
        jsonschema.ValidationError: If the merged config violates the schema.
    """
    merged = copy.deepcopy(_DEFAULT)
    p = pathlib.Path(path) if path else None
    if p and p.exists():
        with p.open("r", encoding="utf-8") as f:
            user = json.load(f)
        for k, v in user.items():
            if isinstance(v, dict) and isinstance(merged.get(k), dict):
                merged[k].update(v)
            else:
                merged[k] = v
    return validate_config(merged)
