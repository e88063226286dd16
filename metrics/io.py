"""Input/output utilities for classification runners.

Provides functions for reading JSON/JSONL files and writing JSON reports.
"""
from __future__ import annotations

import json
import os
import pathlib
import typing as T


def read_json_blocks(path: str | pathlib.Path) -> list:
    """Read JSON values from newline-delimited or pretty-printed file.

    Handles compact JSONL (one JSON value per line), pretty-printed objects
    separated by blank lines, and a single JSON document (object or array).

    Args:
        path: Path to JSON/JSONL file.

    Returns:
        list: Parsed JSON values. Returns empty list if file doesn't exist
            or contains no valid JSON.
    """
    p = pathlib.Path(path)
    if not p.exists():
        return []
    text = p.read_text(encoding="utf-8")
    if not text.strip():
        return []

    try:
        return [json.loads(text)]
    except json.JSONDecodeError:
        pass

    objs, buf, depth = [], [], 0
    for line in text.splitlines(keepends=True):
        if not line.strip() and depth == 0:
            continue
        buf.append(line)
        depth += line.count("{") - line.count("}")
        if depth == 0 and buf:
            block = "".join(buf).strip()
            try:
                objs.append(json.loads(block))
            except json.JSONDecodeError:
                for maybe in block.splitlines():
                    maybe = maybe.strip()
                    if maybe:
                        try:
                            objs.append(json.loads(maybe))
                        except json.JSONDecodeError:
                            continue
            buf = []
    return objs


def write_json(obj: T.Any, path: str | pathlib.Path) -> str:
    """Write obj as indented UTF-8 JSON, creating parent directories.

    Returns:
        str: Path written.
    """
    out_dir = os.path.dirname(str(path))
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
    return str(path)
