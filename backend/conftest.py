"""Pytest configuration exposing the backend package and shared fixtures."""

from __future__ import annotations

import json
import pathlib
import sys
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from loguru import logger

BACKEND_ROOT = pathlib.Path(__file__).resolve().parent

if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Collect loguru records emitted while the test runs."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record), level="DEBUG"
    )
    try:
        yield records
    finally:
        logger.remove(handler_id)


@pytest.fixture
def write_layer(
    tmp_path: pathlib.Path,
) -> Callable[[str, Any], pathlib.Path]:
    """Write a layer file into ``tmp_path / "data"``.

    Dict payloads are serialized as JSON; strings are written verbatim.
    """
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)

    def _write(filename: str, payload: Any) -> pathlib.Path:
        path = data_dir / filename
        text = payload if isinstance(payload, str) else json.dumps(payload)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
