# Shared pytest fixtures
from __future__ import annotations

import struct
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from tracker_import.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        for var in ("TRACKER_API_BASE_URL", "TRACKER_API_TOKEN", "TRACKER_API_TIMEOUT", "DISABLE_STORE"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """store:
  base_url: http://tracker.test/api
  token: secret-token
  timeout_seconds: 5
upload:
  delimiter: ","
endpoints:
  movie: /movies
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def make_csv(temp_workdir: Path) -> Callable[[str, str], Path]:
    def _make(name: str, text: str) -> Path:
        p = temp_workdir / "data" / name
        p.write_text(text, encoding="utf-8")
        return p
    return _make


@pytest.fixture()
def make_excel(temp_workdir: Path) -> Callable[[str, dict[str, list[list[object]]]], Path]:
    """Write a workbook; each sheet is a list of rows, the first row being the header."""
    def _make(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        p = temp_workdir / "data" / name
        with pd.ExcelWriter(p, engine="openpyxl") as writer:
            for sheet, rows in sheets.items():
                df = pd.DataFrame(rows[1:], columns=rows[0]) if rows else pd.DataFrame()
                df.to_excel(writer, sheet_name=sheet, index=False)
        return p
    return _make


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()


def _biff_record(opcode: int, payload: bytes = b"") -> bytes:
    return struct.pack("<HH", opcode, len(payload)) + payload


@pytest.fixture()
def make_xls(temp_workdir: Path) -> Callable[[str, list[list[object]]], Path]:
    """Write a single-sheet legacy .xls (BIFF2 worksheet stream); first row is the header."""
    def _make(name: str, rows: list[list[object]]) -> Path:
        attr = b"\x00\x00\x00"
        out = _biff_record(0x0009, struct.pack("<HH", 0x0007, 0x0010))  # BOF, worksheet
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                if isinstance(value, str):
                    raw = value.encode("latin-1")
                    out += _biff_record(0x0004, struct.pack("<HH", r, c) + attr + bytes([len(raw)]) + raw)
                else:
                    out += _biff_record(0x0003, struct.pack("<HH", r, c) + attr + struct.pack("<d", value))
        out += _biff_record(0x000A)  # EOF
        p = temp_workdir / "data" / name
        p.write_bytes(out)
        return p
    return _make
