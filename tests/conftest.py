# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from csvtag.logging.init import reset_logging

EXAMPLE_CSV = "foo,bar,baz\n1,2,hello\n3,2,world\n"

RECORD_MODULE = '''
from __future__ import annotations
from dataclasses import dataclass
from csvtag import csv_field


@dataclass
class Example:
    Bar: str = csv_field("bar")
    Baz: str = csv_field("baz")
    Foo: str = csv_field("foo")


@dataclass
class WithCount:
    name: str = csv_field("name")
    count: int = csv_field("count", default=0)
'''


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def record_module(temp_workdir: Path, monkeypatch) -> str:
    """Write an importable module with csv-tagged record types; returns its name."""
    (temp_workdir / "csvtag_test_records.py").write_text(RECORD_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(temp_workdir))
    return "csvtag_test_records"


@pytest.fixture()
def example_csv(temp_workdir: Path) -> Path:
    f = temp_workdir / "data" / "example.csv"
    f.write_text(EXAMPLE_CSV, encoding="utf-8")
    return f


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source: ./data/example.csv
record_type: csvtag_test_records:Example
delimiter: ","
encoding: utf-8
output: ./out/example.jsonl
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str, record_module: str) -> Path:
    cfg = temp_workdir / "config" / "convert.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
