"""Shared test fixtures for fieldfmt tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fieldfmt.config import reset_settings


@pytest.fixture(autouse=True)
def _reset_settings(monkeypatch):
    """Pin the ambient locale and zone, and reset the settings singleton."""
    monkeypatch.setenv("FIELDFMT_LOCALE", "en_US")
    monkeypatch.setenv("FIELDFMT_TIMEZONE", "UTC")
    monkeypatch.delenv("FIELDFMT_CONVERT_TO_UTC", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def sample_items_yml(tmp_path: Path) -> Path:
    """Column bindings for a small orders export."""
    content = """columns:
  created:
    item_kind: dimension
    type: date
    time_interval: MONTH
  revenue:
    item_kind: metric
    type: sum
    format: usd
    round: 2
  status:
    item_kind: dimension
    type: boolean
  share:
    item_kind: table_calculation
    format:
      type: percent
      round: 1
"""
    path = tmp_path / "items.yml"
    path.write_text(content)
    return path


@pytest.fixture
def sample_csv(tmp_path: Path) -> Path:
    """Raw query results, including a null token and a short row."""
    content = (
        "created,revenue,status,share,region\n"
        "2023-05-01,1234.5,yes,0.256,EMEA\n"
        "2023-06-15,NULL,no\n"
    )
    path = tmp_path / "orders.csv"
    path.write_text(content)
    return path
