"""Recorded run documents: YAML loading and schema validation."""

from __future__ import annotations

from runsummary.dsl.loader import load_run_file, load_run_yaml

__all__ = ["load_run_file", "load_run_yaml"]
