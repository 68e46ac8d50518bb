#!/usr/bin/env python3
"""Test runner scripts for pytest.

Provides entry points for running the different test suites, e.g.
``python scripts/python/test_runner.py -k dedup``.
"""

from __future__ import annotations

import os
import sys

import pytest


# Settings resolve against config/environments/test/
os.environ.setdefault("APP_ENV", "test")


def run_unit() -> int:
    """Run unit tests only."""
    return pytest.main(["-m", "unit", "-v", *sys.argv[1:]])


def run_integration() -> int:
    """Run integration tests only."""
    return pytest.main(["-m", "integration", "-v", *sys.argv[1:]])


def run_all() -> int:
    """Run all tests."""
    return pytest.main(["-v", *sys.argv[1:]])


if __name__ == "__main__":
    sys.exit(run_unit())
