"""Unit test configuration.

Every test under ``tests/unit`` declares ``pytestmark = pytest.mark.unit``.
"""
