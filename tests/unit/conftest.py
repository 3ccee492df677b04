"""Tests under tests/unit carry the ``unit`` marker without decorating each one."""

import pytest


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "unit" in item.path.parts and item.get_closest_marker("unit") is None:
            item.add_marker(pytest.mark.unit)
