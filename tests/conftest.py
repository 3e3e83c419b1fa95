# tests/conftest.py
import pytest


DIRECTORY_MARKERS = {
    "unit": pytest.mark.unit,
    "integration": pytest.mark.integration,
    "property": pytest.mark.property,
    "e2e": pytest.mark.e2e,
}


def pytest_collection_modifyitems(items):
    """Mark tests after the directory they live in."""
    for item in items:
        for directory, marker in DIRECTORY_MARKERS.items():
            if directory in item.path.parent.parts:
                item.add_marker(marker)
