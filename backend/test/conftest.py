"""
Shared fixtures for analyzer tests.
"""
from typing import Callable

import pytest

from diffpatterns.utils.diff.models import ChangeUnit
from diffpatterns.utils.diff.parse_unified import extract_change_units


@pytest.fixture
def make_unit() -> Callable[..., ChangeUnit]:
    """Fixture building one ChangeUnit from a path, a kind and hunk text."""
    def factory(path: str, kind: str, text: str, markup_aware: bool = False) -> ChangeUnit:
        units = extract_change_units(path, kind, text, markup_aware=markup_aware)
        assert len(units) == 1
        return units[0]

    return factory
