"""Test helper utilities."""

from .fixture_adapter import FixtureAdapter, load_fixture_boards

__all__ = ["FixtureAdapter", "load_fixture_boards"]
