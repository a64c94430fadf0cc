"""Shared pytest configuration."""

pytest_plugins = ["plank.testing.fixtures"]
