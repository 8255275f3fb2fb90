"""Shared pytest fixtures for platform, identity and storage tests."""
