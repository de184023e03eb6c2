"""Bundled attribute grammar tables."""
