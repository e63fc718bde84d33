"""Bundled data files for longpath."""
