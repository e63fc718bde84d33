"""Core services for longpath: configuration, paths, theming and filters."""
