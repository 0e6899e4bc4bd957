"""Core infrastructure: paths, settings, cache storage and theming."""
