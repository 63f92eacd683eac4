"""Chart rendering helpers for the dashboard API.

Descriptors are laid out by the pure `analysis` package; this package adds
request-scoped caching and JSON encoding for the drawing layer.
"""
