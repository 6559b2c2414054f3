"""fieldfmt: render query-result values for display."""

__version__ = "0.1.0"
