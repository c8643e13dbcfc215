"""tiqdb — namespaced tag association store."""

__version__ = "0.3.0"
