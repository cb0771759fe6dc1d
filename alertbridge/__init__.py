"""AlertBridge: publish Everbridge notifications as posts."""

__version__ = "1.0.0"
