"""GoodBooks - personal book tracking library."""

__version__ = "0.1.0"
