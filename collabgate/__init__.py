"""Multi-hop routing gateway for collaboration centers."""

__version__ = "1.0.0"
