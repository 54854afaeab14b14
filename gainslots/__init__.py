"""gainslots: tax lot reconstruction from realized gains/losses statements."""

__version__ = "0.1.0"
