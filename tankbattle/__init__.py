"""Turn-based tank battle simulator on a wrapping board, with pluggable players, tank algorithms and game managers."""

__version__ = "0.1.0"