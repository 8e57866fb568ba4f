"""Staking vault: deposit assets and accrue rewards on a piecewise schedule."""

__version__ = "0.1.0"
