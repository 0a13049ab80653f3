"""Golf side-wager scoring and settlement service."""

__version__ = "0.1.0"
