"""loop-analyzer: static detection of render loops in React effects."""

__version__ = "0.1.0"
