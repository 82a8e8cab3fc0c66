"""tiresolve — locate and load compiled terminfo entries."""

__version__ = "0.1.0"
