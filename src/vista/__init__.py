"""Vista - build-time analysis for React Server Components apps."""

__version__ = "0.1.0"
