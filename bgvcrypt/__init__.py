"""Leveled BGV homomorphic encryption over Z[x]/(x^d + 1), with key generation and a demo command."""

__version__ = "0.1.0"
__all__ = ["ring", "sampling", "scheme", "keys", "cli"]