"""Foldhash: a fast, portable, non-cryptographic 64-bit hash in fast and quality variants."""

__version__ = "0.2.1"
__all__ = ["fast", "quality", "seed", "mixing"]