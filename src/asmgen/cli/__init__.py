"""
asmgen Command-Line Interface
=============================

- **genasm**: rebuild a Rust library and dump its function assembly

Implemented as a Click-based CLI application.
"""

__all__ = ["genasm"]
