"""
localesync - locale variant synchronization with automatic translation.

A node exists in one canonical locale. Its variants in other locales are
created, moved, updated and removed to mirror it, and their text
properties are machine-translated instead of copied.
"""

__version__ = "0.1.0"
