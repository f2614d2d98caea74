"""
Shared utility functions for localesync.

This module contains common utilities used across the codebase.
"""

from __future__ import annotations

import html
import re

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_tags(value: str) -> str:
    """
    Remove markup from a string.
    
    Entities are decoded afterwards so that "<p>&nbsp;</p>" reduces to
    whitespace only.
    """
    return html.unescape(_TAG_PATTERN.sub("", value))
