"""
Core Module - Shared infrastructure for cross-cutting concerns.

This module provides:
- Cookie mutations returned by resolvers and applied by route handlers
"""

from .cookies import CookieMutation, apply_cookie_mutations, delete_cookie, set_cookie

__all__ = [
    "CookieMutation",
    "apply_cookie_mutations",
    "delete_cookie",
    "set_cookie",
]
