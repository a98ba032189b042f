"""
Source readers for the extraction pipeline.

Each reader returns an optional raw value from one kind of source:
embedded page state, JSON-LD structured data, rendered markup, or meta
tags. Site extractors compose them into per-field fallback chains with
`first_valid`.
"""

from .chain import first_valid, dig

__all__ = [
    'first_valid',
    'dig',
]
