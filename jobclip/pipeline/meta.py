"""
Meta-tag reader: social preview and site metadata.
"""
from typing import Optional

from jobclip.core.page import PageSnapshot
from .dom import select_attr, select_text


def meta_property(page: PageSnapshot, prop: str) -> Optional[str]:
    """<meta property="og:title" content="..."> -> content."""
    return select_attr(page, f'meta[property="{prop}"]', "content") or None


def meta_name(page: PageSnapshot, name: str) -> Optional[str]:
    """<meta name="description" content="..."> -> content."""
    return select_attr(page, f'meta[name="{name}"]', "content") or None


def page_title(page: PageSnapshot) -> Optional[str]:
    return select_text(page, "title") or None
