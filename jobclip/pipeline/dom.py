"""
Rendered-markup reader: CSS selector lookups against the page document.
"""
import logging
from typing import List, Optional

from jobclip.core.page import PageSnapshot

logger = logging.getLogger(__name__)


def select_text(page: PageSnapshot, selector: str) -> Optional[str]:
    """Trimmed text of the first element matching `selector`."""
    element = page.soup.select_one(selector)
    if element is None:
        return None
    return element.get_text().strip()


def select_all_text(page: PageSnapshot, selector: str) -> List[str]:
    """Trimmed text of every element matching `selector`, in document order."""
    return [element.get_text().strip() for element in page.soup.select(selector)]


def select_attr(page: PageSnapshot, selector: str, attr: str) -> Optional[str]:
    element = page.soup.select_one(selector)
    if element is None:
        return None
    value = element.get(attr)
    if isinstance(value, list):
        value = " ".join(value)
    return value.strip() if isinstance(value, str) else None
