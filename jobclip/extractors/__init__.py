"""
Site extractor system for jobclip.

Each extractor recognizes one career-site platform and reads job posting
fields from its pages through ordered fallback chains:
- Embedded page state (site-specific globals)
- JSON-LD structured data
- Rendered markup selectors
- Meta tags
"""

from jobclip.core.models import JobPosting, WorkArrangement
from .base import SiteExtractor
from .registry import (
    ExtractorRegistry,
    get_extractor_registry,
    find_extractor,
    extract_job_data,
    register_extractor,
)

__all__ = [
    'JobPosting',
    'WorkArrangement',
    'SiteExtractor',
    'ExtractorRegistry',
    'get_extractor_registry',
    'find_extractor',
    'extract_job_data',
    'register_extractor',
]
