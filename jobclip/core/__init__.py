"""
Core building blocks: page snapshots, output models, normalizers.
"""

from .models import JobPosting, WorkArrangement
from .page import PageSnapshot

__all__ = [
    'JobPosting',
    'WorkArrangement',
    'PageSnapshot',
]
