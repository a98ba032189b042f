"""
jobclip: job posting extraction for career-site pages.

Turns a page snapshot (URL, HTML, embedded globals) from a supported
career site into a JobPosting with best-effort fields.
"""

__version__ = "1.0.0"
