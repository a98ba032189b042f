"""
LinkedIn extractor.

LinkedIn exposes no usable structured data on job views, so everything
comes from the top card markup. The primary description line packs
location, arrangement and age together: "Berlin, Germany · Hybrid · 2 weeks ago".
"""
from typing import Optional

from jobclip.core.models import WorkArrangement
from jobclip.core.normalize import (
    classify_work_arrangement,
    parse_posted_date,
    resolve_relative_date,
)
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import first_valid
from jobclip.pipeline.dom import select_attr
from .base import (
    SiteExtractor,
    arrangement_from,
    description_from,
    salary_from_elements,
    selector_attempts,
)

SEGMENT_SEPARATOR = "·"

TITLE_SELECTORS = [
    '.job-details-jobs-unified-top-card__job-title',
    '.jobs-details-top-card__job-title',
    'h1[data-test-id="job-title"]',
    'h1.job-details-jobs-unified-top-card__job-title',
    '.top-card-layout__title',
]
COMPANY_SELECTORS = [
    '.job-details-jobs-unified-top-card__company-name',
    '.jobs-details-top-card__company-name',
    'a[data-test-id="job-company-name"]',
    '.jobs-details-top-card__company-info a',
    '.topcard__org-name-link',
]
PRIMARY_DESCRIPTION_SELECTORS = [
    '.job-details-jobs-unified-top-card__primary-description-without-tagline',
    '.jobs-details-top-card__primary-description',
    '.jobs-details-top-card__primary-description-without-tagline',
    '.job-details-jobs-unified-top-card__primary-description',
]
WORKPLACE_TYPE_SELECTORS = [
    '.job-details-jobs-unified-top-card__workplace-type',
    '.jobs-unified-top-card__workplace-type',
]
DESCRIPTION_SELECTORS = [
    '.jobs-description__text',
    '.jobs-description-content__text',
    '[data-test-id="job-description"]',
    '.jobs-box__html-content',
    '.show-more-less-html__markup',
]
SALARY_SELECTORS = [
    '.job-details-jobs-unified-top-card__job-insight',
    '.jobs-details-top-card__job-insight',
    '[data-test-id="job-salary"]',
    '.job-details-jobs-unified-top-card__job-insight-text-item',
    '.salary.compensation__salary',
]
DATE_SELECTORS = PRIMARY_DESCRIPTION_SELECTORS + [
    '.posted-time-ago__text',
]
TIME_SELECTORS = [
    '.job-details-jobs-unified-top-card__primary-description-container time[datetime]',
    '.jobs-unified-top-card time[datetime]',
    '.topcard__flavor-row time[datetime]',
]


def _segments(text: str):
    return [part.strip() for part in text.split(SEGMENT_SEPARATOR)]


def _location_segment(text: str) -> Optional[str]:
    segments = _segments(text)
    return segments[0] if segments else None


def _arrangement_segment(text: str) -> Optional[WorkArrangement]:
    """First segment after the location that names an arrangement."""
    for segment in _segments(text)[1:]:
        arrangement = classify_work_arrangement(segment)
        if arrangement:
            return arrangement
    return None


class LinkedInExtractor(SiteExtractor):
    name = "LinkedIn"
    url_patterns = ("linkedin.com/jobs/view/", "linkedin.com/jobs/collections/")

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(selector_attempts(page, TITLE_SELECTORS), field="title")

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(selector_attempts(page, COMPANY_SELECTORS), field="company")

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            selector_attempts(page, PRIMARY_DESCRIPTION_SELECTORS, transform=_location_segment),
            field="location"
        )

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        return arrangement_from(
            selector_attempts(page, PRIMARY_DESCRIPTION_SELECTORS, transform=_arrangement_segment)
            + selector_attempts(page, WORKPLACE_TYPE_SELECTORS, transform=classify_work_arrangement)
            + [lambda: classify_work_arrangement(location)]
        )

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from(selector_attempts(page, DESCRIPTION_SELECTORS))

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return salary_from_elements(page, SALARY_SELECTORS)

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        attempts = selector_attempts(
            page, DATE_SELECTORS, transform=lambda text: resolve_relative_date(text, page.today)
        )
        attempts += [
            (lambda selector=selector: parse_posted_date(select_attr(page, selector, "datetime")))
            for selector in TIME_SELECTORS
        ]
        return first_valid(attempts, field="posted_date")
