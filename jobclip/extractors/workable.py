"""
Workable extractor.

Workable renders client-side, so the server-sent social metadata is the
most dependable source. og:title reads "Title - Location/Type - Company"
(or "Title - Company"); the markup only exists once the app has loaded.
"""
from typing import Optional

from jobclip.core.models import WorkArrangement
from jobclip.core.normalize import (
    MAX_COMPANY_LENGTH,
    MAX_TITLE_LENGTH,
    classify_work_arrangement,
    company_segment,
    date_from_text,
    find_currency_range,
    location_segment,
    title_segment,
)
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import first_valid
from jobclip.pipeline.meta import meta_property, page_title
from .base import (
    SiteExtractor,
    arrangement_from,
    description_from,
    first_comma_segment,
    jsonld_company,
    jsonld_description,
    jsonld_location,
    jsonld_posted_date,
    salary_from_elements,
    selector_attempts,
    shorter_than,
)

TITLE_SELECTORS = [
    'h1[class*="title"]',
    'h1[class*="heading"]',
    '.job-title h1',
    'h1.job-title',
    'h1',
]
COMPANY_SELECTORS = [
    '[class*="company-name"]',
    '[class*="company"]',
    '.company',
    'a[class*="company"]',
]
LOCATION_SELECTORS = [
    '[class*="location"]',
    '[class*="job-location"]',
    '.location',
    '[data-testid*="location"]',
]
DESCRIPTION_SELECTORS = [
    '[class*="description"]',
    '[class*="job-description"]',
    '.description',
    '[data-testid*="description"]',
    'section[class*="description"]',
]
SALARY_SELECTORS = [
    '[class*="salary"]',
    '[class*="compensation"]',
    '[class*="pay"]',
    '[data-testid*="salary"]',
]
DATE_SELECTORS = [
    '[class*="posted"]',
    '[class*="date"]',
    '[class*="published"]',
    '[data-testid*="date"]',
]


class WorkableExtractor(SiteExtractor):
    name = "Workable"
    url_patterns = ("apply.workable.com", "workable.com/j/")

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [
                lambda: title_segment(meta_property(page, "og:title")),
                lambda: title_segment(page_title(page)),
            ] + selector_attempts(page, TITLE_SELECTORS),
            accept=shorter_than(MAX_TITLE_LENGTH),
            field="title"
        )

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [
                lambda: company_segment(meta_property(page, "og:title")),
                jsonld_company(page),
            ] + selector_attempts(page, COMPANY_SELECTORS),
            accept=shorter_than(MAX_COMPANY_LENGTH),
            field="company"
        )

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [
                lambda: location_segment(meta_property(page, "og:title")),
                jsonld_location(page),
            ] + selector_attempts(page, LOCATION_SELECTORS, transform=first_comma_segment),
            field="location"
        )

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        return arrangement_from(
            [lambda: classify_work_arrangement(meta_property(page, "og:title"))]
            + selector_attempts(page, LOCATION_SELECTORS[:3], transform=classify_work_arrangement)
            + [lambda: classify_work_arrangement(location)]
        )

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from(
            [lambda: meta_property(page, "og:description"), jsonld_description(page)]
            + selector_attempts(page, DESCRIPTION_SELECTORS)
        )

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: salary_from_elements(page, SALARY_SELECTORS),
            lambda: find_currency_range(self.extract_description(page)),
        ], field="compensation")

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        attempts = [jsonld_posted_date(page)]
        attempts += selector_attempts(page, DATE_SELECTORS, transform=lambda text: date_from_text(text, page.today))
        return first_valid(attempts, field="posted_date")
