"""
Lever extractor.

Lever posting pages carry a JSON-LD JobPosting (sometimes wrapped in an
array), so structured data leads every chain. Social metadata and the
posting markup fill the gaps.
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
    is_telecommute,
    jsonld_company,
    jsonld_compensation,
    jsonld_description,
    jsonld_location,
    jsonld_posted_date,
    jsonld_title,
    salary_from_elements,
    selector_attempts,
    shorter_than,
)

TITLE_SELECTORS = [
    'h1[class*="posting-title"]',
    'h1[class*="job-title"]',
    '.posting-header h1',
    '.posting-header-title h1',
    'h1',
]
COMPANY_SELECTORS = [
    '[class*="posting-header"] [class*="company"]',
    '[class*="company-name"]',
    '.posting-header a[class*="company"]',
    'a[class*="company"]',
]
LOCATION_SELECTORS = [
    '[class*="posting-categories"] [class*="location"]',
    '[class*="posting-header"] [class*="location"]',
    '[class*="job-location"]',
    '[class*="location"]',
    '.posting-header .posting-category',
]
ARRANGEMENT_SELECTORS = [
    '[class*="posting-categories"]',
    '[class*="posting-header"] [class*="location"]',
    '[class*="job-location"]',
    '[class*="location"]',
]
DESCRIPTION_SELECTORS = [
    '[class*="posting-description"]',
    '[class*="section"] [class*="description"]',
    '[class*="job-description"]',
    '.posting-content',
    'section[class*="content"]',
    '[class*="description"]',
]
SALARY_SELECTORS = [
    '[class*="salary"]',
    '[class*="compensation"]',
    '[class*="pay"]',
    '[class*="posting-categories"] [class*="salary"]',
    '[data-testid*="salary"]',
]
DATE_SELECTORS = [
    '[class*="posted"]',
    '[class*="date"]',
    '[class*="published"]',
    '[data-testid*="date"]',
]


class LeverExtractor(SiteExtractor):
    name = "Lever"
    url_patterns = ("jobs.lever.co", ".lever.co/", "lever.co/")

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [
                jsonld_title(page),
                lambda: title_segment(meta_property(page, "og:title")),
                lambda: title_segment(page_title(page)),
            ] + selector_attempts(page, TITLE_SELECTORS),
            accept=shorter_than(MAX_TITLE_LENGTH),
            field="title"
        )

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [
                jsonld_company(page),
                lambda: meta_property(page, "og:site_name"),
                lambda: company_segment(meta_property(page, "og:title")),
            ] + selector_attempts(page, COMPANY_SELECTORS),
            accept=shorter_than(MAX_COMPANY_LENGTH),
            field="company"
        )

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [jsonld_location(page)]
            + selector_attempts(page, LOCATION_SELECTORS, transform=first_comma_segment),
            field="location"
        )

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        attempts = [lambda: is_telecommute(page)]
        attempts += selector_attempts(page, ARRANGEMENT_SELECTORS, transform=classify_work_arrangement)
        attempts.append(lambda: classify_work_arrangement(meta_property(page, "og:title")))
        attempts.append(lambda: classify_work_arrangement(location))
        return arrangement_from(attempts)

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from(
            [jsonld_description(page), lambda: meta_property(page, "og:description")]
            + selector_attempts(page, DESCRIPTION_SELECTORS)
        )

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            jsonld_compensation(page),
            lambda: salary_from_elements(page, SALARY_SELECTORS),
            lambda: find_currency_range(self.extract_description(page)),
        ], field="compensation")

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        attempts = [jsonld_posted_date(page)]
        attempts += selector_attempts(page, DATE_SELECTORS, transform=lambda text: date_from_text(text, page.today))
        return first_valid(attempts, field="posted_date")
