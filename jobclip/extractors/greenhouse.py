"""
Greenhouse extractor.

Greenhouse boards are Remix apps: the job post loader result sits in
`window.__remixContext.state.loaderData` under the route whose id contains
"job_post_id". Title, location, description and pay ranges are read from
the rendered markup.
"""
import re
from typing import Optional

from jobclip.core.models import WorkArrangement
from jobclip.core.normalize import (
    classify_work_arrangement,
    date_from_text,
    has_currency_amount,
    parse_posted_date,
    split_segments,
)
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import first_valid
from jobclip.pipeline.dom import select_all_text, select_attr
from jobclip.pipeline.meta import meta_name, meta_property
from jobclip.pipeline.state import find_route_data
from .base import (
    SiteExtractor,
    arrangement_from,
    description_from,
    jsonld_company,
    jsonld_compensation,
    jsonld_description,
    jsonld_location,
    jsonld_posted_date,
    jsonld_title,
    selector_attempts,
)

REMIX_CONTEXT = "__remixContext"
JOB_POST_ROUTE = "job_post_id"

TITLE_SELECTORS = [
    '.job__title h1',
    'h1.section-header',
    'h1.section-header--large',
    '.job__header h1',
    'h1',
]
LOCATION_SELECTORS = [
    '.job__location div',
    '.job__location',
    '.job__header .job__location',
]
DESCRIPTION_SELECTORS = [
    '.job__description',
    '.job__description .body',
    '[class*="job-description"]',
]
PAY_RANGE_SELECTORS = [
    '.job__pay-ranges .body',
    '.pay-range .body',
    '.pay-range p.body',
]
DATE_SELECTORS = [
    '[class*="posted"]',
    '[class*="date"]',
]

LOGO_ALT = re.compile(r'(.+?)\s+Logo', re.IGNORECASE)


def _job_post(page: PageSnapshot, key: str):
    return find_route_data(page, REMIX_CONTEXT, JOB_POST_ROUTE, "jobPost", key)


def _first_dash_segment(text: str) -> Optional[str]:
    # "Remote - Canada" -> "Remote"
    segments = split_segments(text, "-")
    return segments[0] if segments else None


class GreenhouseExtractor(SiteExtractor):
    name = "Greenhouse"
    url_patterns = ("boards.greenhouse.io", "job-boards.greenhouse.io", "greenhouse.io/jobs")

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            selector_attempts(page, TITLE_SELECTORS) + [jsonld_title(page)],
            field="title"
        )

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        def logo_alt():
            alt = select_attr(page, '.logo img', 'alt')
            match = LOGO_ALT.match(alt or "")
            return match.group(1) if match else None

        return first_valid([
            lambda: _job_post(page, "company_name"),
            jsonld_company(page),
            lambda: meta_property(page, "og:site_name"),
            lambda: meta_name(page, "application-name"),
            logo_alt,
        ], field="company")

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            selector_attempts(page, LOCATION_SELECTORS, transform=_first_dash_segment)
            + [jsonld_location(page)],
            field="location"
        )

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        # The full location element text ("Remote - Canada"), not the trimmed location
        attempts = selector_attempts(page, LOCATION_SELECTORS, transform=classify_work_arrangement)
        attempts.append(lambda: classify_work_arrangement(location))
        return arrangement_from(attempts)

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from(
            selector_attempts(page, DESCRIPTION_SELECTORS) + [jsonld_description(page)]
        )

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        def pay_range(selector: str):
            for text in select_all_text(page, selector):
                if has_currency_amount(text):
                    return text
            return None

        attempts = [(lambda selector=selector: pay_range(selector)) for selector in PAY_RANGE_SELECTORS]
        attempts.append(jsonld_compensation(page))
        return first_valid(attempts, field="compensation")

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        attempts = [
            lambda: parse_posted_date(_job_post(page, "published_at")),
            jsonld_posted_date(page),
        ]
        attempts += selector_attempts(page, DATE_SELECTORS, transform=lambda text: date_from_text(text, page.today))
        return first_valid(attempts, field="posted_date")
