"""
AshbyHQ extractor.

Ashby job boards render from `window.__appData`, which carries the posting
and organization with clean field names. JSON-LD and the page title
("Job Title @ Company") back it up.
"""
from typing import Optional

from jobclip.core.models import WorkArrangement
from jobclip.core.normalize import (
    classify_work_arrangement,
    company_segment,
    html_to_text,
    parse_posted_date,
    title_segment,
)
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import first_valid
from jobclip.pipeline.jsonld import read_field
from jobclip.pipeline.meta import meta_name, meta_property, page_title
from jobclip.pipeline.state import read_state
from .base import (
    SiteExtractor,
    arrangement_from,
    description_from,
    is_telecommute,
    jsonld_company,
    jsonld_compensation,
    jsonld_description,
    jsonld_location,
    jsonld_posted_date,
    jsonld_title,
)

APP_DATA = "__appData"
TITLE_SEPARATOR = "@"

WORKPLACE_TYPES = {
    "remote": WorkArrangement.REMOTE,
    "hybrid": WorkArrangement.HYBRID,
    "onsite": WorkArrangement.ON_SITE,
    "on-site": WorkArrangement.ON_SITE,
}


def _workplace_type(value) -> Optional[WorkArrangement]:
    if not isinstance(value, str):
        return None
    return WORKPLACE_TYPES.get(value.strip().lower()) or classify_work_arrangement(value)


class AshbyExtractor(SiteExtractor):
    name = "AshbyHQ"
    url_patterns = ("jobs.ashbyhq.com", "ashbyhq.com")

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: read_state(page, APP_DATA, "posting", "title"),
            jsonld_title(page),
            lambda: title_segment(page_title(page), TITLE_SEPARATOR),
            lambda: meta_property(page, "og:title"),
        ], field="title")

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: read_state(page, APP_DATA, "organization", "name"),
            jsonld_company(page),
            lambda: company_segment(page_title(page), TITLE_SEPARATOR),
        ], field="company")

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: read_state(page, APP_DATA, "posting", "locationName"),
            jsonld_location(page),
        ], field="location")

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        def is_remote_flag():
            if read_state(page, APP_DATA, "posting", "isRemote") is True:
                return WorkArrangement.REMOTE
            return None

        return arrangement_from([
            is_remote_flag,
            lambda: _workplace_type(read_state(page, APP_DATA, "posting", "workplaceType")),
            lambda: is_telecommute(page),
            lambda: _workplace_type(read_field(page, "workplaceType")),
            lambda: classify_work_arrangement(location),
        ])

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from([
            lambda: read_state(page, APP_DATA, "posting", "descriptionPlainText"),
            lambda: html_to_text(read_state(page, APP_DATA, "posting", "descriptionHtml")),
            jsonld_description(page),
            lambda: meta_name(page, "description"),
        ])

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: read_state(page, APP_DATA, "posting", "compensationTierSummary"),
            lambda: read_state(page, APP_DATA, "posting", "compensationTiers", 0, "tierSummary"),
            lambda: read_state(page, APP_DATA, "posting", "scrapeableCompensationSalarySummary"),
            jsonld_compensation(page),
        ], field="compensation")

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            lambda: parse_posted_date(read_state(page, APP_DATA, "posting", "publishedDate")),
            jsonld_posted_date(page),
        ], field="posted_date")
