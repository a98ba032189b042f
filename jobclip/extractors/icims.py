"""
iCIMS extractor.

iCIMS career portals embed a JSON-LD JobPosting on every job page, so this
extractor is structured-data first with the classic iCIMS markup as backup.
"""
from typing import Optional

from jobclip.core.models import WorkArrangement
from jobclip.core.normalize import classify_work_arrangement, company_segment, title_segment
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import first_valid
from jobclip.pipeline.meta import meta_name, meta_property
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
    selector_attempts,
)

TITLE_SELECTORS = [
    '.iCIMS_Header h1',
    'h1.iCIMS_Header',
    'h1',
]
LOCATION_SELECTORS = [
    '.iCIMS_JobHeaderGroup .header.left span:nth-of-type(2)',
    '[class*="JobLocation"]',
]
DESCRIPTION_SELECTORS = [
    '.iCIMS_JobContent',
    '.iCIMS_InfoMsg_Job',
]


class IcimsExtractor(SiteExtractor):
    name = "iCIMS"
    url_patterns = ("icims.com",)

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [jsonld_title(page)]
            + selector_attempts(page, TITLE_SELECTORS)
            + [lambda: title_segment(meta_property(page, "og:title"))],
            field="title"
        )

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([
            jsonld_company(page),
            lambda: meta_property(page, "og:site_name"),
            lambda: company_segment(meta_property(page, "og:title")),
        ], field="company")

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return first_valid(
            [jsonld_location(page)] + selector_attempts(page, LOCATION_SELECTORS),
            field="location"
        )

    def extract_work_arrangement(self, page: PageSnapshot, location: Optional[str] = None) -> Optional[WorkArrangement]:
        return arrangement_from([
            lambda: is_telecommute(page),
            lambda: classify_work_arrangement(location),
        ])

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return description_from(
            [jsonld_description(page)]
            + selector_attempts(page, DESCRIPTION_SELECTORS)
            + [lambda: meta_name(page, "description")]
        )

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([jsonld_compensation(page)], field="compensation")

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        return first_valid([jsonld_posted_date(page)], field="posted_date")
