"""
Base site extractor interface.

A site extractor knows how to recognize one career-site platform from the
page address and how to read each job posting field from that platform's
pages. Each field method runs an ordered fallback chain of source reads;
`extract()` runs every field and never raises.
"""
import logging
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from jobclip.core.models import JobPosting, WorkArrangement
from jobclip.core.normalize import (
    classify_work_arrangement,
    format_base_salary,
    html_to_text,
    is_substantial_description,
    looks_like_salary,
    parse_posted_date,
    truncate_description,
)
from jobclip.core.page import PageSnapshot
from jobclip.pipeline.chain import Attempt, first_valid
from jobclip.pipeline.dom import select_all_text, select_text
from jobclip.pipeline.jsonld import hiring_organization, job_location, read_field, read_job_posting

logger = logging.getLogger(__name__)


class SiteExtractor(ABC):
    """
    Base class for site extractors.

    Subclasses set `name` and `url_patterns` and implement the field
    methods. Instances hold no mutable state, so one instance serves any
    number of (concurrent) extractions.
    """

    name: str = ""
    url_patterns: Tuple[str, ...] = ()

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.name.lower() or 'site'}")

    def can_handle(self, url: str) -> bool:
        """Ownership predicate: does this address belong to the platform?"""
        if not isinstance(url, str) or not url:
            return False
        lowered = url.lower()
        return any(pattern in lowered for pattern in self.url_patterns)

    @abstractmethod
    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        pass

    @abstractmethod
    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        pass

    @abstractmethod
    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        pass

    @abstractmethod
    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        pass

    def extract_work_arrangement(
        self,
        page: PageSnapshot,
        location: Optional[str] = None
    ) -> Optional[WorkArrangement]:
        """Default: classify whatever location text was found."""
        return classify_work_arrangement(location)

    def extract_compensation(self, page: PageSnapshot) -> Optional[str]:
        return None

    def extract_posted_date(self, page: PageSnapshot) -> Optional[str]:
        return None

    def extract(self, page: PageSnapshot) -> JobPosting:
        """
        Run every field chain and collect the fields that produced a value.

        Always returns a JobPosting, possibly empty. Failures are logged.
        """
        fields: Dict[str, object] = {}

        try:
            self._run_field(fields, "position", self.extract_title, page)
            self._run_field(fields, "company", self.extract_company, page)
            self._run_field(fields, "location", self.extract_location, page)
            self._run_field(
                fields, "work_arrangement", self.extract_work_arrangement,
                page, fields.get("location")
            )
            self._run_field(fields, "description", self.extract_description, page)
            self._run_field(fields, "compensation", self.extract_compensation, page)
            self._run_field(fields, "posted_date", self.extract_posted_date, page)
        except Exception as e:
            self.logger.error(f"[{self.name}] Error extracting job data from {page.url[:80]}: {e}", exc_info=True)

        self.logger.debug(f"[{self.name}] Extracted {sorted(fields)} from {page.url[:80]}")
        return JobPosting(**fields)

    def _run_field(self, fields: Dict[str, object], field: str, method: Callable, *args) -> None:
        try:
            value = method(*args)
        except Exception as e:
            self.logger.error(f"[{self.name}] {field} extraction failed: {e}", exc_info=True)
            return
        if value is None:
            return
        if isinstance(value, str) and not isinstance(value, WorkArrangement):
            value = value.strip()
            if not value:
                return
        fields[field] = value

    def __repr__(self):
        return f"<{self.__class__.__name__}(name={self.name})>"


# Chain building blocks shared by site extractors

def selector_attempts(
    page: PageSnapshot,
    selectors: Sequence[str],
    transform: Optional[Callable[[str], Optional[str]]] = None
) -> List[Attempt]:
    """One attempt per selector, most specific first."""
    def make(selector: str) -> Attempt:
        def attempt():
            text = select_text(page, selector)
            if text and transform:
                return transform(text)
            return text
        return attempt
    return [make(selector) for selector in selectors]


def description_from(attempts: Sequence[Attempt]) -> Optional[str]:
    """Description chain: plain text over 100 chars, capped at 1000 + '...'."""
    text = first_valid(attempts, accept=is_substantial_description, field="description")
    return truncate_description(text) if text else None


def arrangement_from(attempts: Sequence[Attempt]) -> Optional[WorkArrangement]:
    return first_valid(
        attempts,
        accept=lambda value: isinstance(value, WorkArrangement),
        field="work_arrangement"
    )


def is_telecommute(page: PageSnapshot) -> Optional[WorkArrangement]:
    """JSON-LD jobLocationType TELECOMMUTE -> Remote."""
    location_type = read_field(page, "jobLocationType")
    values = location_type if isinstance(location_type, list) else [location_type]
    if any(isinstance(v, str) and v.upper() == "TELECOMMUTE" for v in values):
        return WorkArrangement.REMOTE
    return None


def jsonld_title(page: PageSnapshot) -> Attempt:
    return lambda: read_field(page, "title")


def jsonld_company(page: PageSnapshot) -> Attempt:
    return lambda: hiring_organization(read_job_posting(page))


def jsonld_location(page: PageSnapshot) -> Attempt:
    return lambda: job_location(read_job_posting(page))


def jsonld_description(page: PageSnapshot) -> Attempt:
    return lambda: html_to_text(read_field(page, "description"))


def jsonld_compensation(page: PageSnapshot) -> Attempt:
    return lambda: format_base_salary(read_field(page, "baseSalary"))


def jsonld_posted_date(page: PageSnapshot) -> Attempt:
    return lambda: parse_posted_date(read_field(page, "datePosted"))


def shorter_than(limit: int) -> Callable[[object], bool]:
    """Validity predicate: non-empty text under `limit` characters."""
    return lambda value: isinstance(value, str) and 0 < len(value.strip()) < limit


def first_comma_segment(text: str) -> str:
    # "Berlin, Germany" -> "Berlin"
    return text.split(",")[0].strip()


def salary_from_elements(page: PageSnapshot, selectors: Sequence[str]) -> Optional[str]:
    """First element under any selector whose text reads like pay."""
    for selector in selectors:
        for text in select_all_text(page, selector):
            if looks_like_salary(text):
                return text
    return None
