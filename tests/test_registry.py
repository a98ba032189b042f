"""
Tests for extractor registration and dispatch.
"""

import logging
from typing import Optional

import pytest

from jobclip.core.models import JobPosting
from jobclip.core.page import PageSnapshot
from jobclip.extractors import (
    ExtractorRegistry,
    SiteExtractor,
    extract_job_data,
    find_extractor,
    get_extractor_registry,
)


class StubExtractor(SiteExtractor):
    name = "Stub"
    url_patterns = ("careers.example.com",)

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return "Stub Title"

    def extract_company(self, page: PageSnapshot) -> Optional[str]:
        return None

    def extract_location(self, page: PageSnapshot) -> Optional[str]:
        return None

    def extract_description(self, page: PageSnapshot) -> Optional[str]:
        return None


class OtherStubExtractor(StubExtractor):
    name = "OtherStub"

    def extract_title(self, page: PageSnapshot) -> Optional[str]:
        return "Other Title"


class RaisingExtractor(StubExtractor):
    name = "Raising"

    def extract(self, page: PageSnapshot) -> JobPosting:
        raise RuntimeError("broken extractor")


class TestBuiltinRegistry:
    @pytest.mark.parametrize("url,expected", [
        ("https://www.linkedin.com/jobs/view/3912345678/", "LinkedIn"),
        ("https://job-boards.greenhouse.io/acme/jobs/4567890", "Greenhouse"),
        ("https://jobs.ashbyhq.com/acme/2f4c1a9e", "AshbyHQ"),
        ("https://apply.workable.com/acme/j/A1B2C3D4E5/", "Workable"),
        ("https://jobs.lever.co/acme/8d0e6c2b", "Lever"),
        ("https://careers-acme.icims.com/jobs/4821/job", "iCIMS"),
    ])
    def test_find_extractor(self, url, expected):
        extractor = find_extractor(url)
        assert extractor is not None
        assert extractor.name == expected

    def test_unsupported_site(self):
        assert find_extractor("https://www.example.org/careers/123") is None
        assert find_extractor("") is None

    def test_unsupported_site_yields_empty_result(self, make_page):
        page = make_page("https://www.example.org/careers/123", "<h1>Engineer</h1>")
        assert extract_job_data(page).to_dict() == {}

    def test_dispatch_order(self):
        names = [info["name"] for info in get_extractor_registry().list_extractors()]
        assert names == ["LinkedIn", "Greenhouse", "AshbyHQ", "Workable", "Lever", "iCIMS"]

    def test_explicit_url_overrides_page_address(self, make_page):
        state = {"__appData": {"posting": {"title": "Engineer"}}}
        page = make_page("https://www.example.org/saved-copy.html", state=state)
        assert extract_job_data(page).to_dict() == {}
        assert extract_job_data(page, "https://jobs.ashbyhq.com/acme/1").to_dict() == {"position": "Engineer"}

    def test_extraction_is_idempotent(self, make_page, description):
        html = f"""
        <div class="job__title"><h1>Engineer</h1></div>
        <div class="job__location"><div>Remote - US</div></div>
        <div class="job__description">{description}</div>
        """
        page = make_page("https://boards.greenhouse.io/acme/jobs/1", html)
        first = extract_job_data(page)
        assert first == extract_job_data(page)
        assert not first.is_empty()


class TestExtractorRegistry:
    def test_first_registered_wins(self, make_page):
        registry = ExtractorRegistry()
        registry.register(StubExtractor())
        registry.register(OtherStubExtractor())

        page = make_page("https://careers.example.com/jobs/1")
        assert registry.find_extractor(page.url).name == "Stub"
        assert registry.extract(page).position == "Stub Title"

    def test_duplicate_name_warns(self, caplog):
        registry = ExtractorRegistry()
        first = StubExtractor()
        registry.register(first)

        with caplog.at_level(logging.WARNING, logger="jobclip.extractors.registry"):
            registry.register(StubExtractor())

        assert "already registered" in caplog.text
        assert len(registry) == 2
        assert registry.get_extractor("Stub") is first

    def test_raising_extractor_returns_empty(self, make_page):
        registry = ExtractorRegistry()
        registry.register(RaisingExtractor())
        page = make_page("https://careers.example.com/jobs/1")
        assert registry.extract(page) == JobPosting()

    def test_list_extractors(self):
        registry = ExtractorRegistry()
        registry.register(StubExtractor())
        assert registry.list_extractors() == [{
            "name": "Stub",
            "priority": 1,
            "class": "StubExtractor",
            "url_patterns": ["careers.example.com"],
        }]

    def test_no_match(self, make_page):
        registry = ExtractorRegistry()
        registry.register(StubExtractor())
        assert registry.extract(make_page("https://elsewhere.example.net/")).is_empty()


class ExplodingSoup:
    def __getattr__(self, name):
        raise RuntimeError(f"document unavailable: {name}")


BUILTIN_EXTRACTORS = [
    get_extractor_registry().get_extractor(info["name"])
    for info in get_extractor_registry().list_extractors()
]


@pytest.mark.parametrize("extractor", BUILTIN_EXTRACTORS, ids=lambda e: e.name)
def test_extract_survives_every_source_failing(extractor, make_page, monkeypatch):
    """Every source read raises; extraction still returns a posting."""
    page = make_page("https://jobs.example.com/1", "<h1>Engineer</h1>")
    page.soup = ExplodingSoup()
    monkeypatch.setattr(page, "global_state", lambda name: 1 / 0)

    posting = extractor.extract(page)
    assert isinstance(posting, JobPosting)
    assert posting.to_dict() == {}
