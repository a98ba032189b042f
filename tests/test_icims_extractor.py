"""
Tests for the iCIMS extractor.
"""

import pytest

from jobclip.core.models import WorkArrangement
from jobclip.extractors.icims import IcimsExtractor

URL = "https://careers-acme.icims.com/jobs/4821/senior-accountant/job"


@pytest.fixture
def extractor():
    return IcimsExtractor()


def test_can_handle(extractor):
    assert extractor.can_handle(URL)
    assert not extractor.can_handle("https://jobs.lever.co/acme/1")


def test_jsonld_posting(extractor, make_page, jsonld_script, description):
    html = jsonld_script({
        "@context": "http://schema.org",
        "@type": "JobPosting",
        "title": "Senior Accountant",
        "hiringOrganization": {"@type": "Organization", "name": "Acme Corporation"},
        "jobLocation": [{"@type": "Place", "address": {"addressLocality": "Chicago", "addressRegion": "IL"}}],
        "jobLocationType": ["TELECOMMUTE"],
        "description": f"<p>{description}</p>",
        "baseSalary": {"currency": "USD", "value": {"minValue": 70000, "maxValue": 85000, "unitText": "YEAR"}},
        "datePosted": "2024-06-04",
    })
    assert extractor.extract(make_page(URL, html)).to_dict() == {
        "position": "Senior Accountant",
        "company": "Acme Corporation",
        "location": "Chicago, IL",
        "workArrangement": "Remote",
        "description": description,
        "compensation": "USD 70,000 – USD 85,000 YEAR",
        "postedDate": "2024-06-04",
    }


def test_markup_fallbacks(extractor, make_page, description):
    html = f"""
    <html><head><meta property="og:site_name" content="Acme Careers"></head>
    <body>
      <div class="iCIMS_Header"><h1>Warehouse Associate</h1></div>
      <div class="iCIMS_JobLocation">Reno, NV (Onsite)</div>
      <div class="iCIMS_JobContent">{description}</div>
    </body></html>
    """
    posting = extractor.extract(make_page(URL, html))
    assert posting.position == "Warehouse Associate"
    assert posting.company == "Acme Careers"
    assert posting.location == "Reno, NV (Onsite)"
    assert posting.work_arrangement is WorkArrangement.ON_SITE
    assert posting.description == description
