"""
Unit tests for page snapshots and the source readers (page state, JSON-LD,
rendered markup, meta tags).
"""

from jobclip.core.page import PageSnapshot
from jobclip.pipeline.dom import select_all_text, select_attr, select_text
from jobclip.pipeline.jsonld import hiring_organization, job_location, read_field, read_job_posting
from jobclip.pipeline.meta import meta_name, meta_property, page_title
from jobclip.pipeline.state import find_route_data, read_state


class TestPageState:
    def test_window_dot_assignment(self):
        """Inline `window.__name = {...}` literals are recovered."""
        html = """
        <html><body>
        <script>window.__appData = {"posting": {"title": "Engineer", "isRemote": true}};</script>
        </body></html>
        """
        page = PageSnapshot("https://jobs.ashbyhq.com/acme/1", html)
        assert read_state(page, "__appData", "posting", "title") == "Engineer"
        assert read_state(page, "__appData", "posting", "isRemote") is True
        assert page.state_names == ["__appData"]

    def test_window_bracket_assignment(self):
        html = '<script>window["__remixContext"] = {"state": {"loaderData": {}}};</script>'
        page = PageSnapshot("https://boards.greenhouse.io/acme/jobs/1", html)
        assert page.global_state("__remixContext") == {"state": {"loaderData": {}}}

    def test_malformed_literal_is_skipped(self):
        html = '<script>window.__appData = {broken: true};</script>'
        page = PageSnapshot("https://jobs.ashbyhq.com/acme/1", html)
        assert page.global_state("__appData") is None

    def test_supplied_state_overrides_inline(self):
        html = '<script>window.__appData = {"posting": {"title": "Inline"}};</script>'
        state = {"__appData": {"posting": {"title": "Supplied"}}}
        page = PageSnapshot("https://jobs.ashbyhq.com/acme/1", html, state=state)
        assert read_state(page, "__appData", "posting", "title") == "Supplied"

    def test_missing_state(self):
        page = PageSnapshot("https://jobs.ashbyhq.com/acme/1")
        assert read_state(page, "__appData", "posting", "title") is None

    def test_find_route_data(self):
        state = {
            "__remixContext": {
                "state": {
                    "loaderData": {
                        "root": {"jobPost": {"company_name": "Wrong"}},
                        "routes/$url_token_.jobs_.$job_post_id": {"jobPost": {"company_name": "Acme"}},
                    }
                }
            }
        }
        page = PageSnapshot("https://job-boards.greenhouse.io/acme/jobs/1", state=state)
        assert find_route_data(page, "__remixContext", "job_post_id", "jobPost", "company_name") == "Acme"
        assert find_route_data(page, "__remixContext", "missing_route", "jobPost") is None


class TestJSONLD:
    def test_singleton_object(self, jsonld_script):
        html = jsonld_script({"@type": "JobPosting", "title": "Program Officer"})
        page = PageSnapshot("https://example.com/job", html)
        assert read_field(page, "title") == "Program Officer"

    def test_array_payload(self, jsonld_script):
        """The JobPosting may sit inside a top-level array."""
        html = jsonld_script([
            {"@type": "Organization", "name": "Acme"},
            {"@type": "JobPosting", "title": "Designer"},
        ])
        page = PageSnapshot("https://example.com/job", html)
        assert read_field(page, "title") == "Designer"

    def test_graph_payload(self, jsonld_script):
        html = jsonld_script({
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebPage", "name": "Careers"},
                {"@type": "JobPosting", "title": "Analyst"},
            ],
        })
        page = PageSnapshot("https://example.com/job", html)
        assert read_field(page, "title") == "Analyst"

    def test_untyped_singleton(self, jsonld_script):
        html = jsonld_script({"title": "Untyped Role"})
        page = PageSnapshot("https://example.com/job", html)
        assert read_job_posting(page) == {"title": "Untyped Role"}

    def test_typed_posting_wins_over_untyped(self, jsonld_script):
        html = jsonld_script({"title": "Untyped"}) + jsonld_script({"@type": "JobPosting", "title": "Typed"})
        page = PageSnapshot("https://example.com/job", html)
        assert read_field(page, "title") == "Typed"

    def test_malformed_script_is_skipped(self, jsonld_script):
        html = '<script type="application/ld+json">{not json</script>'
        html += jsonld_script({"@type": "JobPosting", "title": "Survivor"})
        page = PageSnapshot("https://example.com/job", html)
        assert read_field(page, "title") == "Survivor"

    def test_no_jsonld(self):
        page = PageSnapshot("https://example.com/job", "<html><body><h1>Hi</h1></body></html>")
        assert read_job_posting(page) is None
        assert read_field(page, "title") is None

    def test_scripts_parsed_once_per_page(self, jsonld_script, monkeypatch):
        from jobclip.pipeline import jsonld

        calls = []
        load_scripts = jsonld._load_scripts

        def counting_load(page):
            calls.append(page.url)
            return load_scripts(page)

        monkeypatch.setattr(jsonld, "_load_scripts", counting_load)
        page = PageSnapshot("https://example.com/job", jsonld_script({"@type": "JobPosting", "title": "Analyst"}))

        assert read_field(page, "title") == "Analyst"
        assert read_job_posting(page)["title"] == "Analyst"
        assert read_field(page, "datePosted") is None
        assert len(calls) == 1

        other = PageSnapshot("https://example.com/other", jsonld_script({"@type": "JobPosting", "title": "Other"}))
        assert read_field(other, "title") == "Other"
        assert len(calls) == 2

    def test_hiring_organization(self):
        assert hiring_organization({"hiringOrganization": {"name": " Acme "}}) == "Acme"
        assert hiring_organization({"hiringOrganization": "Acme Inc"}) == "Acme Inc"
        assert hiring_organization({"hiringOrganization": {}}) is None
        assert hiring_organization(None) is None

    def test_job_location_postal_address(self):
        posting = {
            "jobLocation": {
                "@type": "Place",
                "address": {"addressLocality": "Austin", "addressRegion": "TX", "addressCountry": "US"},
            }
        }
        assert job_location(posting) == "Austin, TX, US"

    def test_job_location_variants(self):
        assert job_location({"jobLocation": "Remote, Europe"}) == "Remote, Europe"
        assert job_location({"jobLocation": [{"address": {}}, {"name": "London"}]}) == "London"
        assert job_location({
            "jobLocation": {"address": {"addressLocality": "Paris", "addressCountry": {"name": "France"}}}
        }) == "Paris, France"
        assert job_location({}) is None


class TestMarkupReaders:
    HTML = """
    <html>
      <head>
        <title>Engineer - Acme</title>
        <meta property="og:title" content="Engineer - Berlin - Acme">
        <meta name="description" content="  Join us  ">
      </head>
      <body>
        <h1 class="title">  Engineer </h1>
        <ul><li class="tag">One</li><li class="tag">Two</li></ul>
        <time datetime="2024-06-01">June 1</time>
      </body>
    </html>
    """

    def test_select_text(self):
        page = PageSnapshot("https://example.com/job", self.HTML)
        assert select_text(page, "h1.title") == "Engineer"
        assert select_text(page, ".missing") is None

    def test_select_all_text(self):
        page = PageSnapshot("https://example.com/job", self.HTML)
        assert select_all_text(page, "li.tag") == ["One", "Two"]

    def test_select_attr(self):
        page = PageSnapshot("https://example.com/job", self.HTML)
        assert select_attr(page, "time[datetime]", "datetime") == "2024-06-01"
        assert select_attr(page, "time", "missing") is None

    def test_meta_readers(self):
        page = PageSnapshot("https://example.com/job", self.HTML)
        assert meta_property(page, "og:title") == "Engineer - Berlin - Acme"
        assert meta_name(page, "description") == "Join us"
        assert meta_property(page, "og:site_name") is None
        assert page_title(page) == "Engineer - Acme"
