"""
Tests for the JSON-file opportunity store.
"""

import json
import re

import pytest

from jobclip.app.opportunities import OpportunityStore, generate_id
from jobclip.core.models import JobPosting, WorkArrangement

ID_PATTERN = re.compile(r"^\d{13}-[0-9a-z]{9}$")


@pytest.fixture
def store(tmp_path):
    return OpportunityStore(str(tmp_path / "opportunities.json"))


def test_generate_id_format():
    assert ID_PATTERN.match(generate_id())
    assert generate_id() != generate_id()


def test_missing_file_is_empty(store):
    assert store.list() == []
    assert store.get("nope") is None
    assert len(store) == 0


def test_capture_posting(store):
    posting = JobPosting(
        position="Staff Engineer",
        company="Acme",
        work_arrangement=WorkArrangement.REMOTE,
    )
    record = store.capture(posting, link="https://jobs.lever.co/acme/1", notes=None)

    assert ID_PATTERN.match(record["id"])
    assert record["capturedDate"].endswith("Z")
    assert record["position"] == "Staff Engineer"
    assert record["workArrangement"] == "Remote"
    assert record["link"] == "https://jobs.lever.co/acme/1"
    assert "notes" not in record

    assert store.list() == [record]
    assert store.get(record["id"]) == record


def test_save_replaces_same_id(store):
    first = store.save({"position": "Engineer", "company": "Acme"})
    store.save({"position": "Designer"})
    store.save({**first, "company": "Acme Inc"})

    records = store.list()
    assert len(records) == 2
    assert records[0]["id"] == first["id"]
    assert records[0]["company"] == "Acme Inc"
    assert records[1]["position"] == "Designer"


def test_save_keeps_supplied_id(store):
    record = store.save({"id": "1718900000000-abcdefghi", "position": "Engineer"})
    assert record["id"] == "1718900000000-abcdefghi"
    assert "capturedDate" in record


def test_file_is_json_list(store):
    store.save({"position": "Engineer"})
    with open(store.path, encoding="utf-8") as f:
        data = json.load(f)
    assert isinstance(data, list)
    assert data[0]["position"] == "Engineer"


def test_corrupt_file_is_preserved(store):
    store.path.write_text("{not json", encoding="utf-8")

    assert store.list() == []
    store.save({"position": "Engineer"})

    backup = store.path.with_name(store.path.name + ".corrupt")
    assert backup.read_text(encoding="utf-8") == "{not json"
    assert [r["position"] for r in store.list()] == ["Engineer"]


def test_delete(store):
    record = store.save({"position": "Engineer"})
    assert store.delete(record["id"]) is True
    assert store.delete(record["id"]) is False
    assert store.list() == []
