"""
Tests for the HTTP API
"""
import json

import pytest
from fastapi.testclient import TestClient

from diffpatterns.main import app
from diff_builders import hunk


@pytest.fixture
def client():
    return TestClient(app)


def _body(**overrides):
    body = {
        "files": [
            {"path": "A.cs", "kind": "Modify", "diff": hunk(added=["using System.Text;"])},
            {"path": "B.cs", "kind": "Modify", "diff": hunk(added=["using System.Text;"])},
            {"path": "notes.md", "kind": "Modify", "diff": hunk(added=["hello"])},
        ],
        "repository": "/repo",
        "commits": ["abc", "def"],
    }
    body.update(overrides)
    return body


class TestHealth:

    def test_root_and_health(self, client):
        assert client.get("/").json() == {"status": "ok"}
        assert client.get("/health").json() == {"status": "healthy"}


class TestAnalyze:

    def test_groups_and_summary(self, client):
        res = client.post("/analyze", json=_body())
        assert res.status_code == 200

        data = res.json()
        assert data["summary"]["totalGroups"] == 2
        assert data["summary"]["uniquePatterns"] == 1
        assert data["groups"][0]["description"] == "Modify using statements (2 files)"
        assert data["groups"][0]["affectedFiles"] == ["A.cs", "B.cs"]
        assert data["metadata"]["gitRange"] == "abc..def"

    def test_include_filter(self, client):
        data = client.post("/analyze", json=_body(include="*.md")).json()
        assert data["summary"]["totalFiles"] == 1

    def test_markup_mode(self, client):
        files = [
            {"path": "A.xml", "diff": hunk(removed=['<Field id="1"/>'], added=['<Field id="2"/>'])},
            {"path": "B.xml", "diff": hunk(removed=['<Field id="3"/>'], added=['<Field id="4"/>'])},
        ]
        plain = client.post("/analyze", json=_body(files=files)).json()
        markup = client.post("/analyze", json=_body(files=files, markup_aware=True)).json()

        assert plain["summary"]["totalGroups"] == 2
        assert markup["summary"]["totalGroups"] == 1

    def test_empty_files(self, client):
        data = client.post("/analyze", json=_body(files=[])).json()
        assert data["groups"] == []
        assert data["summary"]["totalGroups"] == 0

    def test_threshold_out_of_range(self, client):
        res = client.post("/analyze", json=_body(similarity_threshold=1.5))
        assert res.status_code == 422

    def test_unknown_kind(self, client):
        files = [{"path": "a.cs", "kind": "Move", "diff": ""}]
        assert client.post("/analyze", json=_body(files=files)).status_code == 422


class TestReport:

    def test_markdown_default(self, client):
        res = client.post("/analyze/report", json=_body())
        assert res.status_code == 200

        data = res.json()
        assert data["format"] == "markdown"
        assert data["content"].startswith("# Git Changes Analysis Report")
        assert "- **Repository**: /repo" in data["content"]

    def test_json_format(self, client):
        data = client.post("/analyze/report?format=json", json=_body()).json()
        payload = json.loads(data["content"])
        assert payload["analysis_metadata"]["commit_hashes"] == ["abc", "def"]

    def test_bad_format(self, client):
        assert client.post("/analyze/report?format=html", json=_body()).status_code == 422
