import pytest
from fastapi.testclient import TestClient

from app.server import create_app


@pytest.fixture
def static_dir(tmp_path):
    directory = tmp_path / "frontend"
    directory.mkdir()
    (directory / "index.html").write_text("<html><body>tree ui</body></html>")
    (directory / "script.js").write_text("function fetchTree() {}")
    return directory


@pytest.fixture
def client(static_dir):
    return TestClient(create_app(static_dir=str(static_dir)))


def test_tree_missing_url(client, forbidden_download):
    response = client.get("/tree")

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Missing 'url' parameter\n"


def test_tree_non_github_url(client, forbidden_download):
    response = client.get("/tree", params={"url": "https://example.com/x"})

    assert response.status_code == 400
    assert response.text == "Invalid GitHub URL\n"
    assert forbidden_download == []


def test_tree_success(client, fake_download, sample_repo_zip):
    fake_download(sample_repo_zip)

    response = client.get("/tree", params={"url": "https://github.com/owner/repo"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    body = response.json()
    assert body["name"] == "repo-main"
    assert [child["name"] for child in body["children"]] == ["README.md", "src"]
    assert "children" not in body["children"][0]


def test_tree_invalid_archive(client, fake_download, tmp_path):
    page = tmp_path / "page.html"
    page.write_text("<html>404</html>")
    fake_download(str(page))

    response = client.get("/tree", params={"url": "https://github.com/owner/not-main"})

    assert response.status_code == 500
    assert response.text == "Failed to unzip repo\n"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_static_index(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "tree ui" in response.text


def test_static_file(client):
    response = client.get("/script.js")

    assert response.status_code == 200
    assert "fetchTree" in response.text


def test_missing_static_dir_disables_frontend(tmp_path):
    client = TestClient(create_app(static_dir=str(tmp_path / "nope")))

    assert client.get("/").status_code == 404
    assert client.get("/health").status_code == 200
