import json
from types import SimpleNamespace

import pytest

from lambda_handler import lambda_handler
from main import main


@pytest.fixture
def context():
    return SimpleNamespace(aws_request_id="req-123")


def rest_event(path, params=None, method="GET"):
    return {"httpMethod": method, "path": path, "queryStringParameters": params}


def http_api_event(path, params=None, method="GET"):
    return {
        "rawPath": path,
        "requestContext": {"http": {"method": method, "path": path}},
        "queryStringParameters": params,
    }


@pytest.mark.parametrize("make_event", [rest_event, http_api_event])
def test_tree_success(make_event, context, fake_download, sample_repo_zip):
    fake_download(sample_repo_zip)

    response = lambda_handler(make_event("/tree", {"url": "https://github.com/owner/repo"}), context)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["name"] == "repo-main"


@pytest.mark.parametrize("make_event", [rest_event, http_api_event])
def test_tree_missing_url(make_event, context, forbidden_download):
    response = lambda_handler(make_event("/tree"), context)

    assert response["statusCode"] == 400
    assert response["body"] == "Missing 'url' parameter\n"


def test_health(context):
    response = lambda_handler(rest_event("/health"), context)

    assert response["statusCode"] == 200


def test_unknown_route(context):
    response = lambda_handler(rest_event("/other"), context)

    assert response["statusCode"] == 404


def test_wrong_method(context, forbidden_download):
    response = lambda_handler(rest_event("/tree", {"url": "https://github.com/o/r"}, method="POST"), context)

    assert response["statusCode"] == 404


def test_invalid_event(context):
    response = lambda_handler("not-an-event", context)

    assert response["statusCode"] == 400


def test_cli_prints_tree(fake_download, sample_repo_zip, capsys):
    fake_download(sample_repo_zip)

    assert main(["--url", "https://github.com/owner/repo"]) == 0
    assert "📄 README.md" in capsys.readouterr().out


def test_cli_invalid_url(forbidden_download):
    assert main(["--url", "https://example.com/x"]) == 1
