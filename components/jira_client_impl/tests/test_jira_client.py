"""Unit tests for JiraClient and JiraIssue.

The HTTP layer is mocked: either the internal _get helper or the
requests.Session held by the client.
"""

#Run with "python -m pytest components/jira_client_impl/tests/test_jira_client.py -v"

import pytest
import requests
from unittest.mock import MagicMock
from jira_client_impl.jira_impl import JiraClient, JiraError, AuthenticationError, SEARCH_FIELDS
from jira_client_impl.jira_issue import JiraIssue, get_issue
from issue_tracker_interface.client import TrackerError
from issue_tracker_interface.issue import SearchPage

#Fixture for mock tests
@pytest.fixture
def jira_client():
    """Returns a JiraClient with mocked internal API methods."""
    client = JiraClient("https://jira.example.com/", "alice", "secret")

    # Mock the internal _get method to prevent real HTTP calls
    client._get = MagicMock()

    return client

#--------------------------- tests for the constructor --------------------------

def test_base_url_trailing_slash_is_stripped_sa(jira_client):
    # Assert: the fixture passed a trailing slash, the client should drop it
    assert jira_client.base_url == "https://jira.example.com"


def test_session_uses_basic_auth_sa():
    client = JiraClient("https://jira.example.com", "alice", "secret")

    # Assert: every request goes out with the configured credentials
    assert isinstance(client._session.auth, requests.auth.HTTPBasicAuth)
    assert client._session.auth.username == "alice"
    assert client._session.auth.password == "secret"
    assert client._session.headers["Accept"] == "application/json"


def test_url_uses_v2_api_prefix_sa(jira_client):
    assert jira_client._url("/search") == "https://jira.example.com/rest/api/2/search"

#--------------------------- tests for search method --------------------------

def test_search_sends_jql_and_paging_params(jira_client):
    # Setup: Tell our mocked _get method what to return when called
    jira_client._get.return_value = {"startAt": 0, "total": 0, "issues": []}

    # Act: Run a search with explicit paging
    jira_client.search('Sprint = "SE.1"', start_at=10, max_results=1000)

    # Assert: Were the query parameters passed through to the endpoint?
    jira_client._get.assert_called_once_with(
        "/search",
        params={"jql": 'Sprint = "SE.1"', "startAt": 10, "maxResults": 1000, "fields": SEARCH_FIELDS},
    )


def test_search_builds_page_from_response(jira_client):
    # Setup: A page of two issues out of five
    jira_client._get.return_value = {
        "startAt": 2,
        "maxResults": 2,
        "total": 5,
        "issues": [
            {"key": "SE-1", "fields": {"summary": "First", "status": {"name": "Done"}}},
            {"key": "SE-2", "fields": {"summary": "Second", "status": {"name": "In Progress"}}},
        ],
    }

    # Act
    page = jira_client.search("project = SE", start_at=2, max_results=2)

    # Assert: issues are wrapped as JiraIssue and the counters are copied over
    assert isinstance(page, SearchPage)
    assert page.total == 5
    assert page.start_at == 2
    assert [i.key for i in page.issues] == ["SE-1", "SE-2"]
    assert [i.status for i in page.issues] == ["Done", "In Progress"]
    assert all(isinstance(i, JiraIssue) for i in page.issues)


def test_search_falls_back_to_requested_start_at(jira_client):
    # Setup: a response without startAt
    jira_client._get.return_value = {"total": 1, "issues": [{"key": "SE-1", "fields": {}}]}

    page = jira_client.search("project = SE", start_at=7)

    # Assert: the requested offset is reported back
    assert page.start_at == 7


def test_search_skips_non_dict_issue_entries(jira_client):
    jira_client._get.return_value = {"total": 2, "startAt": 0, "issues": [{"key": "SE-1"}, "garbage"]}

    page = jira_client.search("project = SE")

    assert [i.key for i in page.issues] == ["SE-1"]


def test_search_rejects_non_object_response(jira_client):
    jira_client._get.return_value = ["not", "a", "dict"]

    with pytest.raises(JiraError):
        jira_client.search("project = SE")


def test_search_propagates_transport_errors(jira_client):
    # Setup: the network fails
    jira_client._get.side_effect = requests.ConnectionError("connection refused")

    # Assert: the error is not swallowed or wrapped
    with pytest.raises(requests.ConnectionError):
        jira_client.search("project = SE")


def test_get_calls_session_with_full_url():
    # Setup: replace the session so no real request is made
    client = JiraClient("https://jira.example.com", "alice", "secret")
    response = MagicMock(status_code=200, ok=True)
    response.json.return_value = {"total": 0}
    client._session = MagicMock()
    client._session.get.return_value = response

    # Act
    result = client._get("/search", params={"jql": "x"})

    # Assert
    client._session.get.assert_called_once_with(
        "https://jira.example.com/rest/api/2/search", params={"jql": "x"}
    )
    assert result == {"total": 0}

#--------------------------- tests for _raise_for_status method --------------------------


def test_raise_for_status_ok_response_does_not_raise_sa():
    #successful (2xx) response does not raise any exception

    # Setup: Simulate a 200 OK response
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.ok = True

    # Assert: No exception should be raised for a successful response
    JiraClient._raise_for_status(mock_response)


def test_raise_for_status_401_raises_authentication_error_sa():
    # Setup: Simulate a 401 response
    mock_response = MagicMock()
    mock_response.status_code = 401
    mock_response.ok = False
    mock_response.url = "https://jira.example.com/rest/api/2/search"

    # Assert: Should raise AuthenticationError, which is still a TrackerError
    with pytest.raises(AuthenticationError) as exc_info:
        JiraClient._raise_for_status(mock_response)
    assert isinstance(exc_info.value, TrackerError)


def test_raise_for_status_400_raises_jira_error_with_detail_sa():
    # Setup: Jira answers bad JQL (e.g. an unknown sprint) with a 400 and an error body
    mock_response = MagicMock()
    mock_response.status_code = 400
    mock_response.ok = False
    mock_response.json.return_value = {"errorMessages": ["Sprint with name 'SE.999' does not exist"]}

    with pytest.raises(JiraError) as exc_info:
        JiraClient._raise_for_status(mock_response)

    assert "400" in str(exc_info.value)
    assert "SE.999" in str(exc_info.value)


def test_raise_for_status_non_json_body_uses_text_sa():
    #non-ok response whose body is not JSON falls back to the raw text
    mock_response = MagicMock()
    mock_response.status_code = 502
    mock_response.ok = False
    mock_response.json.side_effect = ValueError("no json")
    mock_response.text = "Bad Gateway"

    with pytest.raises(JiraError) as exc_info:
        JiraClient._raise_for_status(mock_response)

    assert "Bad Gateway" in str(exc_info.value)

#-------------------- tests for JiraIssue --------------------

def test_get_issue_reads_key_summary_and_status():
    issue = get_issue({"key": "SE-42", "fields": {"summary": "Fix login", "status": {"name": "In Review"}}})

    assert issue.key == "SE-42"
    assert issue.summary == "Fix login"
    assert issue.status == "In Review"


def test_issue_missing_fields_are_empty_strings():
    # testing an issue payload without fields - everything should come back as ""
    issue = get_issue({})

    assert issue.key == ""
    assert issue.summary == ""
    assert issue.status == ""


def test_issue_null_summary_and_status_are_empty_strings():
    issue = JiraIssue("SE-1", {"summary": None, "status": None})

    assert issue.summary == ""
    assert issue.status == ""


def test_issue_repr():
    issue = JiraIssue("SE-1", {"summary": "Fix", "status": {"name": "Done"}})

    assert repr(issue) == "<Issue key='SE-1' summary='Fix' status='Done'>"
