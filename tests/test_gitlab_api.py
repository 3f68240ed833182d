"""Tests for the GitLab API client and response classification."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from exceptions import GitLabApiError, GitLabTransportError
from gitlab_api import (BENIGN_ERRORS, GitLabClient, Outcome,
                        classify_response)


def _response(status_code: int, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    if body is None:
        response.json.side_effect = ValueError('not json')
    else:
        response.json.return_value = body
    return response


def _make_client(response: MagicMock) -> tuple[GitLabClient, MagicMock]:
    session = MagicMock()
    session.headers = {}
    session.get.return_value = response
    session.post.return_value = response
    return GitLabClient('https://gitlab.example.com/', 'glpat-secret', session=session), session


@pytest.mark.parametrize('status_code', [200, 201, 204, 302, 399])
def test_classify_below_400_is_success(status_code: int) -> None:
    assert classify_response(status_code, 'anything') is Outcome.SUCCESS


@pytest.mark.parametrize('message', BENIGN_ERRORS)
def test_classify_benign_messages(message: str) -> None:
    assert classify_response(400, message) is Outcome.BENIGN_FAILURE
    assert classify_response(404, message) is Outcome.BENIGN_FAILURE


def test_classify_requires_exact_message() -> None:
    assert classify_response(404, '404 Not Found') is Outcome.FATAL_FAILURE
    assert classify_response(400, 'runner was already enabled for this project') \
        is Outcome.FATAL_FAILURE
    assert classify_response(500, None) is Outcome.FATAL_FAILURE
    assert classify_response(400, {'runner_id': ['is invalid']}) is Outcome.FATAL_FAILURE


def test_get_uses_api_prefix_and_private_token() -> None:
    client, session = _make_client(_response(200, {'id': 5}))

    result = client.request('projects/ci%2Fapp')

    session.get.assert_called_once_with(
        'https://gitlab.example.com/api/v3/projects/ci%2Fapp', timeout=None
    )
    session.post.assert_not_called()
    assert session.headers['PRIVATE-TOKEN'] == 'glpat-secret'
    assert result.status_code == 200
    assert result.get('id') == 5
    assert result.outcome is Outcome.SUCCESS


def test_post_sends_form_data_with_lowercase_booleans() -> None:
    client, session = _make_client(_response(201, {'id': 9}))

    client.request('/projects', {'name': 'app', 'public': True, 'issues_enabled': False})

    args, kwargs = session.post.call_args
    assert args == ('https://gitlab.example.com/api/v3/projects',)
    assert kwargs['data'] == {'name': 'app', 'public': 'true', 'issues_enabled': 'false'}
    session.get.assert_not_called()


def test_benign_error_is_returned() -> None:
    body = {'message': 'Runner was already enabled for this project'}
    client, _ = _make_client(_response(409, body))

    result = client.request('projects/5/runners', {'runner_id': 7})

    assert result.status_code == 409
    assert result.outcome is Outcome.BENIGN_FAILURE
    assert result.message == body['message']


def test_fatal_error_raises_with_body() -> None:
    body = {'message': '401 Unauthorized'}
    client, _ = _make_client(_response(401, body))

    with pytest.raises(GitLabApiError) as excinfo:
        client.request('projects/ci%2Fapp')

    assert excinfo.value.status_code == 401
    assert excinfo.value.body == body
    assert '401 Unauthorized' in str(excinfo.value)


def test_unparseable_body_becomes_empty_dict() -> None:
    client, _ = _make_client(_response(200))

    result = client.request('projects/ci%2Fapp')

    assert result.body == {}
    assert result.message is None


def test_unparseable_error_body_is_fatal() -> None:
    client, _ = _make_client(_response(502))

    with pytest.raises(GitLabApiError) as excinfo:
        client.request('projects/ci%2Fapp')

    assert excinfo.value.body == {}


def test_transport_error_is_wrapped() -> None:
    client, session = _make_client(_response(200, {}))
    session.get.side_effect = requests.ConnectionError('connection refused')

    with pytest.raises(GitLabTransportError) as excinfo:
        client.request('projects/ci%2Fapp')

    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
