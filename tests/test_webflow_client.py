"""Tests for the Webflow collection client."""
import json
from unittest.mock import patch, MagicMock

import pytest

from senate_sync.config import SENATE_MEMBER_CHAMBER_ID, SyncConfig
from senate_sync.webflow_client import (
    APIRateLimitError,
    SnapshotError,
    WebflowAPIError,
    WebflowClient,
)


def make_response(status_code=200, payload=None, text=''):
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = payload
    response.text = text
    return response


def items(*ids):
    return {'items': [{'id': i, 'fieldData': {'name': f"Name {i}", 'chamber': SENATE_MEMBER_CHAMBER_ID}} for i in ids]}


@pytest.fixture
def config():
    return SyncConfig(webflow_api_token='tok', page_size=2,
                      committees_collection_id='committees', members_collection_id='members')


@pytest.fixture
def session():
    return MagicMock()


def test_session_gets_auth_headers(config, session):
    WebflowClient(config, session=session)
    session.headers.update.assert_called_once_with(config.webflow_headers())


def test_pagination_stops_on_short_page(config, session):
    session.get.side_effect = [
        make_response(200, items('1', '2')),
        make_response(200, items('3', '4')),
        make_response(200, items('5')),
    ]
    result = WebflowClient(config, session=session).fetch_all_items('members')

    assert [i['id'] for i in result] == ['1', '2', '3', '4', '5']
    offsets = [call.kwargs['params']['offset'] for call in session.get.call_args_list]
    assert offsets == [0, 2, 4]
    assert all(call.kwargs['params']['limit'] == 2 for call in session.get.call_args_list)
    assert session.get.call_args_list[0].args[0] == 'https://api.webflow.com/v2/collections/members/items'


def test_pagination_stops_on_empty_page(config, session):
    session.get.side_effect = [
        make_response(200, items('1', '2')),
        make_response(200, {'items': []}),
    ]
    result = WebflowClient(config, session=session).fetch_all_items('members')
    assert len(result) == 2
    assert session.get.call_count == 2


def test_failed_page_raises_snapshot_error(config, session):
    session.get.side_effect = [
        make_response(200, items('1', '2')),
        make_response(500, None, text='server error'),
    ]
    with pytest.raises(SnapshotError):
        WebflowClient(config, session=session).fetch_all_items('members')


def test_rate_limited_read_is_retried(config, session):
    session.get.side_effect = [
        make_response(429, None),
        make_response(200, items('1')),
    ]
    with patch('time.sleep'):
        result = WebflowClient(config, session=session).fetch_all_items('members')
    assert [i['id'] for i in result] == ['1']
    assert session.get.call_count == 2


def test_fetch_members_and_committees_return_models(config, session):
    session.get.side_effect = [
        make_response(200, items('m1')),
        make_response(200, {'items': [{'id': 'c1', 'fieldData': {'name': 'Health', 'chamber': 'x'}}]}),
    ]
    client = WebflowClient(config, session=session)
    members = client.fetch_members()
    committees = client.fetch_committees()
    assert members[0].id == 'm1'
    assert members[0].chamber_tag == SENATE_MEMBER_CHAMBER_ID
    assert committees[0].display_name == 'Health'
    assert session.get.call_args_list[1].args[0].endswith('/collections/committees/items')


def test_create_live_item(config, session):
    session.request.return_value = make_response(202, {'id': 'new-id'})
    body = {'fieldData': {'name': 'Health'}}
    result = WebflowClient(config, session=session).create_live_item(body)

    assert result == {'id': 'new-id'}
    method, url = session.request.call_args.args
    assert method == 'POST'
    assert url == 'https://api.webflow.com/v2/collections/committees/items/live'
    assert json.loads(session.request.call_args.kwargs['data']) == body


def test_update_live_item(config, session):
    session.request.return_value = make_response(200, {'id': 'abc'})
    WebflowClient(config, session=session).update_live_item('abc', {'fieldData': {}})
    method, url = session.request.call_args.args
    assert method == 'PATCH'
    assert url == 'https://api.webflow.com/v2/collections/committees/items/abc/live'


def test_failed_write_raises_without_retry(config, session):
    session.request.return_value = make_response(500, None, text='boom')
    with pytest.raises(WebflowAPIError) as excinfo:
        WebflowClient(config, session=session).update_live_item('abc', {'fieldData': {}})
    assert excinfo.value.status_code == 500
    assert session.request.call_count == 1


def test_rate_limited_write_is_retried(config, session):
    session.request.side_effect = [make_response(429, None), make_response(200, {'id': 'abc'})]
    with patch('time.sleep'):
        result = WebflowClient(config, session=session).create_live_item({'fieldData': {}})
    assert result == {'id': 'abc'}
    assert session.request.call_count == 2


def test_rate_limit_error_is_a_webflow_error():
    assert issubclass(APIRateLimitError, WebflowAPIError)
