"""
Client Tests
============

Order submission building, the REST client and dashboard state, without a
running server.
"""

import base64
import io
from unittest.mock import MagicMock

import pytest
import requests
from werkzeug.datastructures import FileStorage

from printbee.client import (
    PrintBeeClient, AdminCredential, ClientError,
    Attachment, build_submission, MAX_FILE_SIZE,
    DashboardState, filter_orders, download_order_files,
)
from printbee.modules.orders.models import ValidationError
from conftest import make_response

FIELDS = {
    'name': ' Meera ',
    'email': 'meera@example.com',
    'phone': '9000000001',
    'pickupTime': '2025-02-01T10:30',
    'description': 'Business cards, 200',
    'paymentMethod': 'Card',
}


# ===== Submission building =====

def test_files_are_inlined_as_base64():
    body = build_submission(FIELDS, [Attachment.from_bytes('card.png', b'\x89PNG')])

    assert body['name'] == 'Meera'
    assert body['files'] == [{
        'name': 'card.png',
        'mimeType': 'image/png',
        'data': base64.b64encode(b'\x89PNG').decode('ascii'),
    }]
    assert 'link' not in body


def test_link_only_submission():
    body = build_submission(FIELDS, link=' https://drive.example.com/cards ')

    assert body['link'] == 'https://drive.example.com/cards'
    assert 'files' not in body


def test_no_file_and_no_link_is_rejected():
    with pytest.raises(ValidationError):
        build_submission(FIELDS, [], link='   ')


def test_missing_field_is_rejected_before_reading_files():
    read = MagicMock(return_value=b'data')
    attachment = Attachment('a.pdf', 'application/pdf', 4, read)

    with pytest.raises(ValidationError):
        build_submission(dict(FIELDS, email=''), [attachment])
    read.assert_not_called()


def test_file_at_limit_is_accepted():
    attachment = Attachment('big.pdf', 'application/pdf', MAX_FILE_SIZE, lambda: b'%PDF')
    body = build_submission(FIELDS, [attachment])
    assert body['files'][0]['name'] == 'big.pdf'


def test_file_over_limit_suggests_a_link():
    read = MagicMock(return_value=b'')
    attachment = Attachment('huge.mov', 'video/quicktime', MAX_FILE_SIZE + 1, read)

    with pytest.raises(ValidationError) as exc:
        build_submission(FIELDS, [attachment], link='https://drive.example.com/huge')

    assert 'huge.mov' in str(exc.value)
    assert 'link' in str(exc.value)
    read.assert_not_called()


def test_unknown_type_falls_back_to_octet_stream():
    attachment = Attachment.from_bytes('notes.zzz-unknown', b'abc')
    assert attachment.mime_type == 'application/octet-stream'


def test_attachment_from_path(tmp_path):
    path = tmp_path / 'flyer.pdf'
    path.write_bytes(b'%PDF-1.4')

    attachment = Attachment.from_path(str(path))

    assert attachment.name == 'flyer.pdf'
    assert attachment.mime_type == 'application/pdf'
    assert attachment.size == 8
    assert attachment.read() == b'%PDF-1.4'


def test_attachment_from_upload():
    storage = FileStorage(stream=io.BytesIO(b'hello'), filename='note.txt', content_type='text/plain')

    attachment = Attachment.from_upload(storage)

    assert attachment.size == 5
    assert attachment.mime_type == 'text/plain'
    assert attachment.read() == b'hello'


# ===== REST client =====

@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def api(session):
    return PrintBeeClient('http://proxy.test/', session=session)


@pytest.fixture
def credential():
    return AdminCredential('s3cret')


def test_submit_order_returns_id(api, session):
    session.request.return_value = make_response({'success': True, 'orderId': 'PB-7'})

    assert api.submit_order({'name': 'x'}) == 'PB-7'
    session.request.assert_called_once_with(
        'POST', 'http://proxy.test/order', json={'name': 'x'}, headers={}, timeout=None
    )


def test_admin_calls_send_the_secret(api, session, credential):
    session.request.return_value = make_response({'success': True, 'orders': [{'orderId': 'PB-1'}]})

    assert api.get_orders(credential) == [{'orderId': 'PB-1'}]
    assert session.request.call_args.kwargs['headers'] == {'x-admin-pwd': 's3cret'}


def test_login_returns_credential(api, session):
    session.request.return_value = make_response({'success': True})

    credential = api.login('s3cret')

    assert credential.password == 's3cret'
    assert session.request.call_args.kwargs['json'] == {'password': 's3cret'}


def test_login_failure_raises_with_status(api, session):
    session.request.return_value = make_response({'success': False, 'error': 'Unauthorized'}, status=401)

    with pytest.raises(ClientError) as exc:
        api.login('wrong')

    assert exc.value.status_code == 401
    assert str(exc.value) == 'Unauthorized'


def test_success_false_with_200_is_an_error(api, session, credential):
    session.request.return_value = make_response({'success': False, 'error': 'GAS update failed'})

    with pytest.raises(ClientError) as exc:
        api.update_order(credential, 'PB-1', 'Finished', 10.0)
    assert str(exc.value) == 'GAS update failed'


def test_transport_failure_raises(api, session):
    session.request.side_effect = requests.ConnectionError('refused')

    with pytest.raises(ClientError) as exc:
        api.render_status()
    assert exc.value.status_code is None


def test_malformed_json_raises(api, session):
    session.request.return_value = make_response(malformed=True, status=502)

    with pytest.raises(ClientError) as exc:
        api.render_status()
    assert exc.value.status_code == 502


def test_get_dashboard_shape(api, session, credential):
    session.request.return_value = make_response({'success': True, 'stats': {'totalOrders': 1}})

    assert api.get_dashboard(credential) == {'stats': {'totalOrders': 1}, 'orders': []}


def test_empty_password_is_not_a_credential():
    with pytest.raises(ValueError):
        AdminCredential('')


def test_credential_repr_hides_password():
    assert 's3cret' not in repr(AdminCredential('s3cret'))


# ===== Dashboard state =====

ORDERS = [
    {'orderId': 'PB-3', 'name': 'Kiran', 'email': 'kiran@example.com', 'phone': '111',
     'jobStatus': 'Pending', 'price': 0, 'files': []},
    {'orderId': 'PB-2', 'name': 'Anita', 'email': 'anita@shop.in', 'phone': '222',
     'jobStatus': 'Finished', 'price': 90, 'files': ['https://f.example.com/2.pdf']},
    {'orderId': 'PB-1', 'name': 'Ravi', 'email': 'ravi@example.com', 'phone': 98765,
     'jobStatus': 'In Progress', 'price': 40, 'files': []},
]


def test_filter_by_search_is_case_insensitive():
    assert [o['orderId'] for o in filter_orders(ORDERS, 'ANITA')] == ['PB-2']
    assert [o['orderId'] for o in filter_orders(ORDERS, 'example.com')] == ['PB-3', 'PB-1']


def test_filter_matches_numeric_phone():
    assert [o['orderId'] for o in filter_orders(ORDERS, '987')] == ['PB-1']


def test_filter_by_status_and_all():
    assert [o['orderId'] for o in filter_orders(ORDERS, status='Finished')] == ['PB-2']
    assert [o['orderId'] for o in filter_orders(ORDERS, '', 'All')] == ['PB-3', 'PB-2', 'PB-1']
    assert filter_orders(ORDERS) == ORDERS


def test_download_opens_each_file():
    opened = []
    download_order_files(ORDERS[1], open_tab=opened.append)
    assert opened == ['https://f.example.com/2.pdf']


def test_download_without_files_raises():
    with pytest.raises(ValidationError):
        download_order_files(ORDERS[0], open_tab=lambda url: None)


@pytest.fixture
def dashboard_client():
    client = MagicMock()
    client.get_dashboard.return_value = {
        'stats': {'totalOrders': '3', 'totalRevenue': 130.0},
        'orders': [dict(o) for o in ORDERS],
    }
    client.create_order.return_value = 'PB-4'
    return client


@pytest.fixture
def state(dashboard_client, credential):
    return DashboardState(dashboard_client, credential).load()


def test_load_coerces_stats_and_keeps_order(state):
    assert state.stats == {'totalOrders': 3, 'todayOrders': 0, 'totalRevenue': 130, 'todayRevenue': 0}
    assert [o['orderId'] for o in state.orders] == ['PB-3', 'PB-2', 'PB-1']


def test_save_sends_local_edits(state, dashboard_client, credential):
    state.set_price('PB-3', ' 75 ')
    assert state.set_status('PB-3', 'In Progress') is True

    state.save('PB-3')

    dashboard_client.update_order.assert_called_once_with(credential, 'PB-3', 'In Progress', 75.0)
    assert dashboard_client.get_dashboard.call_count == 2


def test_save_rejects_invalid_price(state, dashboard_client):
    state.set_price('PB-3', '-10')

    with pytest.raises(ValidationError):
        state.save('PB-3')
    dashboard_client.update_order.assert_not_called()


def test_set_status_ignores_unknown_values(state):
    assert state.set_status('PB-1', 'Archived') is False
    assert state.find('PB-1')['jobStatus'] == 'In Progress'


def test_unknown_order_raises_key_error(state):
    with pytest.raises(KeyError):
        state.set_price('PB-99', 5)


def test_create_prepends_new_order(state, dashboard_client, credential):
    fields = dict(FIELDS, name='Meera', price='', link='')

    order_id = state.create(fields)

    assert order_id == 'PB-4'
    sent = dashboard_client.create_order.call_args.args[1]
    assert 'price' not in sent and 'link' not in sent
    assert state.orders[0]['orderId'] == 'PB-4'
    assert state.orders[0]['jobStatus'] == 'Pending'
    assert state.orders[0]['files'] == []


def test_create_validates_before_sending(state, dashboard_client):
    with pytest.raises(ValidationError):
        state.create(dict(FIELDS, phone=''))
    dashboard_client.create_order.assert_not_called()
