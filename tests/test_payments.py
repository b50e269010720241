"""
Receipt/payment dialog tests
============================

One user submit must produce at most one PUT to the payment-fields
endpoint, and nothing at all when the session holds no token.
"""

import io

import pytest

from deliverydesk.modules.orders.models import OrderDetails
from deliverydesk.modules.payments.service import ActionResult, can_submit

DIALOG_URL = "/admin/delivered-orders/b2/receipt"
PAYMENT_URL = "https://orders.example.test/api/orders/b2/payment-fields"


def put_calls(api_session):
    return [c for c in api_session.request.call_args_list if c.args[0] == "PUT"]


@pytest.fixture
def pending_order():
    return {"order": {"_id": "b2", "orderNo": "ORD-200", "totalAmount": 99, "paymentStatus": "Pending"}}


# ---------------------------------------------------------------------------
# Opening the dialog
# ---------------------------------------------------------------------------

def test_dialog_loads_order_summary(admin_client, api_session, respond, pending_order):
    api_session.request.return_value = respond(200, pending_order)

    html = admin_client.get(DIALOG_URL).get_data(as_text=True)

    args, kwargs = api_session.request.call_args
    assert args == ("GET", "https://orders.example.test/api/orders/b2")
    assert kwargs["headers"] == {"Authorization": "Bearer secret-token"}
    assert "ORD-200" in html
    assert "₹99.00" in html
    assert 'type="submit" disabled' not in html


def test_dialog_disables_submit_for_paid_order(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {"_id": "b2", "orderNo": "ORD-200", "paymentStatus": "Paid"})

    html = admin_client.get(DIALOG_URL).get_data(as_text=True)

    assert 'type="submit" disabled' in html
    assert 'name="payment_status" value="Paid"' in html


def test_dialog_form_locks_submit_while_in_flight(admin_client, api_session, respond, pending_order):
    api_session.request.return_value = respond(200, pending_order)

    html = admin_client.get(DIALOG_URL).get_data(as_text=True)

    assert "data-disable-on-submit" in html
    assert "b.disabled = true" in html
    assert "Processing..." in html


def test_dialog_without_token_makes_no_request(admin_client_without_token, api_session):
    html = admin_client_without_token.get(DIALOG_URL).get_data(as_text=True)

    api_session.request.assert_not_called()
    assert "Authentication token not found." in html
    assert "result-failure" in html


def test_dialog_load_failure_shows_generic_message(admin_client, api_session, respond):
    api_session.request.return_value = respond(500, {"message": "boom"})

    html = admin_client.get(DIALOG_URL).get_data(as_text=True)

    assert "Failed to load order details." in html
    assert "boom" not in html


def test_dialog_close_link_keeps_filters(admin_client, api_session, respond, pending_order):
    api_session.request.return_value = respond(200, pending_order)

    html = admin_client.get(DIALOG_URL + "?q=hub").get_data(as_text=True)

    assert 'href="/admin/delivered-orders/?q=hub"' in html
    assert 'name="q" value="hub"' in html


# ---------------------------------------------------------------------------
# Submitting
# ---------------------------------------------------------------------------

def test_submit_without_token_makes_no_request(admin_client_without_token, api_session):
    response = admin_client_without_token.post(DIALOG_URL, data={})

    api_session.request.assert_not_called()
    assert "Authentication token not found." in response.get_data(as_text=True)


def test_submit_with_file_sends_one_multipart_request(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {"ok": True})

    response = admin_client.post(
        DIALOG_URL,
        data={"uploadReceipt": (io.BytesIO(b"%PDF-1.4"), "receipt.pdf"), "payment": "Unpaid"},
        content_type="multipart/form-data",
    )
    html = response.get_data(as_text=True)

    assert api_session.request.call_count == 1
    args, kwargs = api_session.request.call_args
    assert args == ("PUT", PAYMENT_URL)
    assert kwargs["headers"] == {"Authorization": "Bearer secret-token"}
    assert kwargs["files"]["uploadReceipt"][0] == "receipt.pdf"
    assert kwargs["data"] == {"paymentStatus": "Paid"}
    assert "json" not in kwargs

    assert "Receipt uploaded successfully!" in html
    assert 'content="1.5;url=/admin/delivered-orders/?payment=Unpaid"' in html


def test_submit_without_file_sends_one_json_request(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {})

    html = admin_client.post(DIALOG_URL, data={"payment_status": "Pending"}).get_data(as_text=True)

    assert api_session.request.call_count == 1
    args, kwargs = api_session.request.call_args
    assert args == ("PUT", PAYMENT_URL)
    assert kwargs["json"] == {"paymentStatus": "Paid"}
    assert "files" not in kwargs
    assert "Order marked as paid successfully!" in html
    assert 'url=/admin/delivered-orders/"' in html


def test_submit_surfaces_server_message(admin_client, api_session, respond, pending_order):
    api_session.request.side_effect = [
        respond(409, {"message": "Order already paid"}),
        respond(200, pending_order),
    ]

    html = admin_client.post(DIALOG_URL, data={}).get_data(as_text=True)

    assert len(put_calls(api_session)) == 1
    assert "Order already paid" in html
    assert "result-failure" in html
    assert "http-equiv" not in html


def test_submit_unparseable_error_body_falls_back(admin_client, api_session, respond, pending_order):
    api_session.request.side_effect = [
        respond(500, raise_json=True),
        respond(200, pending_order),
    ]

    html = admin_client.post(DIALOG_URL, data={}).get_data(as_text=True)

    assert len(put_calls(api_session)) == 1
    assert "Failed to mark order as paid" in html


def test_submit_refused_when_already_paid(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {"_id": "b2", "paymentStatus": "Paid"})

    html = admin_client.post(DIALOG_URL, data={"payment_status": "Paid"}).get_data(as_text=True)

    assert put_calls(api_session) == []
    assert "Order is already marked as paid." in html


def test_submit_escapes_order_id_in_api_path(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {})

    admin_client.post("/admin/delivered-orders/b2%23/receipt", data={})

    puts = put_calls(api_session)
    assert len(puts) == 1
    assert puts[0].args[1] == "https://orders.example.test/api/orders/b2%23/payment-fields"


def test_empty_file_field_counts_as_no_file(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {})

    admin_client.post(
        DIALOG_URL,
        data={"uploadReceipt": (io.BytesIO(b""), "")},
        content_type="multipart/form-data",
    )

    args, kwargs = api_session.request.call_args
    assert kwargs["json"] == {"paymentStatus": "Paid"}


# ---------------------------------------------------------------------------
# Submit guard and result type
# ---------------------------------------------------------------------------

def test_can_submit():
    unpaid = OrderDetails(id="1", payment_status="Pending")
    paid = OrderDetails(id="1", payment_status="Paid")

    assert can_submit(unpaid)
    assert can_submit(None)
    assert not can_submit(paid)


def test_action_result_is_tagged_not_sniffed():
    failure = ActionResult.failure("Receipt uploaded successfully!")
    success = ActionResult.success("Error text from a happy path")
    assert not failure.is_success
    assert success.is_success
    assert success.to_dict() == {"success": True, "message": "Error text from a happy path"}


# ---------------------------------------------------------------------------
# JSON endpoints
# ---------------------------------------------------------------------------

def test_api_order_details(admin_client, api_session, respond, pending_order):
    api_session.request.return_value = respond(200, pending_order)

    data = admin_client.get("/admin/delivered-orders/api/order/b2").get_json()

    assert data["success"] is True
    assert data["order"]["payment_status"] == "Pending"
    assert data["order"]["is_paid"] is False


def test_api_order_details_without_token(admin_client_without_token, api_session):
    response = admin_client_without_token.get("/admin/delivered-orders/api/order/b2")
    assert response.status_code == 401
    api_session.request.assert_not_called()


def test_api_mark_paid_failure(admin_client, api_session, respond):
    api_session.request.return_value = respond(409, {"message": "Order already paid"})

    response = admin_client.post("/admin/delivered-orders/api/order/b2/mark-paid")

    assert response.status_code == 502
    assert response.get_json() == {"success": False, "message": "Order already paid"}
    assert api_session.request.call_count == 1


def test_api_mark_paid_success(admin_client, api_session, respond):
    api_session.request.return_value = respond(200, {})

    response = admin_client.post("/admin/delivered-orders/api/order/b2/mark-paid")

    assert response.status_code == 200
    assert response.get_json() == {"success": True, "message": "Order marked as paid successfully!"}


def test_api_mark_paid_without_token(admin_client_without_token, api_session):
    response = admin_client_without_token.post("/admin/delivered-orders/api/order/b2/mark-paid")
    assert response.status_code == 401
    api_session.request.assert_not_called()
