"""
Payment creation, processing, status and receipt endpoint tests
"""
import re

import pytest

PAYMENTS_URL = "/api/v1/payments"


def process(client, payment_id, result="success"):
    return client.post(f"{PAYMENTS_URL}/{payment_id}/process", json={"mockResult": result})


class TestCreatePayment:

    def test_create_term_payment(self, client, fees, payment_body):
        response = client.post(PAYMENTS_URL, json=payment_body("term", "2"))

        assert response.status_code == 200
        data = response.json()
        assert data["payment_id"]
        assert data["amount"] == 1000
        assert data["payment_type"] == "term"
        assert data["covers_terms"] == ["2"]
        assert data["valid_from"] == "2025-10-01"
        assert data["valid_until"] == "2026-02-07"
        assert data["receipt_color"] == "blue"
        assert data["message"] == "Payment record created successfully"

    def test_create_full_year_payment(self, client, fees, payment_body):
        response = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None))

        assert response.status_code == 200
        data = response.json()
        assert data["amount"] == 2850
        assert data["covers_terms"] == ["1", "2", "3"]
        assert data["valid_from"] == "2025-06-01"
        assert data["valid_until"] == "2026-05-31"
        assert data["receipt_color"] == "green"

    def test_payment_is_stored_pending(self, client, db_session, fees, payment_body):
        from app.models.transport import SemesterPayment

        payment_id = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None)).json()["payment_id"]

        payment = db_session.get(SemesterPayment, payment_id)
        assert payment.payment_status.value == "pending"
        assert payment.semester == "1"
        assert payment.payment_method == "upi"
        assert payment.semester_fee_id == fees[0].id

    @pytest.mark.parametrize("missing", ["studentId", "paymentType", "routeId", "stopName"])
    def test_missing_required_field(self, client, fees, payment_body, missing):
        body = payment_body("term", "1")
        body.pop(missing)

        response = client.post(PAYMENTS_URL, json=body)

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "MISSING_REQUIRED_FIELD"

    def test_term_number_required_for_term(self, client, fees, payment_body):
        response = client.post(PAYMENTS_URL, json=payment_body("term", term=None))

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Term number is required for term payments"

    @pytest.mark.parametrize("overrides", [
        {"paymentType": "monthly"},
        {"termNumber": "4"},
        {"paymentMethod": "cryptocurrency-via-carrier-pigeon-network"},
    ])
    def test_unsupported_values_rejected(self, client, fees, payment_body, overrides):
        response = client.post(PAYMENTS_URL, json=payment_body("term", "1", **overrides))

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    def test_unsupported_payment_method_message(self, client, fees, payment_body):
        response = client.post(PAYMENTS_URL, json=payment_body("term", "1", paymentMethod="cheque"))

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == (
            "Invalid payment method. Use one of: upi, card, net_banking, cash, wallet"
        )

    def test_payment_method_is_stored(self, client, db_session, fees, payment_body):
        from app.models.transport import SemesterPayment

        response = client.post(PAYMENTS_URL, json=payment_body("term", "2", paymentMethod="card"))

        assert response.status_code == 200
        payment = db_session.get(SemesterPayment, response.json()["payment_id"])
        assert payment.payment_method == "card"

    def test_unknown_student(self, client, db_session, fees, payment_body):
        from app.models.transport import SemesterPayment

        response = client.post(PAYMENTS_URL, json=payment_body("term", "1", studentId="no-such-student"))

        assert response.status_code == 404
        assert response.json()["detail"] == {
            "error": "Student not found",
            "code": "STUDENT_NOT_FOUND",
        }
        assert db_session.query(SemesterPayment).count() == 0

    def test_zero_fee_term_rejected(self, client, route, stop_name, make_fees, payment_body):
        make_fees(route, stop_name, fees=(0, 1000, 1000))

        response = client.post(PAYMENTS_URL, json=payment_body("term", "1"))

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Invalid fee amount"

    def test_missing_fee_structure(self, client, student, payment_body):
        response = client.post(PAYMENTS_URL, json=payment_body("term", "1"))

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Fee structure not found"

    def test_full_year_without_term_one_row(self, client, route, stop_name, make_fees, payment_body):
        make_fees(route, stop_name, fees=(None, 1000, 1000))

        response = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None))

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Fee record not found for term full_year"

    def test_pending_payment_does_not_block_new_one(self, client, fees, payment_body):
        first = client.post(PAYMENTS_URL, json=payment_body("term", "2"))
        second = client.post(PAYMENTS_URL, json=payment_body("term", "2"))

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["payment_id"] != second.json()["payment_id"]

    def test_confirmed_term_blocks_same_term(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "2")).json()["payment_id"]
        process(client, payment_id)

        response = client.post(PAYMENTS_URL, json=payment_body("term", "2"))

        assert response.status_code == 409
        assert response.json()["detail"] == {
            "error": "Term 2 payment already completed",
            "code": "PAYMENT_NOT_ELIGIBLE",
        }

    def test_confirmed_term_blocks_full_year(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "1")).json()["payment_id"]
        process(client, payment_id)

        response = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None))

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "Cannot pay full year after individual term payments"

    def test_confirmed_full_year_blocks_terms(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None)).json()["payment_id"]
        process(client, payment_id)

        response = client.post(PAYMENTS_URL, json=payment_body("term", "3"))

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "Full year payment already completed"


class TestProcessPayment:

    def test_successful_processing(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "2")).json()["payment_id"]

        response = process(client, payment_id)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["status"] == "confirmed"
        assert re.fullmatch(r"TXN_\d+_[0-9a-z]{9}", data["transaction_id"])
        assert re.fullmatch(r"RCP_2025-26_2_\d{6}", data["receipt_number"])
        assert data["receipt_color"] == "blue"
        assert data["amount"] == 1000
        assert data["failure_reason"] is None

    def test_success_writes_receipt(self, client, db_session, fees, payment_body):
        from app.models.transport import PaymentReceipt

        payment_id = client.post(PAYMENTS_URL, json=payment_body("full_year", term=None)).json()["payment_id"]
        data = process(client, payment_id).json()

        receipt = db_session.query(PaymentReceipt).filter_by(semester_payment_id=payment_id).one()
        assert receipt.receipt_number == data["receipt_number"]
        assert receipt.receipt_color == "green"
        assert receipt.covers_terms == ["1", "2", "3"]

    def test_failed_processing(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "1")).json()["payment_id"]

        response = process(client, payment_id, "failure")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["status"] == "failed"
        assert data["receipt_number"] is None
        assert data["failure_reason"] == "Simulated payment failure for testing"

    def test_failed_payment_frees_the_term(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "1")).json()["payment_id"]
        process(client, payment_id, "failure")

        response = client.post(PAYMENTS_URL, json=payment_body("term", "1"))
        assert response.status_code == 200

    def test_only_pending_payments_are_processed(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "2")).json()["payment_id"]
        process(client, payment_id)

        response = process(client, payment_id)

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "Payment is already confirmed"

    def test_body_defaults_to_success(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "3")).json()["payment_id"]

        response = client.post(f"{PAYMENTS_URL}/{payment_id}/process")

        assert response.status_code == 200
        assert response.json()["status"] == "confirmed"

    def test_unknown_payment(self, client, db_session):
        response = process(client, "does-not-exist")

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Payment not found"


class TestPaymentStatus:

    def test_status_follows_processing(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "2")).json()["payment_id"]

        pending = client.get(f"{PAYMENTS_URL}/{payment_id}/status").json()
        assert pending == {
            "payment_id": payment_id,
            "status": "pending",
            "receipt_number": None,
            "transaction_id": None,
        }

        processed = process(client, payment_id).json()
        confirmed = client.get(f"{PAYMENTS_URL}/{payment_id}/status").json()
        assert confirmed["status"] == "confirmed"
        assert confirmed["receipt_number"] == processed["receipt_number"]
        assert confirmed["transaction_id"] == processed["transaction_id"]

    def test_unknown_payment(self, client, db_session):
        response = client.get(f"{PAYMENTS_URL}/nope/status")
        assert response.status_code == 404


class TestReceipt:

    def test_receipt_pdf(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "2")).json()["payment_id"]
        receipt_number = process(client, payment_id).json()["receipt_number"]

        response = client.get(f"{PAYMENTS_URL}/{payment_id}/receipt")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert receipt_number in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_receipt_number_fallback_for_unprocessed_payment(self, client, fees, payment_body):
        payment_id = client.post(PAYMENTS_URL, json=payment_body("term", "1")).json()["payment_id"]

        response = client.get(f"{PAYMENTS_URL}/{payment_id}/receipt")

        assert response.status_code == 200
        assert f"RCP-{payment_id[-8:].upper()}" in response.headers["content-disposition"]

    def test_unknown_payment(self, client, db_session):
        response = client.get(f"{PAYMENTS_URL}/missing/receipt")
        assert response.status_code == 404


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
