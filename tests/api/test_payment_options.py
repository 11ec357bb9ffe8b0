"""
GET /api/v1/payment-options tests
"""
from decimal import Decimal

import pytest

URL = "/api/v1/payment-options"


class TestQueryValidation:

    def test_missing_student_id(self, client):
        response = client.get(URL, params={"type": "available"})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == "Student ID is required"

    @pytest.mark.parametrize("params", [{"type": "summary"}, {}])
    def test_invalid_type(self, client, student, params):
        response = client.get(URL, params={"studentId": student.id, **params})

        assert response.status_code == 400
        assert response.json()["detail"]["error"] == (
            'Invalid type parameter. Use "available", "history", or "fee-structure"'
        )


class TestAvailableOptions:

    def test_fresh_student(self, client, student, route, stop_name, fees):
        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        assert response.status_code == 200
        data = response.json()
        assert data["student_id"] == student.id
        assert data["academic_year"] == "2025-26"
        assert data["current_term"] == "2"
        assert data["boarding_stop"] == stop_name
        assert data["route"]["route_number"] == route.route_number
        assert data["paid_terms"] == []
        assert data["has_full_year_payment"] is False

        assert data["fee_structure"]["total_term_fees"] == 3000
        assert data["fee_structure"]["full_year_fee"] == 2850

        options = data["available_options"]
        assert [option["term"] for option in options] == ["1", "2", "3", "full_year"]
        assert options[1]["is_recommended"] is True
        assert options[1]["amount"] == 1000
        assert options[3]["savings"] == 150
        assert options[3]["discount_percent"] == 5
        assert set(data["term_statuses"]) == {"1", "2", "3"}

    def test_legacy_boarding_stop_is_used(self, client, make_student, route, stop_name, fees):
        student = make_student(route, stop_name, use_legacy_stop=True)

        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        assert response.status_code == 200
        assert response.json()["boarding_stop"] == stop_name

    def test_term_without_fee_is_not_offered(self, client, student, route, stop_name, make_fees):
        make_fees(route, stop_name, fees=(0, 1200, 1200))

        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        terms = [option["term"] for option in response.json()["available_options"]]
        assert terms == ["2", "3", "full_year"]

    def test_pending_full_year_marks_all_paid(self, client, student, fees, payment_body):
        created = client.post("/api/v1/payments", json=payment_body("full_year", term=None))
        assert created.status_code == 200

        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        data = response.json()
        assert data["has_full_year_payment"] is True
        assert sorted(data["paid_terms"]) == ["1", "2", "3"]
        assert not any(option["is_available"] for option in data["available_options"])
        assert data["available_options"][-1]["paid_reason"] == "Full Year Payment Pending"

    def test_unknown_student(self, client, db_session):
        response = client.get(URL, params={"studentId": "missing", "type": "available"})

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Student not found"

    def test_student_without_route(self, client, make_student, fees):
        student = make_student(route=None, stop="Somewhere")

        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        assert response.status_code == 404
        assert response.json()["detail"]["code"] == "STUDENT_NOT_FOUND"

    def test_missing_fee_structure(self, client, student):
        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "Fee structure not found"

    def test_fees_of_other_year_are_ignored(self, client, student, route, stop_name, make_fees):
        make_fees(route, stop_name, academic_year="2024-25")

        response = client.get(URL, params={"studentId": student.id, "type": "available"})

        assert response.status_code == 404


class TestFeeStructure:

    def test_fee_structure_view(self, client, student, route, stop_name, make_fees):
        make_fees(route, stop_name, fees=(1200, 1100, 1000), discount=Decimal("10"))

        response = client.get(URL, params={"studentId": student.id, "type": "fee-structure"})

        assert response.status_code == 200
        data = response.json()
        assert data["academic_year"] == "2025-26"
        assert data["route_id"] == route.id
        assert data["term_structure"]["term_2"] == {
            "period": "October 2025 – January 2026",
            "amount": 1100,
            "receipt_color": "blue",
        }
        assert data["term_structure"]["term_3"]["receipt_color"] == "yellow"
        assert data["full_year"] == {
            "amount": 2970,
            "savings": 330,
            "discount_percent": 10,
            "receipt_color": "green",
        }
        assert data["total_if_paid_separately"] == 3300


class TestHistory:

    def test_empty_history(self, client, student):
        response = client.get(URL, params={"studentId": student.id, "type": "history"})

        assert response.status_code == 200
        assert response.json() == []

    def test_history_is_newest_first_and_enriched(self, client, student, route, fees, payment_body):
        first = client.post("/api/v1/payments", json=payment_body("term", "1")).json()
        second = client.post("/api/v1/payments", json=payment_body("term", "2")).json()
        client.post(f"/api/v1/payments/{first['payment_id']}/process", json={"mockResult": "success"})

        response = client.get(URL, params={"studentId": student.id, "type": "history"})

        assert response.status_code == 200
        history = response.json()
        assert [entry["id"] for entry in history] == [second["payment_id"], first["payment_id"]]

        latest, oldest = history
        assert latest["display_description"] == "Term 2 Payment"
        assert latest["period_covered"] == "Term 2"
        assert latest["payment_status"] == "pending"
        assert latest["receipt"] is None
        assert latest["route"]["route_name"] == route.route_name

        assert oldest["payment_status"] == "confirmed"
        assert oldest["receipt"]["receipt_color"] == "white"
        assert oldest["receipt"]["receipt_number"] == oldest["receipt_number"]
