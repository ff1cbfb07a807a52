from datetime import date, timedelta

import pytest


@pytest.fixture
def people(make_account, login):
    doctor_id = make_account("doctor", "doc@clinic.io", name="Gregory", surname="House", specialization="Diagnostics")
    other_doctor_id = make_account("doctor", "wilson@clinic.io", name="James", surname="Wilson")
    patient_id = make_account("patient", "pat@mail.io")
    other_patient_id = make_account("patient", "other@mail.io")
    make_account("admin", "admin@clinic.io")
    return {
        "doctor": doctor_id,
        "other_doctor": other_doctor_id,
        "patient": patient_id,
        "other_patient": other_patient_id,
        "patient_auth": login("pat@mail.io"),
        "other_patient_auth": login("other@mail.io"),
        "doctor_auth": login("doc@clinic.io"),
        "other_doctor_auth": login("wilson@clinic.io"),
        "admin_auth": login("admin@clinic.io"),
    }


def _tomorrow() -> str:
    return (date.today() + timedelta(days=1)).strftime("%Y-%m-%d")


def _book(client, people, headers=None, **overrides):
    body = {
        "doctorId": people["doctor"],
        "patientId": people["patient"],
        "date": _tomorrow(),
        "time": "10:00",
        "reason": "Annual check-up visit",
    }
    body.update(overrides)
    return client.post("/appointments", json=body, headers=headers or people["patient_auth"])


def test_requires_authentication(client):
    res = client.get("/appointments")
    assert res.status_code == 401
    assert res.json() == {"success": False, "data": None, "error": "Unauthorized: Authentication required."}


def test_garbage_token_is_unauthorized(client):
    res = client.get("/appointments", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_booking_lifecycle(client, people):
    res = _book(client, people, status="Completed")
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Appointment booked successfully!"
    appt = body["data"]
    assert appt["status"] == "Pending"
    assert appt["doctor"]["specialization"] == "Diagnostics"
    assert appt["patient"]["id"] == people["patient"]

    res = client.put(f"/appointments/{appt['id']}", headers=people["admin_auth"], json={
        "patient": people["patient"],
        "doctor": people["doctor"],
        "date": appt["date"],
        "time": appt["time"],
        "reason": appt["reason"],
        "status": "Scheduled",
    })
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "Scheduled"

    res = client.delete(f"/appointments/{appt['id']}", headers=people["admin_auth"])
    assert res.status_code == 200
    assert res.json()["message"] == "Appointment deleted successfully!"

    res = client.get("/appointments", headers=people["patient_auth"])
    assert res.json()["data"] == []


def test_listing_is_scoped(client, people):
    mine = _book(client, people).json()["data"]["id"]
    _book(client, people, headers=people["other_patient_auth"], patientId=people["other_patient"], doctorId=people["other_doctor"])

    def ids(headers):
        return [a["id"] for a in client.get("/appointments", headers=headers).json()["data"]]

    assert ids(people["patient_auth"]) == [mine]
    assert ids(people["doctor_auth"]) == [mine]
    assert len(ids(people["admin_auth"])) == 2
    assert client.get(f"/appointments/{mine}", headers=people["other_patient_auth"]).status_code == 404
    assert client.get(f"/appointments/{mine}", headers=people["doctor_auth"]).status_code == 200


def test_booking_for_someone_else_is_forbidden(client, people):
    res = _book(client, people, patientId=people["other_patient"])
    assert res.status_code == 403
    assert res.json()["success"] is False


def test_only_patients_book(client, people):
    assert _book(client, people, headers=people["doctor_auth"]).status_code == 403
    assert _book(client, people, headers=people["admin_auth"]).status_code == 403


def test_booking_validation(client, people):
    yesterday = (date.today() - timedelta(days=1)).strftime("%Y-%m-%d")
    assert _book(client, people, date=yesterday).status_code == 400
    assert _book(client, people, reason="too short").status_code == 400
    assert _book(client, people, reason="ten chars!").status_code == 201
    assert _book(client, people, time="7pm").status_code == 400
    assert _book(client, people, doctorId="abc").status_code == 400
    assert _book(client, people, doctorId="9a1d2c3b-4e5f-4a6b-8c7d-0e1f2a3b4c5d").status_code == 404


def test_only_admin_mutates(client, people):
    appt_id = _book(client, people).json()["data"]["id"]
    assert client.delete(f"/appointments/{appt_id}", headers=people["patient_auth"]).status_code == 403
    res = client.patch(f"/appointments/{appt_id}", headers=people["doctor_auth"], json={"status": "Completed"})
    assert res.status_code == 403


def test_update_requires_every_field(client, people):
    appt_id = _book(client, people).json()["data"]["id"]
    res = client.patch(f"/appointments/{appt_id}", headers=people["admin_auth"], json={"status": "Completed"})
    assert res.status_code == 400


def test_delete_missing_is_not_found(client, people):
    res = client.delete("/appointments/9a1d2c3b-4e5f-4a6b-8c7d-0e1f2a3b4c5d", headers=people["admin_auth"])
    assert res.status_code == 404
    assert res.json()["error"] == "Appointment not found."


def test_deleting_patient_removes_their_appointments(client, people):
    _book(client, people)
    res = client.delete(f"/patients/{people['patient']}", headers=people["admin_auth"])
    assert res.status_code == 200
    assert client.get("/appointments", headers=people["admin_auth"]).json()["data"] == []


def _admin_update(client, people, appt, **overrides):
    body = {
        "patient": people["patient"],
        "doctor": people["doctor"],
        "date": appt["date"],
        "time": appt["time"],
        "reason": appt["reason"],
        "status": "Scheduled",
    }
    body.update(overrides)
    return client.put(f"/appointments/{appt['id']}", headers=people["admin_auth"], json=body)


def test_update_without_notes_keeps_them(client, people):
    appt = _book(client, people, notes="allergic to penicillin").json()["data"]
    res = _admin_update(client, people, appt)
    assert res.status_code == 200
    assert res.json()["data"]["notes"] == "allergic to penicillin"

    res = _admin_update(client, people, appt, notes="")
    assert res.json()["data"]["notes"] is None


def test_reason_length_counts_whitespace_as_sent(client, people):
    res = _book(client, people, reason="  checkup  ")
    assert res.status_code == 201
    assert res.json()["data"]["reason"] == "  checkup  "
