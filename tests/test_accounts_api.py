import pytest


def _doctor_payload(email="grey@clinic.io", **overrides):
    body = {
        "name": "Meredith",
        "surname": "Grey",
        "email": email,
        "phone": "5551234567",
        "address": {
            "street": "1 Main St",
            "city": "Seattle",
            "state": "WA",
            "zipCode": "98101",
            "country": "USA",
        },
        "dateOfBirth": "1980-01-01",
        "gender": "Female",
        "specialization": "Surgery",
        "password": "surgeon1",
    }
    body.update(overrides)
    return body


@pytest.fixture
def admin(make_account, login):
    admin_id = make_account("admin", "admin@clinic.io")
    return admin_id, login("admin@clinic.io")


def test_admin_creates_doctor_who_can_sign_in(client, admin, login):
    _, headers = admin
    res = client.post("/doctors", json=_doctor_payload(), headers=headers)
    assert res.status_code == 201, res.text
    doctor = res.json()["data"]
    assert doctor["role"] == "doctor"
    assert doctor["address"]["zipCode"] == "98101"
    assert "password" not in doctor and "hashedPassword" not in doctor

    doctor_headers = login("grey@clinic.io", "surgeon1")
    res = client.get("/doctors/me", headers=doctor_headers)
    assert res.json()["data"]["id"] == doctor["id"]


def test_doctor_creation_validation(client, admin):
    _, headers = admin
    res = client.post("/doctors", json=_doctor_payload(phone="123"), headers=headers)
    assert res.status_code == 400
    assert "phone" in res.json()["error"]
    assert client.post("/doctors", json=_doctor_payload(surname="Li"), headers=headers).status_code == 400
    assert client.post("/doctors", json=_doctor_payload(password=None), headers=headers).status_code == 400
    client.post("/doctors", json=_doctor_payload(), headers=headers)
    res = client.post("/doctors", json=_doctor_payload(), headers=headers)
    assert res.status_code == 400
    assert res.json()["error"] == "Email already registered."


def test_admin_routes_reject_other_roles(client, make_account, login):
    make_account("patient", "pat@mail.io")
    headers = login("pat@mail.io")
    assert client.get("/admins", headers=headers).status_code == 403
    assert client.get("/doctors", headers=headers).status_code == 403
    assert client.get("/patients", headers=headers).status_code == 403


def test_admin_list_excludes_self_and_self_delete_is_forbidden(client, admin, make_account):
    admin_id, headers = admin
    other_id = make_account("admin", "second@clinic.io")
    res = client.get("/admins", headers=headers)
    assert [a["id"] for a in res.json()["data"]] == [other_id]
    assert client.delete(f"/admins/{admin_id}", headers=headers).status_code == 403
    assert client.delete(f"/admins/{other_id}", headers=headers).status_code == 200
    assert client.get(f"/admins/{other_id}", headers=headers).status_code == 404


def test_admin_password_reset(client, admin, make_account, login):
    _, headers = admin
    other_id = make_account("admin", "second@clinic.io")
    res = client.patch(f"/admins/{other_id}/password", json={"newPassword": "abc"}, headers=headers)
    assert res.status_code == 400
    res = client.patch(f"/admins/{other_id}/password", json={"newPassword": "brandnew"}, headers=headers)
    assert res.status_code == 200
    login("second@clinic.io", "brandnew")


def test_doctor_directory_visible_to_patients(client, make_account, login):
    make_account("doctor", "doc@clinic.io", name="Ada", surname="Lovelace", specialization="Cardiology")
    make_account("patient", "pat@mail.io")
    res = client.get("/doctors/directory", headers=login("pat@mail.io"))
    assert res.status_code == 200
    entry = res.json()["data"][0]
    assert entry["specialization"] == "Cardiology"
    assert set(entry) == {"id", "name", "surname", "specialization", "email"}


def test_doctor_password_endpoint_is_self_only(client, make_account, login):
    me = make_account("doctor", "me@clinic.io", password="oldpass1")
    other = make_account("doctor", "other@clinic.io")
    headers = login("me@clinic.io", "oldpass1")
    body = {"currentPassword": "oldpass1", "newPassword": "newpass1"}
    assert client.put(f"/doctors/{other}/password", json=body, headers=headers).status_code == 403
    wrong = {"currentPassword": "nope", "newPassword": "newpass1"}
    assert client.patch(f"/doctors/{me}/password", json=wrong, headers=headers).status_code == 401
    assert client.patch(f"/doctors/{me}/password", json=body, headers=headers).status_code == 200
    login("me@clinic.io", "newpass1")


def test_patient_self_service(client, make_account, login):
    make_account("patient", "pat@mail.io", password="patientpw")
    make_account("patient", "taken@mail.io")
    headers = login("pat@mail.io", "patientpw")

    res = client.put("/patients/me", json={"address": {"city": "Austin"}, "dateOfBirth": "1990-02-03"}, headers=headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["address"]["city"] == "Austin"
    assert data["dateOfBirth"] == "1990-02-03"

    assert client.put("/patients/me", json={"email": "taken@mail.io"}, headers=headers).status_code == 409
    assert client.put("/patients/me", json={"dateOfBirth": "03/02/1990"}, headers=headers).status_code == 400

    short = {"currentPassword": "patientpw", "newPassword": "short"}
    assert client.put("/patients/me/password", json=short, headers=headers).status_code == 400
    ok = {"currentPassword": "patientpw", "newPassword": "longenough"}
    assert client.put("/patients/me/password", json=ok, headers=headers).status_code == 200


def test_doctor_cannot_use_patient_profile(client, make_account, login):
    make_account("doctor", "doc@clinic.io")
    assert client.get("/patients/me", headers=login("doc@clinic.io")).status_code == 403


def test_admin_updates_patient(client, admin, make_account):
    _, headers = admin
    patient_id = make_account("patient", "pat@mail.io")
    make_account("patient", "taken@mail.io")
    res = client.patch(f"/patients/{patient_id}", json={"name": "Patricia", "password": "ignored"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Patricia"
    assert client.put(f"/patients/{patient_id}", json={"email": "taken@mail.io"}, headers=headers).status_code == 409
    assert client.get("/patients/not-a-uuid", headers=headers).status_code == 400


def test_null_required_fields_are_rejected_on_admin_update(client, admin, make_account):
    _, headers = admin
    other_id = make_account("admin", "second@clinic.io", name="Second", surname="Admin")
    res = client.put(f"/admins/{other_id}", json={"email": None}, headers=headers)
    assert res.status_code == 400
    assert res.json()["success"] is False
    res = client.put(f"/admins/{other_id}", json={"name": None, "surname": None}, headers=headers)
    assert res.status_code == 400

    record = client.get(f"/admins/{other_id}", headers=headers).json()["data"]
    assert record["email"] == "second@clinic.io"
    assert record["name"] == "Second"
    assert record["surname"] == "Admin"


def test_null_fields_on_own_patient_profile(client, make_account, login):
    make_account("patient", "pat@mail.io", name="Pat", surname="Smith", phone="5551234567")
    headers = login("pat@mail.io")
    assert client.put("/patients/me", json={"email": None}, headers=headers).status_code == 400
    assert client.put("/patients/me", json={"name": None}, headers=headers).status_code == 400

    # Nullable columns given as null are left untouched
    res = client.put("/patients/me", json={"phone": None, "gender": "Male"}, headers=headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["phone"] == "5551234567"
    assert data["gender"] == "Male"
    assert data["email"] == "pat@mail.io"
