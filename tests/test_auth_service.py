import pytest
from fastapi import HTTPException

from hms.application.services.auth_service import AuthService
from tests.fakes import FakeAccounts, PlainHasher


def _status_of(fn):
    with pytest.raises(HTTPException) as e:
        fn()
    return e.value.status_code


def test_register_patient():
    accounts = FakeAccounts()
    svc = AuthService(accounts=accounts, hasher=PlainHasher())
    patient = svc.register_patient("Pat", "Smith", "pat@mail.io", "password1")
    assert patient.role == "patient"
    assert accounts.get("patient", patient.id).hashed_password == "hashed:password1"


def test_register_rejects_missing_fields():
    svc = AuthService(accounts=FakeAccounts(), hasher=PlainHasher())
    assert _status_of(lambda: svc.register_patient("Pat", None, "pat@mail.io", "pw")) == 400


def test_register_rejects_email_used_by_any_role():
    accounts = FakeAccounts()
    accounts.add("doctor", "taken@clinic.io")
    svc = AuthService(accounts=accounts, hasher=PlainHasher())
    assert _status_of(lambda: svc.register_patient("Pat", "Smith", "taken@clinic.io", "pw")) == 409


def test_authenticate_records_login():
    accounts = FakeAccounts()
    doctor = accounts.add("doctor", "doc@clinic.io", password="pw123456")
    svc = AuthService(accounts=accounts, hasher=PlainHasher())
    account = svc.authenticate("doc@clinic.io", "pw123456")
    assert account.id == doctor.id
    assert account.role == "doctor"
    assert accounts.logins == [doctor.id]


def test_authenticate_prefers_admin_over_patient():
    accounts = FakeAccounts()
    admin = accounts.add("admin", "same@x.io", password="adminpw")
    accounts.add("patient", "same@x.io", password="patientpw")
    svc = AuthService(accounts=accounts, hasher=PlainHasher())
    assert svc.authenticate("same@x.io", "adminpw").id == admin.id
    assert _status_of(lambda: svc.authenticate("same@x.io", "patientpw")) == 401


def test_authenticate_failures():
    accounts = FakeAccounts()
    accounts.add("patient", "p@mail.io", password="rightpw")
    svc = AuthService(accounts=accounts, hasher=PlainHasher())
    assert _status_of(lambda: svc.authenticate("", "x")) == 400
    assert _status_of(lambda: svc.authenticate("p@mail.io", "wrongpw")) == 401
    assert _status_of(lambda: svc.authenticate("nobody@mail.io", "rightpw")) == 401
    assert accounts.logins == []
