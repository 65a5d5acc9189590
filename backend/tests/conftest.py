# backend/tests/conftest.py
import os

# banco em memória antes de importar a aplicação
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["AUTO_CREATE_TABLES"] = "0"


import pytest
from fastapi.testclient import TestClient

from climacare.core.db import Base, engine
from climacare.main import app



@pytest.fixture()
def client():
    Base.metadata.create_all(bind=engine)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def auth_headers(client):
    r = client.post("/api/auth/register", json={
        "username": "tester",
        "password": "segredo123",
        "email": "tester@example.com",
        "name": "Tester",
    })
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}


@pytest.fixture()
def make_machine(client, auth_headers):
    def _make(codigo="AC-001", **extra):
        payload = {"codigo": codigo, "modelo": "Split 12000", "marca": "Springer", **extra}
        r = client.post("/api/machines", json=payload, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]
    return _make


@pytest.fixture()
def make_technician(client, auth_headers):
    def _make(nome="João Silva", **extra):
        payload = {"nome": nome, "especialidade": "Refrigeração", "telefone": "11 98888-0001", **extra}
        r = client.post("/api/technicians", json=payload, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()["data"]
    return _make


