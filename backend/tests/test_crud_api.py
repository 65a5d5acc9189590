# backend/tests/test_crud_api.py
from datetime import date


def _service(client, headers, machine_id, tech_id, **over):
    payload = {
        "maquinaId": machine_id,
        "tecnicoId": tech_id,
        "tipoServico": "CORRETIVA",
        "descricaoServico": "Troca do capacitor",
        "dataAgendamento": "2025-01-11T10:00:00Z",
        **over,
    }
    return client.post("/api/services", json=payload, headers=headers)


# ---------- Máquinas ----------

def test_machine_defaults(make_machine):
    m = make_machine("AC-100")
    assert m["tipo"] == "SPLIT"
    assert m["capacidadeBTU"] == 9000
    assert m["voltagem"] == "V220"
    assert m["localizacaoTipo"] == "SALA"
    assert m["filial"] == "Matriz"
    assert m["status"] == "ATIVO"
    assert m["dataInstalacao"] == date.today().isoformat()


def test_machine_codigo_is_unique(client, auth_headers, make_machine):
    make_machine("AC-001")
    r = client.post("/api/machines", json={"codigo": "AC-001", "modelo": "X", "marca": "Y"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "Já existe uma máquina com este código"

    other = make_machine("AC-002")
    r = client.put(f"/api/machines/{other['id']}", json={"codigo": "AC-001"}, headers=auth_headers)
    assert r.status_code == 400


def test_machine_validation_error(client, auth_headers):
    r = client.post("/api/machines", json={"codigo": "AC-9", "modelo": "X", "marca": "Y", "capacidadeBTU": 0},
                    headers=auth_headers)
    assert r.status_code == 422
    assert r.json()["success"] is False


def test_machine_get_list_update(client, auth_headers, make_machine):
    m = make_machine("AC-001", filial="Centro", capacidadeBTU=12000)
    make_machine("AC-002")

    r = client.get("/api/machines/codigo/AC-001", headers=auth_headers)
    assert r.json()["data"]["id"] == m["id"]
    assert client.get("/api/machines/codigo/ZZ-999", headers=auth_headers).status_code == 404

    r = client.get("/api/machines", params={"filial": "Centro"}, headers=auth_headers)
    assert [x["codigo"] for x in r.json()["data"]] == ["AC-001"]
    assert r.json()["meta"] == {"count": 1}

    r = client.put(f"/api/machines/{m['id']}", json={"status": "DEFEITO"}, headers=auth_headers)
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["status"] == "DEFEITO"
    assert data["capacidadeBTU"] == 12000

    assert client.get("/api/machines/nope", headers=auth_headers).status_code == 404


# ---------- Técnicos ----------

def test_technician_crud(client, auth_headers, make_technician):
    t = make_technician("Ana", email="")
    assert t["status"] == "ATIVO"
    assert t["email"] is None

    r = client.put(f"/api/technicians/{t['id']}", json={"status": "INATIVO"}, headers=auth_headers)
    assert r.json()["data"]["status"] == "INATIVO"

    r = client.delete(f"/api/technicians/{t['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/api/technicians/{t['id']}", headers=auth_headers).status_code == 404


def test_technician_delete_blocked_while_referenced(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    s = _service(client, auth_headers, m["id"], t["id"]).json()["data"]

    r = client.delete(f"/api/technicians/{t['id']}", headers=auth_headers)
    assert r.status_code == 409
    assert r.json()["success"] is False

    client.delete(f"/api/services/{s['id']}", headers=auth_headers)
    assert client.delete(f"/api/technicians/{t['id']}", headers=auth_headers).status_code == 200


# ---------- Serviços ----------

def test_service_create_snapshots_technician(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician("João Silva")
    r = _service(client, auth_headers, m["id"], t["id"], custo="150,90")
    assert r.status_code == 201
    s = r.json()["data"]
    assert s["tecnicoNome"] == "João Silva"
    assert s["status"] == "AGENDADO"
    assert s["prioridade"] == "MEDIA"
    assert s["custo"] == 150.9
    assert s["dataAgendamento"] == "2025-01-11T10:00:00"

    r = client.get(f"/api/services/{s['id']}/history", headers=auth_headers)
    history = r.json()["data"]
    assert [(h["status"], h["observacao"]) for h in history] == [("AGENDADO", "Serviço criado")]
    assert history[0]["createdBy"]


def test_service_references_must_exist(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    r = _service(client, auth_headers, "nao-existe", t["id"])
    assert r.status_code == 404
    assert r.json()["error"] == "Máquina não encontrada"
    r = _service(client, auth_headers, m["id"], "nao-existe")
    assert r.json()["error"] == "Técnico não encontrado"


def test_service_rejects_negative_cost(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    assert _service(client, auth_headers, m["id"], t["id"], custo="-5").status_code == 422


def test_status_update_appends_history(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    s = _service(client, auth_headers, m["id"], t["id"]).json()["data"]

    client.put(f"/api/services/{s['id']}", json={"status": "EM_ANDAMENTO"}, headers=auth_headers)
    client.put(f"/api/services/{s['id']}", json={"observacoes": "sem status"}, headers=auth_headers)
    # qualquer status pode suceder qualquer outro
    r = client.put(f"/api/services/{s['id']}", json={"status": "AGENDADO"}, headers=auth_headers)
    assert r.json()["data"]["status"] == "AGENDADO"

    history = client.get(f"/api/services/{s['id']}/history", headers=auth_headers).json()["data"]
    assert [h["status"] for h in history] == ["AGENDADO", "EM_ANDAMENTO", "AGENDADO"]
    assert [h["observacao"] for h in history][:2] == ["Status atualizado", "Status atualizado"]


def test_technician_name_snapshot_refreshes_only_on_write(client, auth_headers, make_machine, make_technician):
    m, ana, bruno = make_machine(), make_technician("Ana"), make_technician("Bruno")
    s = _service(client, auth_headers, m["id"], ana["id"]).json()["data"]

    client.put(f"/api/technicians/{ana['id']}", json={"nome": "Ana Paula"}, headers=auth_headers)
    got = client.get(f"/api/services/{s['id']}", headers=auth_headers).json()["data"]
    assert got["tecnicoNome"] == "Ana"

    r = client.put(f"/api/services/{s['id']}", json={"tecnicoId": bruno["id"]}, headers=auth_headers)
    assert r.json()["data"]["tecnicoNome"] == "Bruno"


def test_service_lists_by_machine_and_technician(client, auth_headers, make_machine, make_technician):
    m1, m2, t = make_machine("AC-001"), make_machine("AC-002"), make_technician()
    _service(client, auth_headers, m1["id"], t["id"], dataAgendamento="2025-01-01T08:00:00")
    _service(client, auth_headers, m1["id"], t["id"], dataAgendamento="2025-03-01T08:00:00")
    _service(client, auth_headers, m2["id"], t["id"])

    r = client.get(f"/api/machines/{m1['id']}/services", headers=auth_headers)
    dates = [s["dataAgendamento"] for s in r.json()["data"]]
    assert dates == ["2025-03-01T08:00:00", "2025-01-01T08:00:00"]

    r = client.get(f"/api/technicians/{t['id']}/services", headers=auth_headers)
    assert len(r.json()["data"]) == 3

    r = client.get("/api/services", params={"maquinaId": m2["id"]}, headers=auth_headers)
    assert len(r.json()["data"]) == 1


def test_machine_delete_cascades(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    s = _service(client, auth_headers, m["id"], t["id"]).json()["data"]

    r = client.delete(f"/api/machines/{m['id']}", headers=auth_headers)
    assert r.status_code == 200
    assert client.get(f"/api/services/{s['id']}", headers=auth_headers).status_code == 404


def test_maintenance_history(client, auth_headers, make_machine, make_technician):
    m, t = make_machine(), make_technician()
    _service(client, auth_headers, m["id"], t["id"], dataAgendamento="2025-01-01T10:00:00", custo="100")
    _service(client, auth_headers, m["id"], t["id"], dataAgendamento="2025-01-11T10:00:00", custo="50.5")

    r = client.get(f"/api/machines/{m['id']}/maintenance-history", headers=auth_headers)
    rows = r.json()["data"]
    assert [row["daysSinceLastService"] for row in rows] == [0, 10]
    assert [row["totalCost"] for row in rows] == [50.5, 150.5]
    assert rows[0]["service"]["dataAgendamento"] == "2025-01-11T10:00:00"


def test_dashboard_stats(client, auth_headers, make_machine, make_technician):
    m = make_machine("AC-001")
    make_machine("AC-002", status="MANUTENCAO")
    t = make_technician()
    _service(client, auth_headers, m["id"], t["id"], status="CONCLUIDO", custo="100")
    _service(client, auth_headers, m["id"], t["id"], custo="200")
    _service(client, auth_headers, m["id"], t["id"])

    data = client.get("/api/dashboard/stats", headers=auth_headers).json()["data"]
    assert data == {
        "activeMachines": 1,
        "maintenanceMachines": 1,
        "defectMachines": 0,
        "pendingServices": 2,
        "completedServices": 1,
        "totalCost": 300.0,
        "avgServiceCost": 150.0,
    }
