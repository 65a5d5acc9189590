# backend/tests/factories.py
from datetime import datetime

from climacare.reporting import MachineRecord, ServiceRecord


# ---- registros para os testes puros ----

def machine(id="m1", codigo="AC-001", modelo="Split", filial="Matriz", **kw):
    return MachineRecord(id=id, codigo=codigo, modelo=modelo, filial=filial, **kw)


_seq = iter(range(1, 1_000_000))


def service(
    maquina_id="m1",
    tecnico_nome="João",
    tipo_servico="CORRETIVA",
    status="CONCLUIDO",
    data_agendamento=datetime(2025, 1, 15, 10, 0),
    custo=None,
    **kw,
):
    kw.setdefault("id", f"s{next(_seq)}")
    kw.setdefault("tecnico_id", "t-" + (tecnico_nome or "x"))
    kw.setdefault("prioridade", "MEDIA")
    kw.setdefault("descricao_servico", "Serviço")
    return ServiceRecord(
        maquina_id=maquina_id,
        tecnico_nome=tecnico_nome,
        tipo_servico=tipo_servico,
        status=status,
        data_agendamento=data_agendamento,
        custo=custo,
        **kw,
    )
