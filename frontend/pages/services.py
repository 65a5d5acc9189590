# frontend/pages/services.py
import datetime as dt

import pandas as pd
import streamlit as st

from climacare.client import ApiError
from climacare.domain.constants import DISPLAY_ROW_LIMIT, PRIORITIES, SERVICE_STATUSES, SERVICE_TYPES
from common import get_store, require_login, show_error, toast

st.set_page_config(page_title="Serviços", layout="wide")
st.title("🛠️ Serviços")

store = get_store()
require_login(store)

try:
    machines = store.machines()
    technicians = store.technicians()
except ApiError as e:
    show_error(e)
    st.stop()

if not machines or not technicians:
    st.warning("Cadastre ao menos uma máquina e um técnico antes de agendar serviços.")
    st.stop()

machine_opts = {f'{m["codigo"]} - {m["modelo"]}': m["id"] for m in machines}
tech_opts = {t["nome"]: t["id"] for t in technicians}

# ===== 1) Agendamento =====
st.subheader("➕ Agendar serviço")
with st.form("form_service", clear_on_submit=True):
    c1, c2, c3 = st.columns(3)
    maquina = c1.selectbox("Máquina", list(machine_opts))
    tecnico = c2.selectbox("Técnico", list(tech_opts))
    tipo = c3.selectbox("Tipo", SERVICE_TYPES)
    descricao = st.text_input("Descrição do serviço")
    c1, c2, c3, c4 = st.columns(4)
    dia = c1.date_input("Data", dt.date.today())
    hora = c2.time_input("Hora", dt.time(9, 0))
    prioridade = c3.selectbox("Prioridade", PRIORITIES, index=2)
    custo = c4.text_input("Custo (R$)", placeholder="150,00")
    submitted = st.form_submit_button("Agendar")
if submitted:
    try:
        store.create_service({
            "maquinaId": machine_opts[maquina],
            "tecnicoId": tech_opts[tecnico],
            "tipoServico": tipo,
            "descricaoServico": descricao,
            "dataAgendamento": dt.datetime.combine(dia, hora).isoformat(),
            "prioridade": prioridade,
            "custo": custo or None,
        })
        toast("Serviço agendado")
    except ApiError as e:
        show_error(e)

st.divider()

# ===== 2) Lista =====
st.subheader("📋 Serviços")
try:
    df = pd.DataFrame(store.services())
except ApiError as e:
    show_error(e)
    st.stop()

if df.empty:
    st.info("Nenhum serviço registrado.")
    st.stop()

cols = ["dataAgendamento", "tipoServico", "descricaoServico", "tecnicoNome", "status", "prioridade", "custo"]
st.dataframe(df[[c for c in cols if c in df.columns]].head(DISPLAY_ROW_LIMIT), use_container_width=True, height=360)
if len(df) > DISPLAY_ROW_LIMIT:
    st.caption(f"Exibindo {DISPLAY_ROW_LIMIT} de {len(df)} serviços.")

# ===== 3) Status =====
st.subheader("✏️ Atualizar status")
rows = df.head(DISPLAY_ROW_LIMIT).to_dict("records")
options = {f'{r["dataAgendamento"][:16]} · {r["tipoServico"]} · {r["descricaoServico"][:40]}': r for r in rows}
c1, c2, c3 = st.columns([3, 1, 1])
label = c1.selectbox("Serviço", list(options))
new_status = c2.selectbox("Novo status", SERVICE_STATUSES)
if c3.button("Salvar"):
    changes = {"status": new_status}
    if new_status == "CONCLUIDO" and not options[label].get("dataConclusao"):
        changes["dataConclusao"] = dt.datetime.now().isoformat(timespec="seconds")
    try:
        store.update_service(options[label]["id"], changes)
        toast("Status atualizado")
    except ApiError as e:
        show_error(e)

with st.expander("Histórico do serviço selecionado"):
    try:
        hist = store.api.get(f'/api/services/{options[label]["id"]}/history')
        st.dataframe(pd.DataFrame(hist), use_container_width=True)
    except ApiError as e:
        show_error(e)
