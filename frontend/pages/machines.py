# frontend/pages/machines.py
import pandas as pd
import streamlit as st

from climacare.client import ApiError
from climacare.domain.constants import LOCATION_TYPES, MACHINE_STATUSES, MACHINE_TYPES, MACHINE_VOLTAGES
from common import get_store, require_login, show_error, toast

st.set_page_config(page_title="Máquinas", layout="wide")
st.title("🏷️ Máquinas")

store = get_store()
require_login(store)

# ===== 1) Cadastro =====
st.subheader("➕ Nova máquina")
with st.form("form_machine", clear_on_submit=True):
    c1, c2, c3 = st.columns(3)
    codigo = c1.text_input("Código", placeholder="AC-001")
    modelo = c2.text_input("Modelo")
    marca = c3.text_input("Marca")
    c1, c2, c3 = st.columns(3)
    tipo = c1.selectbox("Tipo", MACHINE_TYPES)
    btu = c2.number_input("Capacidade (BTU)", min_value=1000, step=1000, value=9000)
    voltagem = c3.selectbox("Voltagem", MACHINE_VOLTAGES, index=1)
    c1, c2, c3 = st.columns(3)
    loc_tipo = c1.selectbox("Local", LOCATION_TYPES)
    loc_desc = c2.text_input("Descrição do local")
    filial = c3.text_input("Filial", value="Matriz")
    submitted = st.form_submit_button("Cadastrar")
if submitted:
    try:
        store.create_machine({
            "codigo": codigo, "modelo": modelo, "marca": marca, "tipo": tipo,
            "capacidadeBTU": int(btu), "voltagem": voltagem,
            "localizacaoTipo": loc_tipo, "localizacaoDescricao": loc_desc, "filial": filial,
        })
        toast(f"Máquina {codigo} cadastrada")
    except ApiError as e:
        show_error(e)

st.divider()

# ===== 2) Lista =====
st.subheader("📋 Máquinas cadastradas")
try:
    df = pd.DataFrame(store.machines())
except ApiError as e:
    show_error(e)
    st.stop()

if df.empty:
    st.info("Nenhuma máquina cadastrada.")
    st.stop()

cols = ["codigo", "modelo", "marca", "tipo", "capacidadeBTU", "filial", "localizacaoDescricao", "status"]
st.dataframe(df[[c for c in cols if c in df.columns]], use_container_width=True, height=320)

# ===== 3) Status / exclusão =====
st.subheader("✏️ Alterar status ou excluir")
options = {f'{r["codigo"]} - {r["modelo"]}': r["id"] for r in df.to_dict("records")}
c1, c2, c3, c4 = st.columns([2, 1, 1, 1])
label = c1.selectbox("Máquina", list(options))
new_status = c2.selectbox("Status", MACHINE_STATUSES)
if c3.button("Salvar status"):
    try:
        store.update_machine(options[label], {"status": new_status})
        toast("Status atualizado")
    except ApiError as e:
        show_error(e)
if c4.button("Excluir", type="primary"):
    try:
        store.delete_machine(options[label])
        toast("Máquina excluída (serviços removidos junto)", icon="🗑️")
    except ApiError as e:
        show_error(e)
