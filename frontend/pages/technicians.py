# frontend/pages/technicians.py
import pandas as pd
import streamlit as st

from climacare.client import ApiError
from climacare.domain.constants import TECHNICIAN_STATUSES
from common import get_store, require_login, show_error, toast

st.set_page_config(page_title="Técnicos", layout="wide")
st.title("🧑‍🔧 Técnicos")

store = get_store()
require_login(store)

st.subheader("➕ Novo técnico")
with st.form("form_technician", clear_on_submit=True):
    c1, c2 = st.columns(2)
    nome = c1.text_input("Nome")
    especialidade = c2.text_input("Especialidade")
    c1, c2 = st.columns(2)
    telefone = c1.text_input("Telefone")
    email = c2.text_input("E-mail (opcional)")
    submitted = st.form_submit_button("Cadastrar")
if submitted:
    try:
        store.create_technician({"nome": nome, "especialidade": especialidade,
                                 "telefone": telefone, "email": email or None})
        toast(f"Técnico {nome} cadastrado")
    except ApiError as e:
        show_error(e)

st.divider()

st.subheader("📋 Equipe")
try:
    df = pd.DataFrame(store.technicians())
except ApiError as e:
    show_error(e)
    st.stop()

if df.empty:
    st.info("Nenhum técnico cadastrado.")
    st.stop()

st.dataframe(df[[c for c in ["nome", "especialidade", "telefone", "email", "status"] if c in df.columns]],
             use_container_width=True, height=300)

options = {r["nome"]: r["id"] for r in df.to_dict("records")}
c1, c2, c3, c4 = st.columns([2, 1, 1, 1])
nome_sel = c1.selectbox("Técnico", list(options))
new_status = c2.selectbox("Status", TECHNICIAN_STATUSES)
if c3.button("Salvar status"):
    try:
        store.update_technician(options[nome_sel], {"status": new_status})
        toast("Status atualizado")
    except ApiError as e:
        show_error(e)
if c4.button("Excluir", type="primary"):
    try:
        store.delete_technician(options[nome_sel])
        toast("Técnico excluído", icon="🗑️")
    except ApiError as e:
        # 409 enquanto houver serviços vinculados
        show_error(e)
