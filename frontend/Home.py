# frontend/Home.py
import time

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from climacare.client import ApiError
from climacare.client.api import normalize_token
from common import DEFAULT_API_BASE, get_store

st.set_page_config(page_title="ClimaCare — Painel", layout="wide")
st.title("❄️ ClimaCare — Painel")

if "jwt" not in st.session_state:
    st.session_state["jwt"] = ""

# --------- Sidebar: Configuração / Login / Saúde ---------
with st.sidebar:
    st.header("Configuração")
    st.text_input("Base da API", value=st.session_state.get("api_base", DEFAULT_API_BASE), key="api_base")

    st.divider()
    st.subheader("Login (JWT)")
    username = st.text_input("Usuário ou e-mail", value="", placeholder="admin", key="user")
    password = st.text_input("Senha", value="", type="password", key="pass")
    c1, c2 = st.columns(2)
    do_login = c1.button("Entrar", key="btn_login")
    do_logout = c2.button("Sair", key="btn_logout")

    store = get_store()
    if do_login:
        try:
            data = store.api.login(username, password)
            st.session_state["jwt"] = normalize_token(data.get("token"))
            st.success(f"Bem-vindo, {data['user'].get('name') or data['user']['username']}.")
        except ApiError as e:
            st.error(f"Falha no login: {e}")
    if do_logout:
        st.session_state["jwt"] = ""
        store.cache.clear()
        st.info("Sessão encerrada.")
    store = get_store()

    st.divider()
    st.subheader("Saúde da API")
    try:
        store.api.health()
        st.success("API: OK")
    except ApiError as e:
        st.error(f"API inacessível: {e}")

if not store.api.token:
    st.info("Entre com usuário e senha para ver o painel.")
    st.stop()

st.button("Atualizar", key="btn_refresh")
status = st.empty()


def _gauge(title: str, value: float, height=220):
    fig = go.Figure(go.Indicator(mode="gauge+number", value=value, title={"text": title},
                                 number={"suffix": "%"}, gauge={"axis": {"range": [0, 100]}}))
    fig.update_layout(margin=dict(l=10, r=10, t=40, b=10), height=height)
    return fig


try:
    status.info("Carregando…")
    with st.spinner("Buscando indicadores…"):
        stats = store.real_time_stats()
        dash = store.api.get("/api/dashboard/stats")

    today, week = stats["today"], stats["week"]
    machines, techs, alerts = stats["machines"], stats["technicians"], stats["alerts"]

    st.subheader("Hoje")
    c1, c2, c3 = st.columns(3)
    c1.metric("Serviços", today["total"])
    c2.metric("Concluídos", today["completed"])
    c3.metric("Pendentes", today["pending"])

    st.subheader("Últimos 7 dias")
    c1, c2 = st.columns([1, 2])
    c1.metric("Serviços", week["total"])
    c1.metric("Concluídos", week["completed"])
    c2.plotly_chart(_gauge("Taxa de conclusão", week["completionRate"]), use_container_width=True, key="gauge_week")

    st.subheader("Máquinas e técnicos")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Máquinas", machines["total"])
    c2.metric("Ativas", machines["active"])
    c3.metric("Com problema", machines["problems"])
    c4.metric("Técnicos ativos", f'{techs["active"]}/{techs["total"]}')

    df_top = pd.DataFrame(techs["topActive"])
    if not df_top.empty:
        fig = go.Figure(data=[go.Bar(x=df_top["name"], y=df_top["count"], text=df_top["count"],
                                     textposition="outside", texttemplate="%{text:.0f}")])
        fig.update_layout(margin=dict(l=10, r=10, t=30, b=10), height=300, title="Técnicos mais ativos (7 dias)")
        st.plotly_chart(fig, use_container_width=True, key="chart_top_techs")

    st.subheader("Alertas")
    c1, c2 = st.columns(2)
    c1.metric("Urgentes em aberto", alerts["urgentServices"])
    c2.metric("Agendados atrasados", alerts["overdueServices"])

    st.subheader("Custos")
    c1, c2 = st.columns(2)
    c1.metric("Custo total", f'R$ {dash["totalCost"]:,.2f}')
    c2.metric("Custo médio por serviço", f'R$ {dash["avgServiceCost"]:,.2f}')

    status.success("Pronto — " + time.strftime("%H:%M:%S"))
except ApiError as ex:
    status.error(f"Erro: {ex}")
    st.info("Dica: confira a base da API e o login na barra lateral.")
