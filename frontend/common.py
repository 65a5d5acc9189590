# frontend/common.py
import os

import streamlit as st
from dotenv import load_dotenv

from climacare.client import ApiClient, ApiError, DataStore, QueryCache
from climacare.client.api import normalize_token

load_dotenv()

DEFAULT_API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")


def get_store() -> DataStore:
    """Um DataStore por sessão do navegador (o cache sobrevive aos reruns)."""
    api_base = (st.session_state.get("api_base") or DEFAULT_API_BASE).strip().rstrip("/")
    token = normalize_token(st.session_state.get("jwt", os.getenv("API_TOKEN", "")))
    store = st.session_state.get("_store")
    if store is None or store.api.base_url != api_base:
        store = DataStore(ApiClient(api_base, token), QueryCache())
        st.session_state["_store"] = store
    store.api.token = token
    return store


def require_login(store: DataStore) -> None:
    with st.sidebar:
        st.info(f"API: {store.api.base_url}")
        st.write("JWT:", "✅ Presente" if store.api.token else "❌ Ausente")
    if not store.api.token:
        st.warning("Faça login na página inicial (sem JWT).")
        st.stop()


def toast(msg: str, icon: str = "✅"):
    st.toast(msg, icon=icon)


def show_error(ex: ApiError):
    st.error(f"Erro: {ex}")
