# frontend/pages/reports.py
import datetime as dt

import altair as alt
import pandas as pd
import streamlit as st

from climacare.client import ApiError
from climacare.domain.constants import DISPLAY_ROW_LIMIT, SERVICE_STATUSES, SERVICE_TYPES
from climacare.reporting import DatePreset, ReportFilters, csv_filename
from common import get_store, require_login, show_error

st.set_page_config(page_title="Relatórios", layout="wide")
st.title("📊 Relatórios")

store = get_store()
require_login(store)

PRESETS = {
    "Últimos 30 dias": DatePreset.LAST_30_DAYS,
    "Hoje": DatePreset.TODAY,
    "Últimos 7 dias": DatePreset.LAST_7_DAYS,
    "Últimos 90 dias": DatePreset.LAST_90_DAYS,
    "Este mês": DatePreset.THIS_MONTH,
    "Mês passado": DatePreset.LAST_MONTH,
    "Personalizado": DatePreset.CUSTOM,
    "Todo o período": None,
}
ALL = "all"

try:
    machines = store.machines()
    technicians = store.technicians()
except ApiError as e:
    show_error(e)
    st.stop()

# --------- Filtros ---------
with st.sidebar:
    st.header("Filtros")
    preset_label = st.selectbox("Período", list(PRESETS))
    preset = PRESETS[preset_label]
    start = end = None
    if preset is DatePreset.CUSTOM:
        start = st.date_input("Início", dt.date.today() - dt.timedelta(days=30))
        end = st.date_input("Fim", dt.date.today())
    branches = sorted({m.get("filial") for m in machines if m.get("filial")})
    branch = st.selectbox("Filial", [ALL, *branches], format_func=lambda v: "Todas" if v == ALL else v)
    status_f = st.selectbox("Status", [ALL, *SERVICE_STATUSES], format_func=lambda v: "Todos" if v == ALL else v)
    type_f = st.selectbox("Tipo de serviço", [ALL, *SERVICE_TYPES], format_func=lambda v: "Todos" if v == ALL else v)
    tech_opts = {"Todos": ALL, **{t["nome"]: t["id"] for t in technicians}}
    tech_f = tech_opts[st.selectbox("Técnico", list(tech_opts))]
    mach_opts = {"Todas": ALL, **{f'{m["codigo"]} - {m["modelo"]}': m["id"] for m in machines}}
    mach_f = mach_opts[st.selectbox("Máquina", list(mach_opts))]
    search = st.text_input("Busca", placeholder="descrição, técnico, código…")

filters = ReportFilters.from_params(
    dateRange=preset.value if preset else None,
    startDate=start,
    endDate=end,
    branchFilter=branch,
    statusFilter=status_f,
    technicianId=tech_f,
    machineId=mach_f,
    serviceType=type_f,
    search=search,
)

try:
    report = store.report(filters)
except ApiError as e:
    show_error(e)
    st.stop()

summary, breakdown = report["summary"], report["breakdown"]

# ===== KPIs =====
c1, c2, c3, c4 = st.columns(4)
c1.metric("Serviços", summary["totalServices"])
c2.metric("Concluídos", summary["completedServices"])
c3.metric("Pendentes", summary["pendingServices"])
c4.metric("Taxa de conclusão", f'{summary["completionRate"]:.2f}%')
c1, c2, c3, c4 = st.columns(4)
c1.metric("Cancelados", summary["canceledServices"])
c2.metric("Urgentes", summary["urgentServices"])
c3.metric("Custo total", f'R$ {summary["totalCost"]:,.2f}')
c4.metric("Custo médio", f'R$ {summary["avgCostPerService"]:,.2f}')


def bar(rows, title, height=280):
    df = pd.DataFrame(rows)
    if df.empty:
        st.info(f"{title}: sem dados.")
        return
    chart = (
        alt.Chart(df, title=title)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Serviços"),
            y=alt.Y("name:N", sort="-x", title=None),
            tooltip=["name", "count"],
        )
        .properties(height=height)
    )
    st.altair_chart(chart, use_container_width=True)


st.divider()
c1, c2 = st.columns(2)
with c1:
    bar(breakdown["byStatus"], "Por status")
    bar(breakdown["topTechnicians"], "Técnicos com mais serviços")
with c2:
    bar(breakdown["byType"], "Por tipo")
    bar(breakdown["topMachines"], "Máquinas com mais serviços")
bar(breakdown["byBranch"], "Por filial", height=200)

# ===== Série mensal =====
monthly = pd.DataFrame(breakdown["monthlyData"])
if not monthly.empty:
    monthly["ordem"] = range(len(monthly))
    long = monthly.melt(id_vars=["label", "ordem"], value_vars=["completed", "pending", "total"],
                        var_name="série", value_name="serviços")
    chart = (
        alt.Chart(long, title="Evolução mensal")
        .mark_line(point=True)
        .encode(
            x=alt.X("label:N", sort=alt.SortField("ordem"), title="Mês"),
            y=alt.Y("serviços:Q"),
            color="série:N",
            tooltip=["label", "série", "serviços"],
        )
    )
    st.altair_chart(chart, use_container_width=True)

# ===== Recomendações =====
st.subheader("💡 Recomendações")
recs = report["recommendations"]
if not recs["highCostMachines"] and not recs["preventiveMaintenanceDue"]:
    st.success("Nenhuma recomendação no momento.")
for item in recs["highCostMachines"]:
    st.warning(item["message"])
for item in recs["preventiveMaintenanceDue"]:
    st.info(item["message"])

# ===== Tabela + CSV =====
st.subheader("📋 Serviços")
rows = report["services"]
df = pd.DataFrame(rows[:DISPLAY_ROW_LIMIT])
if df.empty:
    st.info("Nenhum serviço encontrado para os filtros.")
else:
    st.dataframe(df.drop(columns=["id", "maquinaId", "tecnicoId"], errors="ignore"),
                 use_container_width=True, height=400)
    if len(rows) > DISPLAY_ROW_LIMIT:
        st.caption(f"Exibindo {DISPLAY_ROW_LIMIT} de {len(rows)} serviços.")

try:
    csv_text = store.export_csv(filters)
    st.download_button("Baixar CSV", csv_text.encode("utf-8"), csv_filename(), "text/csv", key="dl_csv")
except ApiError as e:
    show_error(e)
