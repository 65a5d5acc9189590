# climacare/services/report_service.py
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from climacare.reporting import (
    ReportFilters,
    apply_filters,
    build_recommendations,
    build_report,
    cost_analysis,
    csv_filename,
    real_time_stats,
    services_to_csv,
)
from climacare.services.store import EntityStore

logger = logging.getLogger(__name__)


def generate_report(
    store: EntityStore,
    filters: ReportFilters,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Relatório completo: resumo, agrupamentos e linhas sobre os serviços
    filtrados; recomendações sempre sobre o histórico inteiro.
    """
    services = store.get_all_services()
    machines = store.get_all_machines()
    selected = apply_filters(services, machines, filters)
    logger.info("report filters=%s selected=%d/%d", filters.to_dict(), len(selected), len(services))

    report = build_report(selected, machines)
    report["filters"] = filters.to_dict()
    report["recommendations"] = build_recommendations(services, machines, now=now)
    return report


def export_csv(store: EntityStore, filters: ReportFilters) -> Tuple[str, str]:
    """Devolve (nome do arquivo, conteúdo CSV)."""
    machines = store.get_all_machines()
    selected = apply_filters(store.get_all_services(), machines, filters)
    return csv_filename(), services_to_csv(selected, machines)


def realtime(store: EntityStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    return real_time_stats(
        store.get_all_services(),
        store.get_all_machines(),
        store.get_all_technicians(),
        now=now,
    )


def costs(store: EntityStore, filters: ReportFilters) -> Dict[str, Any]:
    machines = store.get_all_machines()
    return cost_analysis(apply_filters(store.get_all_services(), machines, filters), machines)
