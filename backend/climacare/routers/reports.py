# climacare/routers/reports.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..reporting import ReportFilters
from ..services import report_service
from ..services.store import SqlEntityStore

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_user)],
)


def get_store(db: Session = Depends(get_db)) -> SqlEntityStore:
    return SqlEntityStore(db)


# ---------- Ortak: filtros da query string ----------
def report_filters(
    startDate: Optional[str] = Query(None, description="AAAA-MM-DD (inclusivo)"),
    endDate: Optional[str] = Query(None, description="AAAA-MM-DD (inclusivo, até 23:59:59)"),
    branchFilter: Optional[str] = Query(None, description="Filial ou 'all'"),
    statusFilter: Optional[str] = Query(None, description="Status ou 'all'"),
    technicianId: Optional[str] = Query(None),
    machineId: Optional[str] = Query(None),
    serviceType: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    dateRange: Optional[str] = Query(None, description="today, last7days, last30days, last90days, thismonth, lastmonth, custom"),
) -> ReportFilters:
    return ReportFilters.from_params(
        startDate=startDate,
        endDate=endDate,
        branchFilter=branchFilter,
        statusFilter=statusFilter,
        technicianId=technicianId,
        machineId=machineId,
        serviceType=serviceType,
        search=search,
        dateRange=dateRange,
    )


@router.get("/summary")
def report_summary(
    filters: ReportFilters = Depends(report_filters),
    store: SqlEntityStore = Depends(get_store),
):
    try:
        report = report_service.generate_report(store, filters)
    except Exception:
        logger.exception("reports/summary failed")
        raise HTTPException(status_code=500, detail="Não foi possível gerar o relatório")
    return ok(report, meta=list_meta(report["services"], filters.to_dict()))


@router.get("/export/csv")
def report_export_csv(
    filters: ReportFilters = Depends(report_filters),
    store: SqlEntityStore = Depends(get_store),
):
    # exportação usa só período, filial e status
    filters = filters.without("technician_id", "machine_id", "service_type", "search")
    try:
        filename, content = report_service.export_csv(store, filters)
    except Exception:
        logger.exception("reports/export/csv failed")
        raise HTTPException(status_code=500, detail="Erro ao exportar relatório")
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/real-time-stats")
def report_real_time_stats(store: SqlEntityStore = Depends(get_store)):
    try:
        stats = report_service.realtime(store)
    except Exception:
        logger.exception("reports/real-time-stats failed")
        raise HTTPException(status_code=500, detail="Erro ao buscar estatísticas")
    return ok(stats)


@router.get("/cost-analysis")
def report_cost_analysis(
    filters: ReportFilters = Depends(report_filters),
    store: SqlEntityStore = Depends(get_store),
):
    try:
        data = report_service.costs(store, filters)
    except Exception:
        logger.exception("reports/cost-analysis failed")
        raise HTTPException(status_code=500, detail="Erro na análise de custos")
    return ok(data, meta=filters.to_dict() or None)
