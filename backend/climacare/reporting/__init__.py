from .records import MachineRecord, ServiceRecord, TechnicianRecord, parse_cost, parse_timestamp
from .filters import DatePreset, ReportFilters, apply_filters, build_predicate, resolve_date_range
from .engine import build_report, cost_analysis, summarize, breakdown, monthly_series
from .recommendations import build_recommendations
from .export import CSV_COLUMNS, csv_filename, services_to_csv
from .realtime import real_time_stats

__all__ = [
    "MachineRecord", "ServiceRecord", "TechnicianRecord", "parse_cost", "parse_timestamp",
    "DatePreset", "ReportFilters", "apply_filters", "build_predicate", "resolve_date_range",
    "build_report", "cost_analysis", "summarize", "breakdown", "monthly_series",
    "build_recommendations",
    "CSV_COLUMNS", "csv_filename", "services_to_csv",
    "real_time_stats",
]
