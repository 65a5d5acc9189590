"""Gestão de manutenção de ar-condicionado: API, relatórios e cliente."""

__version__ = "1.0.0"
