"""Regras de permissões e alertas operacionais da gestão de frota."""

__version__ = "1.0.0"
