"""Servicios del Core (orquestación y armado del reporte)."""
