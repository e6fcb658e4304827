"""Adaptadores de I/O (HTTP contra los servidores, exportación)."""
