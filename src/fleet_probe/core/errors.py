"""Errores del Core.

Solo se lanzan antes del fan-out (config/roster). Los fallos por servidor
nunca salen como excepción: quedan codificados en el resultado.
"""

from __future__ import annotations


class FleetProbeError(Exception):
    """Base de los errores que abortan una ejecución completa."""


class ConfigurationError(FleetProbeError):
    """Falta configuración obligatoria (p.ej. credenciales)."""


class RosterError(FleetProbeError):
    """El roster de servidores no existe o no es válido."""
