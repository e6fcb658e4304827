"""fleet-probe: estado y versión de una flota de servidores Hub."""

__version__ = "0.1.0"
