"""Exportación JSON del reporte.

Por qué JSON:
- Permite pasar el estado de la flota a otras herramientas (jq, pipelines).
- Incluye `auth_outcome` por servidor, que la tabla no muestra.
"""

from __future__ import annotations

import json
from pathlib import Path

from fleet_probe.core.domain.models import FleetReport


def report_payload(report: FleetReport) -> dict[str, object]:
    return report.model_dump(
        mode="json",
        include={"generated_at", "servers", "rows"},
        exclude={"servers": {"__all__": {"session_id"}}},
    )


def export_report_json(*, report: FleetReport, output_path: Path) -> Path:
    """Exporta `FleetReport` a JSON UTF-8 con formato estable (sin tokens de sesión)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(report_payload(report), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
