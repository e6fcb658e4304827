"""Configuración del Core.

Credenciales y ajustes de transporte de fleet-probe (pydantic-settings,
prefijo `HUB_`). Las credenciales llegan al Authenticator como objeto
explícito, nunca se leen de `os.environ` dentro de la lógica.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fleet_probe.core.errors import ConfigurationError

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Directorio por usuario donde `fleet-probe setup` guarda su `.env`.

    También es el último sitio donde se busca `servers.json`.
    """

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / "fleet-probe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "fleet-probe"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return (Path(xdg) if xdg else Path.home() / ".config") / "fleet-probe"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _read_env_file(path: Path) -> dict[str, str]:
    """`CLAVE=valor` por línea; comentarios y líneas sin `=` se saltan."""

    values: dict[str, str] = {}
    if not path.exists():
        return values
    for line in path.read_text(encoding="utf-8").splitlines():
        key, sep, value = line.strip().partition("=")
        if not sep or key.startswith("#") or not key.strip():
            continue
        values[key.strip()] = value.strip().strip('"').strip("'")
    return values


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Guarda credenciales/roster de `fleet-probe setup` conservando el resto del archivo."""

    env_path = env_path or get_user_env_file()
    merged = _read_env_file(env_path)
    merged.update({k: v for k, v in values.items() if v is not None})

    env_path.parent.mkdir(parents=True, exist_ok=True)
    body = "".join(f"{key}={merged[key]}\n" for key in sorted(merged))
    env_path.write_text("# fleet-probe user config (.env)\n" + body, encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Variables con prefijo `HUB_` (`HUB_USERNAME`, `HUB_PASSWORD`, ...), leídas
    del entorno, de `./.env` y del `.env` del usuario, en ese orden.
    """

    model_config = SettingsConfigDict(
        env_prefix="HUB_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    username: str | None = Field(
        default=None,
        description="Usuario para j_spring_security_check.",
    )
    password: SecretStr | None = Field(
        default=None,
        description="Password para j_spring_security_check.",
    )

    roster_path: Path | None = Field(
        default=None,
        description="Ruta al JSON con el roster de servidores.",
    )

    auth_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout del login por servidor (segundos).",
    )
    probe_timeout_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Timeout de la lectura del manifest (segundos).",
    )
    verify_tls: bool = Field(
        default=False,
        description="Validar certificados TLS. Desactivado: la flota usa certificados autofirmados.",
    )
    user_agent: str = Field(
        default="fleet-probe/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging por defecto de la CLI.",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.strip().upper() if isinstance(value, str) else value

    @property
    def has_credentials(self) -> bool:
        try:
            self.require_credentials()
        except ConfigurationError:
            return False
        return True

    def require_credentials(self) -> tuple[str, str]:
        """Devuelve `(username, password)` o falla antes del fan-out."""

        username = self.username or ""
        password = self.password.get_secret_value() if self.password is not None else ""
        if not username or not password:
            raise ConfigurationError(
                "Missing credentials: set HUB_USERNAME and HUB_PASSWORD "
                "(environment, ./.env or `fleet-probe setup`)."
            )
        return username, password


def load_settings(**overrides: object) -> AppSettings:
    """Construye `AppSettings`; un valor inválido se convierte en `ConfigurationError`."""

    try:
        return AppSettings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"HUB_{'_'.join(str(p) for p in err['loc']).upper()}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from exc
