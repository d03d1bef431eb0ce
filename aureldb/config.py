"""Connection configuration loaded from keyword arguments or the environment.

``DatabaseConfig`` is a ``pydantic-settings`` model.  Every field can be set
through an ``AUREL_DB_``-prefixed environment variable; explicit keyword
arguments win over the environment::

    # AUREL_DB_DRIVER=mysql AUREL_DB_HOST=db.internal AUREL_DB_DATABASE=shop
    config = DatabaseConfig(username="app", password="secret")

``options`` are passed as keyword arguments to the driver's connect call
(``sqlite3.connect`` or ``sqlalchemy.create_engine``).
"""
from __future__ import annotations

from typing import Any

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from aureldb.errors import ConfigError


class DatabaseConfig(BaseSettings):
    """Where and how to connect.

    Attributes:
        driver: Registered driver name (``sqlite``, ``mysql``,
            ``postgresql`` or ``sqlalchemy``).
        database: Database name, or file path for ``sqlite``.
        host: Server host for network drivers.
        port: Server port; the driver default when unset.
        username: Login user.
        password: Login password, kept out of reprs and logs.
        url: Full SQLAlchemy URL.  When set it overrides the individual
            parts and is required for the ``sqlalchemy`` driver.
        options: Extra keyword arguments for the driver's connect call.
    """

    model_config = SettingsConfigDict(env_prefix="AUREL_DB_", extra="forbid")

    driver: str = "sqlite"
    database: str = ":memory:"
    host: str | None = None
    port: int | None = None
    username: str | None = None
    password: SecretStr | None = None
    url: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def require_host(self) -> str:
        """Return ``host`` or raise :class:`ConfigError` if it is missing."""
        if not self.host:
            raise ConfigError(
                f"Driver '{self.driver}' requires a host.", field="host"
            )
        return self.host

    def secret_password(self) -> str | None:
        return self.password.get_secret_value() if self.password else None
