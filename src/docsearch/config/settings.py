"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified, via ``Settings.from_yaml``)
  2. Environment variables (DOCSEARCH_ prefix) and ``.env``
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class ElasticsearchSettings(BaseModel):
    """Connection and index configuration for the backing Elasticsearch cluster."""

    hosts: list[str] = Field(default=["http://localhost:9200"], description="Elasticsearch node URLs")
    index: str = Field(default="books", description="Index that documents are written to and searched in")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    api_key: str | None = Field(default=None, description="API key authentication")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    refresh_on_create: bool = Field(
        default=False,
        description="Wait for an index refresh after bulk creation so new documents are searchable immediately",
    )

    @field_validator("hosts", mode="before")
    @classmethod
    def _parse_hosts(cls, v: Any) -> list[str]:
        """Parse hosts from JSON string (env var) or list."""
        if isinstance(v, str):
            import json

            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return [str(h) for h in parsed]
            except (json.JSONDecodeError, TypeError):
                pass
            # Single host as plain string
            return [v] if v else []
        return list(v)


class SearchSettings(BaseModel):
    """Shape of the fuzzy multi_match query sent for every search."""

    match_fields: list[str] = Field(
        default=["title", "description", "author"],
        description="Document fields matched against the search term",
    )
    fuzziness: str | None = Field(default="2", description="Edit-distance tolerance; null disables fuzzy matching")
    minimum_should_match: str = Field(default="2", description="Minimum number of matching clauses")
    default_skip: int = Field(default=0, ge=0, description="Offset used when 'skip' is absent or invalid")
    default_take: int = Field(default=10, ge=0, description="Page size used when 'take' is absent or invalid")


class BootstrapSettings(BaseModel):
    """Startup connection retry configuration."""

    retry_interval: float = Field(default=5.0, ge=0, description="Seconds to wait between connection attempts")
    max_attempts: int | None = Field(default=None, ge=1, description="Give up after this many attempts (None = forever)")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the DOCSEARCH_ prefix.
    Nested settings use double underscores: DOCSEARCH_SERVER__PORT=9090

    Example:
        DOCSEARCH_SERVER__PORT=9090
        DOCSEARCH_ELASTICSEARCH__HOSTS='["http://es:9200"]'
        DOCSEARCH_BOOTSTRAP__RETRY_INTERVAL=2
    """

    model_config = {
        "env_prefix": "DOCSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="docsearch", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    server: ServerSettings = Field(default_factory=ServerSettings)
    elasticsearch: ElasticsearchSettings = Field(default_factory=ElasticsearchSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    bootstrap: BootstrapSettings = Field(default_factory=BootstrapSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments, so they take
        precedence over environment variables for the keys they set.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
