"""Central environment-driven settings for the payment audit service.

Loaded once per process. Behavior is controlled by environment variables
(see `.env.example`).
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payment-audit"
    log_level: str = "INFO"
    database_dsn: str
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    payment_module: str = "simulated"
    simulated_decline_weight: float = 0.0
    simulated_timeout_weight: float = 0.0
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
