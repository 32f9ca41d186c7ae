"""Configuration models using Pydantic for validation."""
from typing import List
from pydantic import BaseModel, Field, field_validator
import os


class ServerConfig(BaseModel):
    """Bind address for the exporter's own HTTP listener."""
    address: str = "0.0.0.0"
    port: int = 9100


class RemoteServerConfig(BaseModel):
    """Upstream NNFCM API host."""
    address: str = ""
    port: int = 0

    @property
    def base_url(self) -> str:
        return f"http://{self.address}:{self.port}"


class SourceConfig(BaseModel):
    """Everything needed to aggregate one source type."""
    categories: List[str] = Field(default_factory=list)
    query_params: str = ""
    server: RemoteServerConfig = Field(default_factory=RemoteServerConfig)

    @property
    def is_active(self) -> bool:
        """A source is scraped only when categories, host and port are all set."""
        return bool(self.categories) and bool(self.server.address) and self.server.port != 0


class GlobalConfig(BaseModel):
    """Global configuration settings."""
    log_level: str = "INFO"
    fetch_timeout_s: float = 5.0

    @field_validator('fetch_timeout_s')
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("fetch_timeout_s must be positive")
        return v


class Config(BaseModel):
    """Root configuration model.

    Field aliases match the keys of the deployment YAML file.
    """
    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    server: ServerConfig = Field(default_factory=ServerConfig, alias="Server")
    statistics_server: RemoteServerConfig = Field(
        default_factory=RemoteServerConfig, alias="RemoteStatisticServer"
    )
    monitoring_server: RemoteServerConfig = Field(
        default_factory=RemoteServerConfig, alias="RemoteMonitoringServer"
    )
    statistics_categories: List[str] = Field(
        default_factory=list, alias="MetricsStatisticsCategory"
    )
    monitoring_categories: List[str] = Field(
        default_factory=list, alias="MetricsMonitoringCategory"
    )
    query_params: str = Field("", alias="queryParams")

    class Config:
        populate_by_name = True

    @field_validator('statistics_categories', 'monitoring_categories')
    @classmethod
    def validate_categories(cls, v):
        """Reject blank category names."""
        for category in v:
            if not category or not category.strip():
                raise ValueError("Category names must be non-empty")
        return v

    @property
    def statistics(self) -> SourceConfig:
        return SourceConfig(
            categories=self.statistics_categories,
            query_params=self.query_params,
            server=self.statistics_server,
        )

    @property
    def monitoring(self) -> SourceConfig:
        return SourceConfig(
            categories=self.monitoring_categories,
            query_params=self.query_params,
            server=self.monitoring_server,
        )


def load_config(config_path: str) -> Config:
    """Load and validate configuration from YAML file."""
    import yaml

    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f) or {}

    if not isinstance(raw_config, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    # Older deployment files only knew about statistics categories
    if 'MetricsCategory' in raw_config:
        legacy = raw_config.pop('MetricsCategory')
        raw_config.setdefault('MetricsStatisticsCategory', legacy)

    # Apply environment variable overrides
    if env_log_level := os.getenv('LOG_LEVEL'):
        if 'global' not in raw_config or raw_config['global'] is None:
            raw_config['global'] = {}
        raw_config['global']['log_level'] = env_log_level

    if env_query := os.getenv('QUERY_PARAMS'):
        raw_config['queryParams'] = env_query

    try:
        config = Config(**raw_config)
        return config
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
