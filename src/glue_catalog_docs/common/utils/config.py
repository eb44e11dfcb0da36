# src/glue_catalog_docs/common/utils/config.py

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

ENV_PREFIX = "GLUE_DOCS_"


class AppConfig(BaseModel):
    """
    Runtime configuration for a documentation run.

    Attributes:
        project_name: title used in the generated index
        output_dir: directory the Markdown files are written to
        database_name: catalog database to document
        region, profile, endpoint_url: AWS client settings
        catalog_id: account id of the catalog, when not the caller's own
        page_size: MaxResults per SearchTables call
    """
    project_name: str = Field("no name", description="Project name shown in the index")
    output_dir: str = Field(".", description="Output directory")
    database_name: str = Field("default", description="Database name")

    region: Optional[str] = Field(None, description="AWS region")
    profile: Optional[str] = Field(None, description="AWS shared config profile")
    catalog_id: Optional[str] = Field(None, description="Catalog (account) id")
    endpoint_url: Optional[str] = Field(None, description="Custom Glue endpoint")
    page_size: Optional[int] = Field(None, ge=1, le=1000, description="Tables per page")

    max_retries: int = Field(3, ge=0, description="botocore retry attempts")
    connect_timeout: int = Field(60, gt=0, description="Connect timeout in seconds")
    read_timeout: int = Field(300, gt=0, description="Read timeout in seconds")

    log_level: str = Field("INFO", description="Log level")
    log_format: str = Field("console", description="Log format: console or json")

    @field_validator('project_name', 'database_name', 'output_dir')
    @classmethod
    def validate_not_empty(cls, v):
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        allowed = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator('log_format')
    @classmethod
    def validate_log_format(cls, v):
        if v not in ('console', 'json'):
            raise ValueError("log_format must be 'console' or 'json'")
        return v

    def connection_settings(self) -> Dict[str, Any]:
        """Settings consumed by GlueConnectionManager."""
        return {
            'region': self.region,
            'profile': self.profile,
            'endpoint_url': self.endpoint_url,
            'max_retries': self.max_retries,
            'connect_timeout': self.connect_timeout,
            'read_timeout': self.read_timeout
        }


def load_config_file(path: str) -> Dict[str, Any]:
    """
    Load a YAML or JSON configuration file into a dictionary.

    The parser is selected by suffix; anything other than .json is read as YAML.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            if file_path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def load_env_settings(environ: Optional[Mapping[str, str]] = None,
                      prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    """Collect GLUE_DOCS_<FIELD> variables for known AppConfig fields."""
    environ = os.environ if environ is None else environ
    settings = {}
    for field_name in AppConfig.model_fields:
        value = environ.get(f"{prefix}{field_name.upper()}")
        if value is not None:
            settings[field_name] = value
    return settings


def load_config(config_file: Optional[str] = None,
                overrides: Optional[Dict[str, Any]] = None,
                environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build the effective configuration.

    Precedence: overrides (CLI flags) > environment > config file > defaults.
    Overrides whose value is None are ignored.
    """
    data: Dict[str, Any] = {}
    if config_file:
        data.update(load_config_file(config_file))
    data.update(load_env_settings(environ))
    data.update({k: v for k, v in (overrides or {}).items() if v is not None})

    unknown = sorted(set(data) - set(AppConfig.model_fields))
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {unknown}")

    try:
        config = AppConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    logger.debug("Configuration loaded",
                 config_file=config_file,
                 database_name=config.database_name,
                 output_dir=config.output_dir)
    return config
