"""Configuration data models using Pydantic."""

from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SourceConfig(BaseModel):
    """Where the concurrency limits are read from."""
    properties_file: Optional[str] = Field(
        default=None,
        description="Gateway properties file holding the limits (overrides the limits section)"
    )
    property_prefix: str = Field(
        default="",
        description="Backend prefix prepended to every property name (e.g. postgresql-)"
    )


class LimitsConfig(BaseModel):
    """Global and default concurrency limits. Zero denotes unlimited."""
    absolute_max_connections: int = Field(
        default=0,
        ge=0,
        description="Maximum concurrent connections overall"
    )
    default_max_connections: int = Field(
        default=0,
        ge=0,
        description="Default maximum concurrent connections to any one connection"
    )
    default_max_group_connections: int = Field(
        default=0,
        ge=0,
        description="Default maximum concurrent connections to any one group"
    )
    default_max_connections_per_user: int = Field(
        default=0,
        ge=0,
        description="Default maximum concurrent connections per user to any one connection"
    )
    default_max_group_connections_per_user: int = Field(
        default=0,
        ge=0,
        description="Default maximum concurrent connections per user to any one group"
    )
    user_required: bool = Field(
        default=False,
        description="Require a database user account even if another provider authenticated"
    )

    def to_properties(self, prefix: str = "") -> Dict[str, str]:
        """Render as gateway property names and string values."""
        return {
            f"{prefix}{name.replace('_', '-')}": str(value).lower() if isinstance(value, bool) else str(value)
            for name, value in self.model_dump().items()
        }


class OverridesConfig(BaseModel):
    """Per-entity limit overrides. Zero denotes unlimited."""
    connections: Dict[str, int] = Field(
        default_factory=dict,
        description="Connection id -> maximum concurrent connections"
    )
    groups: Dict[str, int] = Field(
        default_factory=dict,
        description="Group id -> maximum concurrent connections"
    )
    user_connections: Dict[str, Dict[str, int]] = Field(
        default_factory=dict,
        description="User id -> connection id -> maximum concurrent connections"
    )
    user_groups: Dict[str, Dict[str, int]] = Field(
        default_factory=dict,
        description="User id -> group id -> maximum concurrent connections"
    )

    @field_validator('connections', 'groups')
    @classmethod
    def validate_flat(cls, v):
        """Ensure overrides are non-negative."""
        for key, limit in v.items():
            if limit < 0:
                raise ValueError(f"override for '{key}' must be non-negative")
        return v

    @field_validator('user_connections', 'user_groups')
    @classmethod
    def validate_nested(cls, v):
        """Ensure per-user overrides are non-negative."""
        for user, limits in v.items():
            for key, limit in limits.items():
                if limit < 0:
                    raise ValueError(f"override for '{user}'/'{key}' must be non-negative")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    file: Optional[str] = Field(
        default=None,
        description="JSON log file path (no file logging when unset)"
    )
    console: bool = Field(
        default=True,
        description="Enable console logging"
    )
    rotation: str = Field(
        default="daily",
        description="Log rotation strategy (daily, none)"
    )
    retention_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Number of days to retain logs"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return v

    @field_validator('rotation')
    @classmethod
    def validate_rotation(cls, v):
        """Ensure rotation strategy is valid."""
        valid_strategies = ["daily", "none"]
        v = v.lower()
        if v not in valid_strategies:
            raise ValueError(f"rotation must be one of {valid_strategies}")
        return v


class GatekeeperConfig(BaseModel):
    """Complete Gatekeeper configuration."""
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    source: SourceConfig = Field(default_factory=SourceConfig)
    limits: LimitsConfig = Field(default_factory=LimitsConfig)
    overrides: OverridesConfig = Field(default_factory=OverridesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def to_yaml(self) -> str:
        """Convert configuration to YAML string."""
        import yaml
        return yaml.dump(self.model_dump(), default_flow_style=False, sort_keys=False)
