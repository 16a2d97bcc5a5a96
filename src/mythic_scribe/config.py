"""Configuration management for Mythic Scribe."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

AttributeAliasMode = Literal["default", "shorter", "longer"]


class ScribeConfig(BaseSettings):
    """Runtime options for the resolution core.

    Values are read from MYTHIC_SCRIBE_* environment variables. Every core
    operation that depends on configuration also accepts an explicit instance.
    """

    tab_size: int = Field(
        default=2,
        ge=1,
        description="Indentation unit used when generating structure completions",
    )
    enabled_plugins: list[str] | None = Field(
        default=None,
        description="Plugins whose schema keys and mechanics are offered; None enables all",
    )
    attribute_alias_mode: AttributeAliasMode = Field(
        default="default",
        description="Which attribute alias is used as the main completion label",
    )
    log_level: str = Field(default="INFO", description="Log level for the stderr sink")

    model_config = SettingsConfigDict(
        env_prefix="MYTHIC_SCRIBE_",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def is_plugin_enabled(self, plugin: str | None) -> bool:
        """Check whether a plugin's content should be offered.

        Content without a plugin tag is always enabled.
        """
        if plugin is None or self.enabled_plugins is None:
            return True
        return plugin.lower() in {p.lower() for p in self.enabled_plugins}


@lru_cache
def get_config() -> ScribeConfig:
    """Return the process-wide configuration loaded from the environment."""
    return ScribeConfig()
