"""
Configuration system using Pydantic for type-safe settings management.

This module provides configuration classes for the issue tracker, the
source-hosting provider, the local working copies and the release
conventions (branch names, PR title).
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, HttpUrl, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from release_train.exceptions import ConfigurationError

DEFAULT_CONFIG_PATH = Path(__file__).parent / "release_config.yaml"


class TrackerConfig(BaseModel):
    """Issue tracker (Jira) configuration."""

    base_url: HttpUrl = Field(..., description="Base URL of the Jira site")
    username: str = Field(..., description="Jira account used for API calls")
    api_token: SecretStr = Field(..., description="Jira API token")
    project_key: str = Field(default="DC", description="Project searched for release issues")
    remarks_field: str = Field(
        default="customfield_10041", description="Custom field holding deployment remarks"
    )
    application_type: str = Field(
        default="bitbucket", description="Development-panel application type for pull requests"
    )
    page_size: int = Field(default=50, ge=1, le=100, description="Issues requested per search page")


class HostingConfig(BaseModel):
    """Source-hosting (Bitbucket Cloud) configuration."""

    api_url: str = Field(default="https://api.bitbucket.org/2.0", description="Bitbucket REST API root")
    workspace: str = Field(..., description="Workspace owning the repositories")
    username: str = Field(..., description="Bitbucket username")
    password: SecretStr = Field(..., description="Bitbucket app password")


class WorkspaceConfig(BaseModel):
    """Local working copies and the repositories this automation manages."""

    base_path: Path = Field(..., description="Directory containing one clone per repository")
    repositories: frozenset[str] = Field(
        default_factory=frozenset, description="Whitelist of repositories managed by this automation"
    )

    @field_validator("base_path")
    @classmethod
    def expand_base_path(cls, value: Path) -> Path:
        return value.expanduser()

    def repository_path(self, repository: str) -> Path:
        """Get the working copy location of a repository."""
        return self.base_path / repository


class ReleaseConfig(BaseModel):
    """Branch and pull request conventions for a release."""

    development_branch: str = Field(default="dev", description="Branch release branches are cut from")
    main_branch: str = Field(default="master", description="Destination branch of release PRs")
    remote: str = Field(default="origin", description="Remote release branches are pushed to")
    branch_template: str = Field(default="release/{release}", description="Release branch name template")
    pr_title_template: str = Field(default="Release {release}", description="Release PR title template")

    @field_validator("branch_template", "pr_title_template")
    @classmethod
    def require_release_placeholder(cls, value: str) -> str:
        if "{release}" not in value:
            raise ValueError("template must contain the {release} placeholder")
        return value

    def branch_name(self, release: str) -> str:
        """Name of the release branch, used both when cutting it and as PR source."""
        return self.branch_template.format(release=release)

    def pull_request_title(self, release: str) -> str:
        """Title of the release pull request."""
        return self.pr_title_template.format(release=release)


class ReleaseSettings(BaseSettings):
    """Main release-train settings.

    Combines all configuration sections and provides loading from YAML
    files with environment variable interpolation.
    """

    model_config = SettingsConfigDict(
        env_prefix="RELEASE_TRAIN_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    tracker: TrackerConfig
    hosting: HostingConfig
    workspace: WorkspaceConfig
    release: ReleaseConfig = Field(default_factory=ReleaseConfig)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> ReleaseSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ReleaseSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except TypeError as e:
            raise ConfigurationError(f"Missing or invalid configuration fields: {e}") from e
        except Exception as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports two syntaxes:
        - ${VAR_NAME} - Required environment variable (raises if not set)
        - ${VAR_NAME:-default} - Optional with default value

        YAML comment lines are left untouched.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))
