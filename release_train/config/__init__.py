"""Configuration system for release-train.

Type-safe configuration management using Pydantic.

Key Components:
    - ReleaseSettings: Main configuration container with YAML loading support
    - TrackerConfig: Jira connection and field mapping
    - HostingConfig: Bitbucket connection
    - WorkspaceConfig: Working copy location and repository whitelist
    - ReleaseConfig: Branch and pull request naming conventions

Example:
    >>> from release_train.config import ReleaseSettings
    >>> settings = ReleaseSettings.from_yaml("release_config.yaml")
    >>> settings.release.branch_name("1.2.3")
    'release/1.2.3'
"""

from release_train.config.settings import (
    DEFAULT_CONFIG_PATH,
    HostingConfig,
    ReleaseConfig,
    ReleaseSettings,
    TrackerConfig,
    WorkspaceConfig,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "HostingConfig",
    "ReleaseConfig",
    "ReleaseSettings",
    "TrackerConfig",
    "WorkspaceConfig",
]
