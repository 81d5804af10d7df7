"""release-train: release branch and pull request automation driven by Jira fix versions."""

__version__ = "0.1.0"
