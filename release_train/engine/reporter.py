"""Release summary table."""

from rich.console import Console
from rich.table import Table

from release_train.engine.release import ReleaseQuery
from release_train.models.domain import Issue, ReleaseRow

COLUMNS = ("Summary", "Status", "Repo", "Author(s)", "Linked issues", "Deployment remarks")


class ReleaseReporter:
    """Build and print the summary table of a release. Never mutates anything."""

    def __init__(self, query: ReleaseQuery, console: Console | None = None) -> None:
        self.query = query
        self.console = console or Console()

    @staticmethod
    def build_rows(issues: list[Issue]) -> list[ReleaseRow]:
        """Build one row per issue from issues carrying their pull requests."""
        return [
            ReleaseRow(
                key=issue.key,
                summary=issue.summary,
                status=issue.status,
                repositories=",".join(issue.repository_names),
                authors=",".join(issue.author_names),
                linked_issues=",".join(dict.fromkeys(issue.linked_issue_keys)),
                remarks=issue.remarks,
            )
            for issue in issues
        ]

    @staticmethod
    def render(rows: list[ReleaseRow], title: str | None = None) -> Table:
        """Render rows as a table keyed by issue key."""
        table = Table(title=title, show_lines=True)
        table.add_column("Issue", style="bold", no_wrap=True)
        for column in COLUMNS:
            table.add_column(column)

        for row in rows:
            table.add_row(
                row.key,
                row.summary,
                row.status,
                row.repositories,
                row.authors,
                row.linked_issues,
                row.remarks or "",
            )

        return table

    async def report(self, release: str) -> list[ReleaseRow] | None:
        """Print the summary table of a release.

        Returns:
            The rows printed, or None when the release's issues could not be
            fetched (nothing is printed then).

        Raises:
            ResolutionError: If any issue's pull requests cannot be fetched.
        """
        issues = await self.query.fetch_issues(release)
        if issues is None:
            return None

        rows = self.build_rows(await self.query.attach_pull_requests(issues))
        self.console.print(self.render(rows, title=f"Release {release}"))
        return rows
