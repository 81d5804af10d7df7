"""Tests for release_train/engine/whitelist.py."""

from structlog.testing import capture_logs

from release_train.engine.whitelist import SKIP_REASON, Whitelist


class TestWhitelist:
    """Test repository membership and partitioning."""

    def test_allows_exact_match(self):
        whitelist = Whitelist(["developer-api"])

        assert whitelist.allows("developer-api")
        assert not whitelist.allows("Developer-API")
        assert not whitelist.allows("developer-api-v2")

    def test_repositories_are_frozen(self):
        whitelist = Whitelist(["developer-api", "developer-api"])

        assert whitelist.repositories == frozenset({"developer-api"})

    def test_partition(self, whitelist):
        accepted, rejected = whitelist.partition({"storefront-api", "scratchpad", "developer-api", "legacy"})

        assert accepted == ["developer-api", "storefront-api"]
        assert rejected == ["legacy", "scratchpad"]

    def test_partition_logs_rejected_repositories(self, whitelist):
        with capture_logs() as logs:
            whitelist.partition(["developer-api", "scratchpad"])

        assert logs == [
            {
                "event": "repository_not_whitelisted",
                "log_level": "warning",
                "repository": "scratchpad",
                "reason": SKIP_REASON,
            }
        ]

    def test_partition_is_disjoint_and_complete(self, whitelist):
        repositories = {"developer-api", "scratchpad", "developer-center"}

        accepted, rejected = whitelist.partition(repositories)

        assert set(accepted) | set(rejected) == repositories
        assert not set(accepted) & set(rejected)

    def test_empty_whitelist_rejects_everything(self):
        accepted, rejected = Whitelist([]).partition(["developer-api"])

        assert accepted == []
        assert rejected == ["developer-api"]

    def test_partition_empty(self, whitelist):
        assert whitelist.partition([]) == ([], [])
