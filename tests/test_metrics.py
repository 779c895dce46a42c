"""
Unit tests for token metrics.
"""

from rtctoken import get_metrics
from rtctoken.metrics import TokenMetrics


class TestTokenMetrics:
    """Tests for TokenMetrics."""

    def test_counters(self, metrics):
        metrics.record_token_issued("media")
        metrics.record_token_issued("media")
        metrics.record_failure("crypto")

        stats = metrics.get_stats()
        assert stats["tokens_issued_media"] == 2
        assert stats["tokens_issued"] == 2
        assert stats["failures_crypto"] == 1

    def test_build_timer(self, metrics):
        with metrics.build_timer():
            pass

        stats = metrics.get_stats()
        assert stats["build_duration_count"] == 1
        assert stats["build_duration_avg"] >= 0

    def test_duration_stats_after_many_builds(self, metrics):
        """Average, count and max stay exact over a long run."""
        for i in range(10_000):
            metrics.record_build_duration(0.001 if i % 2 else 0.003)
        metrics.record_build_duration(0.5)

        stats = metrics.get_stats()
        assert stats["build_duration_count"] == 10_001
        assert stats["build_duration_max"] == 0.5
        assert abs(stats["build_duration_avg"] - (20.0 + 0.5) / 10_001) < 1e-9

    def test_duration_storage_is_constant(self, metrics):
        """Recording durations keeps no per-build history."""
        metrics.record_build_duration(0.001)
        before = dict(vars(metrics))
        for _ in range(1000):
            metrics.record_build_duration(0.001)

        for name, value in vars(metrics).items():
            if isinstance(value, (list, dict)):
                assert len(value) == len(before[name])

    def test_builds_through_builder_record_once(self, builder, metrics):
        builder.build_media_token("room1", "user42", 60)

        stats = metrics.get_stats()
        assert stats["tokens_issued_media"] == 1
        assert stats["build_duration_count"] == 1

    def test_prometheus_output(self, metrics):
        metrics.record_token_issued("messaging")
        text = metrics.get_prometheus_metrics().decode()

        assert 'rtctoken_test_tokens_issued_total{kind="messaging"} 1.0' in text
        assert "rtctoken_test_build_duration_seconds" in text

    def test_collectors_are_independent(self):
        """Each collector owns its own registry."""
        a = TokenMetrics(namespace="iso")
        b = TokenMetrics(namespace="iso")
        a.record_token_issued("media")

        assert b.get_stats()["tokens_issued"] == 0

    def test_global_instance(self):
        assert get_metrics() is get_metrics()
