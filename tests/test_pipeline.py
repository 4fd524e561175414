"""Tests for the digest pipeline orchestration."""

import logging
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from jobdigest.domain.models import JobSource
from jobdigest.logging.context import get_log_context
from jobdigest.pipeline import DigestPipeline, PipelineRunResult
from tests.helpers import StaticAdapter, make_app_config, make_env_config, make_job


@pytest.fixture
def app_config():
    return make_app_config(hardNos=["crypto"])


@pytest.fixture
def adapters():
    remoteok = StaticAdapter(
        [
            make_job(
                "Rust Engineer",
                "Ferrous Labs",
                skills=("rust", "go"),
                salary_min=120000,
                salary_max=150000,
                source=JobSource.REMOTEOK,
            ),
            make_job("Crypto Trader", "Moon Inc", skills=("python",), source=JobSource.REMOTEOK),
            make_job(
                "Python Developer",
                "Snake Co",
                skills=("python",),
                posted_at=datetime(2025, 11, 1, tzinfo=timezone.utc),
                source=JobSource.REMOTEOK,
            ),
        ],
        source=JobSource.REMOTEOK,
    )
    web3 = StaticAdapter(
        [
            make_job("Rust Engineer", "Ferrous Labs", skills=("rust",), source=JobSource.WEB3CAREER),
            make_job(
                "Go Developer",
                "Gopher Inc",
                skills=("go",),
                posted_at=datetime(2025, 11, 5, tzinfo=timezone.utc),
                source=JobSource.WEB3CAREER,
            ),
        ],
        source=JobSource.WEB3CAREER,
    )
    return [remoteok, web3]


class TestDigestPipeline:
    """Tests for DigestPipeline.run_once."""

    def test_run_once_counts(self, app_config, adapters):
        pipeline = DigestPipeline(app_config, make_env_config(), adapters=adapters)

        result = pipeline.run_once()

        assert isinstance(result, PipelineRunResult)
        assert result.total_fetched == 5
        assert result.duplicates_removed == 1
        assert result.unique_jobs == 4
        assert result.excluded_count == 1
        assert result.scored_count == 3
        assert [(s.source, s.fetched_count) for s in result.source_stats] == [
            ("remoteok", 3),
            ("web3career", 2),
        ]
        assert result.run_id
        assert result.total_duration_seconds >= 0

    def test_matches_are_ranked(self, app_config, adapters):
        result = DigestPipeline(app_config, make_env_config(), adapters=adapters).run_once()

        # Rust: 2/3 skills + salary + remote location = 87
        # Go and Python: 1/3 skills + remote location = 43; Go posted later
        assert [(m.job.title, m.score) for m in result.matches] == [
            ("Rust Engineer", 87),
            ("Go Developer", 43),
            ("Python Developer", 43),
        ]

    def test_cross_provider_duplicate_keeps_first_provider(self, app_config, adapters):
        result = DigestPipeline(app_config, make_env_config(), adapters=adapters).run_once()

        rust = [m for m in result.matches if m.job.title == "Rust Engineer"]
        assert len(rust) == 1
        assert rust[0].job.source == JobSource.REMOTEOK

    def test_hard_no_excluded_job_is_not_scored(self, app_config, adapters):
        result = DigestPipeline(app_config, make_env_config(), adapters=adapters).run_once()

        assert "Crypto Trader" not in [m.job.title for m in result.matches]

    def test_all_adapters_empty(self, app_config):
        adapters = [StaticAdapter([], source=JobSource.REMOTEOK)]

        result = DigestPipeline(app_config, make_env_config(), adapters=adapters).run_once()

        assert result.matches == []
        assert result.total_fetched == 0

    def test_top_matches_are_capped(self):
        jobs = [make_job(f"Engineer {i}", "Acme") for i in range(15)]
        pipeline = DigestPipeline(
            make_app_config(), make_env_config(), adapters=[StaticAdapter(jobs)]
        )

        assert len(pipeline.run_once().matches) == 10

    def test_builds_adapters_from_config(self, app_config):
        sink = object()

        with patch("jobdigest.pipeline.runner.build_adapters", return_value=[]) as mock_build:
            pipeline = DigestPipeline(app_config, make_env_config(), raw_sink=sink)

        mock_build.assert_called_once()
        assert mock_build.call_args.kwargs["raw_sink"] is sink
        assert pipeline.adapters == []

    def test_logs_ranked_list_and_scopes_context(self, app_config, adapters, caplog):
        with caplog.at_level(logging.INFO):
            result = DigestPipeline(app_config, make_env_config(), adapters=adapters).run_once()

        messages = [record.getMessage() for record in caplog.records]
        assert '  Score 87: "Rust Engineer" at Ferrous Labs' in messages
        assert "    Skills: 2/3 match (rust, go)" in messages

        # Context is scoped to the run
        assert "run_id" not in get_log_context()
        assert result.run_id
