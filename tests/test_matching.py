"""Unit tests for Hard-No filtering, scoring and ranking."""

from datetime import datetime, timedelta, timezone

import pytest

from jobdigest.config.models import Preferences
from jobdigest.domain.models import MatchResult
from jobdigest.matching import (
    TOP_MATCHES,
    HardNoFilter,
    JobScorer,
    filter_hard_nos,
    rank,
    round_half_up,
)
from tests.helpers import make_job


@pytest.fixture
def preferences():
    return Preferences(skills=["rust", "go", "python"], salary_minimum=100000, location="Berlin")


@pytest.fixture
def scorer(preferences):
    return JobScorer(preferences)


def scored(job, score):
    return MatchResult(job=job, score=score, explanation=("a", "b", "c"))


# ============================================================================
# Hard-No Filter Tests
# ============================================================================


class TestHardNoFilter:
    """Tests for HardNoFilter."""

    def test_empty_patterns_return_input_unchanged(self):
        jobs = [make_job("Crypto Engineer", "Acme"), make_job("Go Engineer", "Beta")]

        result = HardNoFilter([]).apply(jobs)

        assert result is jobs

    def test_title_match_is_case_insensitive(self):
        job = make_job("Crypto Backend Engineer", "Acme")

        assert filter_hard_nos([job], ["crypto"]) == []

    def test_pattern_case_is_ignored(self):
        job = make_job("crypto backend engineer", "Acme")

        assert filter_hard_nos([job], ["CRYPTO"]) == []

    def test_company_match(self):
        job = make_job("Backend Engineer", "Gambling Corp")

        assert filter_hard_nos([job], ["gambl"]) == []

    def test_skill_match(self):
        job = make_job("Backend Engineer", "Acme", skills=("php", "mysql"))

        assert filter_hard_nos([job], ["php"]) == []

    def test_location_is_not_searched(self):
        job = make_job("Backend Engineer", "Acme", location="Crypto Valley")

        assert filter_hard_nos([job], ["crypto"]) == [job]

    def test_survivors_keep_order(self):
        jobs = [
            make_job("A Engineer", "One"),
            make_job("Crypto Engineer", "Two"),
            make_job("B Engineer", "Three"),
            make_job("C Engineer", "Four"),
        ]

        result = filter_hard_nos(jobs, ["crypto"])

        assert [job.company for job in result] == ["One", "Three", "Four"]

    def test_exclusions_record_matched_patterns(self):
        job = make_job("Crypto Engineer", "Web3 Gambling", skills=("solidity",))
        hard_no_filter = HardNoFilter(["crypto", "gambling", "java"])

        hard_no_filter.apply([job])

        assert len(hard_no_filter.exclusions) == 1
        assert hard_no_filter.exclusions[0].job == job
        assert hard_no_filter.exclusions[0].matched_patterns == ("crypto", "gambling")

    def test_exclusions_reset_between_calls(self):
        hard_no_filter = HardNoFilter(["crypto"])
        hard_no_filter.apply([make_job("Crypto Engineer", "Acme")])

        hard_no_filter.apply([make_job("Go Engineer", "Acme")])

        assert hard_no_filter.exclusions == []


# ============================================================================
# Scorer Tests
# ============================================================================


class TestJobScorer:
    """Tests for JobScorer scoring and explanations."""

    def test_partial_skills_with_bonuses(self, scorer):
        job = make_job(skills=("rust", "go"), salary_min=120000, salary_max=150000, location="Berlin")

        breakdown = scorer.score(job)

        assert breakdown.matched_skills == ("rust", "go")
        assert breakdown.skill_score == pytest.approx(200 / 3)
        assert breakdown.salary_bonus == 10
        assert breakdown.location_bonus == 10
        assert breakdown.score == 87

    def test_full_match_is_capped_at_100(self, scorer):
        job = make_job(skills=("rust", "go", "python"), salary_min=150000, salary_max=200000, location="Berlin")

        assert scorer.score(job).score == 100

    def test_no_overlap_no_bonuses(self, scorer):
        job = make_job(skills=("java",), location="Tokyo")

        breakdown = scorer.score(job)

        assert breakdown.score == 0
        assert breakdown.matched_skills == ()

    def test_skill_match_is_exact_not_substring(self, scorer):
        job = make_job(skills=("golang", "rustlang"), location="Tokyo")

        assert scorer.score(job).matched_skills == ()

    def test_skill_match_ignores_case(self):
        scorer = JobScorer(Preferences(skills=["Rust"], salary_minimum=1, location="Tokyo"))
        job = make_job(skills=("RUST",), location="Tokyo")

        breakdown = scorer.score(job)

        assert breakdown.matched_skills == ("rust",)
        assert breakdown.score == 100

    def test_matched_skills_follow_preference_order(self, scorer):
        job = make_job(skills=("python", "rust"), location="Tokyo")

        assert scorer.score(job).matched_skills == ("rust", "python")

    def test_salary_bonus_requires_minimum(self, scorer):
        job = make_job(skills=(), salary_min=99999, salary_max=200000, location="Tokyo")

        assert scorer.score(job).salary_bonus == 0

    def test_location_substring_match(self, scorer):
        job = make_job(skills=(), location="Berlin, Germany")

        assert scorer.score(job).location_bonus == 10

    def test_remote_preference_always_earns_location_bonus(self):
        scorer = JobScorer(Preferences(skills=["rust"], salary_minimum=1, location="Remote (EU)"))
        job = make_job(skills=(), location="San Francisco")

        assert scorer.score(job).location_bonus == 10

    def test_empty_location_preference_matches_everything(self):
        scorer = JobScorer(Preferences(skills=["rust"], salary_minimum=1, location=""))
        job = make_job(skills=(), location="Tokyo")

        assert scorer.score(job).location_bonus == 10

    def test_half_rounds_up(self):
        scorer = JobScorer(
            Preferences(skills=["a", "b", "c", "d", "e", "f", "g", "h"], salary_minimum=1, location="Tokyo")
        )
        job = make_job(skills=("a",), location="Paris")

        # 1/8 * 100 = 12.5
        assert scorer.score(job).score == 13

    @pytest.mark.parametrize(
        "skills,salary_min,location",
        [
            ((), 0, "Nowhere"),
            (("rust",), 0, "Berlin"),
            (("rust", "go", "python", "java"), 500000, "Berlin"),
            (("go",), 100000, "Remote"),
        ],
    )
    def test_score_is_bounded(self, scorer, skills, salary_min, location):
        job = make_job(skills=skills, salary_min=salary_min, salary_max=salary_min, location=location)

        score = scorer.score(job).score

        assert 0 <= score <= 100
        assert isinstance(score, int)

    def test_explanation_partial_match(self, scorer):
        job = make_job(skills=("rust", "go"), salary_min=120000, salary_max=150000, location="Berlin")

        explanation = scorer.evaluate(job).explanation

        assert explanation == (
            "Skills: 2/3 match (rust, go)",
            "Salary: $120000-$150000 (meets your minimum)",
            "Remote: Yes (Berlin)",
        )

    def test_explanation_full_match(self, scorer):
        job = make_job(skills=("python", "go", "rust"))

        assert scorer.evaluate(job).explanation[0] == "Skills: 100% match (all 3 skills)"

    def test_explanation_salary_below_minimum(self, scorer):
        job = make_job(salary_min=80000, salary_max=90000)

        assert scorer.evaluate(job).explanation[1] == (
            "Salary: $80000-$90000 (below your $100000 minimum)"
        )

    def test_undisclosed_salary(self, scorer):
        job = make_job(salary_min=0, salary_max=0)

        result = scorer.evaluate(job)

        assert job.salary.raw == ""
        assert job.salary.currency == ""
        assert result.explanation[1] == "Salary: Not disclosed"

    def test_explanation_not_remote(self, scorer):
        job = make_job(remote=False, location="Lisbon")

        assert scorer.evaluate(job).explanation[2] == "Remote: Not specified (Lisbon)"

    def test_evaluate_builds_match_result(self, scorer):
        job = make_job(skills=("go",), location="Tokyo")

        result = scorer.evaluate(job)

        assert result.job is job
        assert result.score == 33
        assert result.matched_skills == ("go",)
        assert len(result.explanation) == 3

    def test_scoring_is_deterministic(self, scorer):
        job = make_job(skills=("rust", "python"), salary_min=100000, salary_max=100000)

        assert scorer.evaluate(job) == scorer.evaluate(job)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value,expected",
        [(12.5, 13), (86.666, 87), (0.4, 0), (99.5, 100), (2.5, 3)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


# ============================================================================
# Ranker Tests
# ============================================================================


class TestRank:
    """Tests for rank ordering and truncation."""

    def test_orders_by_score_descending(self):
        results = [scored(make_job(f"Job {i}", "Acme"), score) for i, score in enumerate([40, 90, 70])]

        assert [result.score for result in rank(results)] == [90, 70, 40]

    def test_ties_broken_by_most_recent(self):
        older = scored(make_job("Older", "Acme", posted_at=datetime(2024, 1, 2, tzinfo=timezone.utc)), 80)
        newer = scored(make_job("Newer", "Acme", posted_at=datetime(2024, 1, 5, tzinfo=timezone.utc)), 80)

        assert [result.job.title for result in rank([older, newer])] == ["Newer", "Older"]

    def test_full_ties_keep_input_order(self):
        posted = datetime(2024, 1, 2, tzinfo=timezone.utc)
        results = [scored(make_job(f"Job {i}", "Acme", posted_at=posted), 50) for i in range(5)]

        assert rank(results) == results

    def test_caps_at_top_matches(self):
        results = [scored(make_job(f"Job {i}", "Acme"), i) for i in range(25)]

        ranked = rank(results)

        assert TOP_MATCHES == 10
        assert len(ranked) == 10
        assert [result.score for result in ranked] == list(range(24, 14, -1))

    def test_fewer_than_cap_returns_all_sorted(self):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        results = [
            scored(make_job(f"Job {i}", "Acme", posted_at=base + timedelta(days=i)), 60)
            for i in range(3)
        ]

        ranked = rank(results)

        assert [result.job.title for result in ranked] == ["Job 2", "Job 1", "Job 0"]

    def test_custom_limit(self):
        results = [scored(make_job(f"Job {i}", "Acme"), i) for i in range(5)]

        assert len(rank(results, limit=2)) == 2

    def test_empty(self):
        assert rank([]) == []
