from __future__ import annotations

import time

import pytest

from careergauge.config import ScoringConfig
from careergauge.core.validation import InputTooLargeError, InvalidInputError
from careergauge.keyword_bank import KeywordBank
from careergauge.scoring.engine import (
    EMPTY_RESUME_MESSAGE,
    aggregate,
    calculate_ats_score,
    rank_improvements,
)
from careergauge.scoring.keywords import extract_keywords

_LED_RESUME = "Led a team of 5 engineers to reduce latency by 40% using React and Node.js"
_LED_JD = "React, Node.js, team leadership"


def _all_scores(s):
    b = s.breakdown
    return [s.overall, b.keyword_match, b.formatting, b.structure, b.readability]


def test_matching_terms_raise_the_keyword_score() -> None:
    hit = calculate_ats_score(_LED_RESUME, _LED_JD)
    miss = calculate_ats_score("Led a team of 5 engineers to reduce latency by 40% using Vue and Django", _LED_JD)
    assert "react" in hit.matched_keywords
    assert "node.js" in hit.matched_keywords
    assert hit.missing_keywords == ("team leadership",)
    assert hit.breakdown.keyword_match == 67
    assert miss.breakdown.keyword_match == 0
    assert hit.details.match_percentage == 67


def test_strong_resume_beats_poor_resume(load_text) -> None:
    jd = load_text("job_description.txt")
    strong = calculate_ats_score(load_text("strong_resume.txt"), jd)
    poor = calculate_ats_score(load_text("poor_resume.txt"), jd)
    assert strong.overall > poor.overall
    assert strong.breakdown.keyword_match > poor.breakdown.keyword_match
    assert strong.breakdown.structure == 100
    assert "graphql" in strong.missing_keywords
    assert "react" in strong.matched_keywords


def test_scores_are_deterministic(load_text) -> None:
    resume, jd = load_text("strong_resume.txt"), load_text("job_description.txt")
    assert calculate_ats_score(resume, jd) == calculate_ats_score(resume, jd)
    assert calculate_ats_score(resume, jd).to_dict() == calculate_ats_score(resume, jd).to_dict()


@pytest.mark.parametrize("resume", ["", "x", "Jane Doe", "- Led 3 teams", "| a | b |\n" * 50])
@pytest.mark.parametrize("jd", ["", "Python", "Senior Engineer, AWS, SQL"])
def test_range_and_partition_invariants(resume: str, jd: str) -> None:
    s = calculate_ats_score(resume, jd)
    for v in _all_scores(s):
        assert isinstance(v, int)
        assert 0 <= v <= 100
    assert not set(s.matched_keywords) & set(s.missing_keywords)
    assert len(s.matched_keywords) + len(s.missing_keywords) == s.details.total_keywords
    assert s.details.matched_count == len(s.matched_keywords)


def test_adding_keyword_occurrences_never_lowers_keyword_score(load_text) -> None:
    jd = load_text("job_description.txt")
    resume = load_text("poor_resume.txt")
    previous = calculate_ats_score(resume, jd).breakdown.keyword_match
    for addition in ("React developer.", "TypeScript and GraphQL.", "AWS, Docker, CI/CD.", "React again."):
        resume = resume + "\n" + addition
        current = calculate_ats_score(resume, jd).breakdown.keyword_match
        assert current >= previous
        previous = current


def test_absent_and_empty_job_description_are_equivalent(load_text) -> None:
    resume = load_text("strong_resume.txt")
    assert calculate_ats_score(resume) == calculate_ats_score(resume, "")
    assert calculate_ats_score(resume, None) == calculate_ats_score(resume, "")


def test_empty_input_floor() -> None:
    s = calculate_ats_score("", "")
    assert s.overall == 0
    assert s.matched_keywords == ()
    assert len(s.missing_keywords) == s.details.total_keywords > 0
    assert s.improvements[0] == EMPTY_RESUME_MESSAGE


def test_whitespace_resume_scores_low_without_raising() -> None:
    s = calculate_ats_score("   ", "Senior Engineer")
    assert s.overall < 30
    assert s.improvements[0] == EMPTY_RESUME_MESSAGE
    assert all(v == 0 for v in _all_scores(s))


def test_resume_made_of_the_keywords_matches_all_of_them(load_text) -> None:
    jd = load_text("job_description.txt")
    resume = ", ".join(extract_keywords(jd))
    s = calculate_ats_score(resume, jd)
    assert s.details.match_percentage == 100
    assert s.missing_keywords == ()


def test_no_keywords_counts_as_full_keyword_match() -> None:
    s = calculate_ats_score("- Led 3 teams", "", bank=KeywordBank())
    assert s.details.total_keywords == 0
    assert s.details.match_percentage == 0
    assert s.breakdown.keyword_match == 100


@pytest.mark.parametrize("bad", [b"resume bytes", 42, ["a", "b"], {"text": "x"}])
def test_non_string_input_fails_fast(bad) -> None:
    with pytest.raises(InvalidInputError):
        calculate_ats_score(bad)
    with pytest.raises(InvalidInputError):
        calculate_ats_score("resume", bad)


def test_oversized_input_is_truncated_or_rejected() -> None:
    huge = "- Led React migration for 3 teams\n" * 5000
    truncate = ScoringConfig(max_input_chars=1000)
    s = calculate_ats_score(huge, "React", config=truncate)
    assert "react" in s.matched_keywords

    reject = ScoringConfig(max_input_chars=1000, oversize_policy="reject")
    with pytest.raises(InputTooLargeError):
        calculate_ats_score(huge, "React", config=reject)


@pytest.mark.parametrize(
    "resume",
    ["a" * 100_000, "a." * 50_000, "a" * 99_999 + "@", "1" * 100_000],
)
def test_long_unbroken_tokens_score_quickly(resume: str) -> None:
    started = time.perf_counter()
    s = calculate_ats_score(resume, "Python, SQL, team leadership")
    assert time.perf_counter() - started < 5.0
    assert all(0 <= v <= 100 for v in _all_scores(s))


def test_aggregate_uses_documented_weights() -> None:
    assert aggregate(100, 100, 100, 100) == 100
    assert aggregate(0, 0, 0, 0) == 0
    assert aggregate(100, 0, 0, 0) == 40
    assert aggregate(0, 100, 0, 0) == 25
    assert aggregate(0, 0, 100, 0) == 20
    assert aggregate(0, 0, 0, 100) == 15
    assert aggregate(50, 50, 50, 50) == 50


def test_custom_weights_change_the_overall(load_text) -> None:
    resume = load_text("strong_resume.txt")
    keywords_only = ScoringConfig(weights={"keywordMatch": 1.0, "formatting": 0.0, "structure": 0.0, "readability": 0.0})
    s = calculate_ats_score(resume, _LED_JD, config=keywords_only)
    assert s.overall == s.breakdown.keyword_match


def test_improvements_ranked_by_distance_below_threshold() -> None:
    ranked = rank_improvements(
        {"keywordMatch": 65, "formatting": 20, "structure": 90, "readability": 40},
        {
            "keywordMatch": ["kw"],
            "formatting": ["fmt"],
            "structure": ["struct"],
            "readability": ["read"],
        },
    )
    assert ranked == ["fmt", "read", "kw", "struct"]


def test_improvement_ties_break_on_weight() -> None:
    ranked = rank_improvements(
        {"keywordMatch": 50, "formatting": 50, "structure": 50, "readability": 50},
        {"keywordMatch": ["kw"], "formatting": ["fmt"], "structure": ["struct"], "readability": ["read"]},
    )
    assert ranked == ["kw", "fmt", "struct", "read"]


def test_missing_keyword_message_names_count_and_examples() -> None:
    s = calculate_ats_score("Jane Doe", "React, Node.js, team leadership")
    msg = next(i for i in s.improvements if i.startswith("Add 3 missing keywords"))
    assert "react" in msg and "node.js" in msg


def test_output_contract_field_names(load_text) -> None:
    s = calculate_ats_score(load_text("strong_resume.txt"), load_text("job_description.txt"))
    d = s.to_dict()
    assert set(d) == {"overall", "breakdown", "details", "matchedKeywords", "missingKeywords", "improvements"}
    assert set(d["breakdown"]) == {"keywordMatch", "formatting", "structure", "readability"}
    assert set(d["details"]) == {"totalKeywords", "matchedCount", "matchPercentage"}

    rec = s.to_record(job_description="JD")
    assert rec["overall_score"] == s.overall
    assert rec["keyword_score"] == s.breakdown.keyword_match
    assert rec["format_score"] == s.breakdown.formatting
    assert rec["structure_score"] == s.breakdown.structure
    assert rec["readability_score"] == s.breakdown.readability
    assert rec["matched_keywords"] == list(s.matched_keywords)
    assert rec["job_description"] == "JD"
    assert s.to_record()["job_description"] is None
