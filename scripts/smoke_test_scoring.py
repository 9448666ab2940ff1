from __future__ import annotations

from pathlib import Path
from pprint import pprint

from careergauge.cover_letter import calculate_cover_letter_score
from careergauge.interview import calculate_interview_score
from careergauge.rating import score_rating
from careergauge.scoring.engine import calculate_ats_score

FIXTURES = Path(__file__).resolve().parent.parent / "tests" / "fixtures"


def _load(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


def main() -> int:
    print("=== CareerGauge Smoke Test: Scoring ===")
    print(f"Fixtures: {FIXTURES}")
    print("")

    jd = _load("job_description.txt")

    # --- Resume ---
    print(">>> Scoring strong and poor resumes...")
    strong = calculate_ats_score(_load("strong_resume.txt"), jd)
    poor = calculate_ats_score(_load("poor_resume.txt"), jd)
    print(f"strong: {strong.overall} ({score_rating(strong.overall)})")
    print(f"poor:   {poor.overall} ({score_rating(poor.overall)})")
    pprint(strong.to_dict())
    print("")

    # --- Cover letter / interview ---
    print(">>> Scoring cover letter and interview answer...")
    letter = calculate_cover_letter_score(_load("cover_letter.txt"), "Northwind", jd, "tech")
    answer = calculate_interview_score(_load("interview_answer.txt"), "Tell me about a performance win.", jd)
    print(f"cover letter: {letter.overall}")
    print(f"interview:    {answer.overall}")
    print("")

    # --- Basic invariants ---
    print(">>> Running basic invariant checks...")
    for s in (strong, poor, calculate_ats_score("", "")):
        values = [s.overall, *s.breakdown.to_dict().values()]
        assert all(0 <= v <= 100 for v in values)
        assert not set(s.matched_keywords) & set(s.missing_keywords)
    assert strong.overall > poor.overall
    assert calculate_ats_score(_load("strong_resume.txt"), jd) == strong
    print("OK")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
