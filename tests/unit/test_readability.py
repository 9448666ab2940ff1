from __future__ import annotations

from careergauge.scoring.readability import analyze_readability


def test_action_driven_quantified_resume_scores_full_marks(load_text) -> None:
    a = analyze_readability(load_text("strong_resume.txt"))
    assert a.score == 100
    assert a.action_verb_ratio == 1.0
    assert a.first_person_count == 0
    assert a.passive_count == 0


def test_first_person_passive_prose_is_penalized(load_text) -> None:
    a = analyze_readability(load_text("poor_resume.txt"))
    assert a.first_person_count == 6
    assert a.passive_count == 2
    assert a.action_verb_ratio == 0.0
    # -25 verbs, -15 first person (capped), -10 passive, -10 no numbers
    assert a.score == 40


def test_penalties_are_capped() -> None:
    text = "\n".join(f"- I was asked and my work was reviewed {n}" for n in range(20))
    a = analyze_readability(text)
    assert a.first_person_count == 40
    assert a.score >= 100 - 25 - 15 - 15 - 10 - 15


def test_very_long_units() -> None:
    long_bullet = "- Led " + " ".join(["migration"] * 40) + " for 3 teams in 2 regions over 12 months"
    a = analyze_readability(long_bullet)
    assert a.avg_unit_length > 25
    assert any("average" in issue for issue in a.issues)


def test_headings_are_not_units() -> None:
    a = analyze_readability("Experience\n- Led a team of 4 to ship 2 products in 6 months")
    assert a.avg_unit_length == 12


def test_empty_text_scores_zero() -> None:
    assert analyze_readability("").score == 0
    assert analyze_readability("Experience\nSkills").score == 0
