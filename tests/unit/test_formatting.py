from __future__ import annotations

from careergauge.scoring.formatting import analyze_formatting
from careergauge.scoring.readability import analyze_readability

_ACHIEVEMENTS = [
    "Led a team of five engineers to rebuild the billing platform on schedule",
    "Reduced monthly infrastructure spend by forty percent through autoscaling",
    "Designed an event pipeline that processes two million records per day",
    "Mentored three junior developers who were later promoted to senior roles",
]


def _bulleted() -> str:
    return "Experience\n\n" + "\n".join(f"- {a}" for a in _ACHIEVEMENTS)


def _prose() -> str:
    return "Experience\n\n" + ". ".join(_ACHIEVEMENTS) + "."


def test_clean_resume_scores_full_marks(load_text) -> None:
    a = analyze_formatting(load_text("strong_resume.txt"))
    assert a.score == 100
    assert a.issues == []
    assert a.bullet_lines == 9
    assert a.bullet_styles == 1


def test_bullets_beat_the_same_content_as_prose() -> None:
    bulleted = analyze_formatting(_bulleted())
    prose = analyze_formatting(_prose())
    assert bulleted.score > prose.score
    assert any("bullet" in issue.lower() for issue in prose.issues)


def test_bullets_read_at_least_as_well_as_prose() -> None:
    bulleted = analyze_readability(_bulleted())
    prose = analyze_readability(_prose())
    assert bulleted.score >= prose.score
    assert bulleted.action_verb_ratio >= prose.action_verb_ratio


def test_tables_and_columns_are_penalized() -> None:
    base = analyze_formatting(_bulleted())
    table = analyze_formatting(_bulleted() + "\n\n| Skill | Years |\n|---|---|\n| Python | 5 |")
    columns = analyze_formatting(_bulleted() + "\n\nPython        Leadership        SQL")
    assert table.score < base.score
    assert columns.score < base.score
    assert any("Tables" in issue for issue in table.issues)
    assert any("column" in issue for issue in columns.issues)


def test_graphics_and_control_characters_are_penalized() -> None:
    base = analyze_formatting(_bulleted())
    assert analyze_formatting(_bulleted() + "\n[image]").score < base.score
    assert analyze_formatting(_bulleted() + "\nbroken\x0cpage").score < base.score


def test_mixed_bullet_styles() -> None:
    text = "Experience\n\n- one item here\n* two item here\n• three item here\n1. four item here"
    a = analyze_formatting(text)
    assert a.bullet_styles == 4
    assert any("bullet styles" in issue for issue in a.issues)


def test_length_band(load_text) -> None:
    short = analyze_formatting(load_text("poor_resume.txt"))
    assert any("thin" in issue for issue in short.issues)
    long_text = _bulleted() + "\n\n" + "\n\n".join(f"- {a}" for a in _ACHIEVEMENTS * 30)
    assert any("long" in issue for issue in analyze_formatting(long_text).issues)


def test_wall_of_text_is_flagged() -> None:
    text = "Summary\n\n" + " ".join(["word"] * 70)
    a = analyze_formatting(text)
    assert any("Long paragraphs" in issue for issue in a.issues)


def test_empty_text_scores_zero() -> None:
    assert analyze_formatting("").score == 0
    assert analyze_formatting(" \n \n").score == 0


def test_score_is_always_in_range() -> None:
    ugly = "| a | b |\n" * 20 + "►" * 50 + "\x00" + "[logo]" + "x    y\n"
    a = analyze_formatting(ugly)
    assert 0 <= a.score <= 100
