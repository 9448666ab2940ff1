from __future__ import annotations

from careergauge.core.text_processing import (
    content_tokens,
    dedupe_first_seen,
    normalize_text,
    split_lines,
    tokenize,
    tokenize_stream,
)


def test_normalize_text_is_deterministic_and_removes_nbsp() -> None:
    raw = "Customer\u00a0Service  \u2014  Lead\n\tTraining"
    norm = normalize_text(raw)
    assert "  " not in norm
    assert "\u00a0" not in norm
    assert "\u2014" not in norm
    assert "Customer Service" in norm


def test_tokenize_stream_is_ordered_and_lowercased() -> None:
    stream = tokenize_stream("Experienced in Customer Service and project management.")
    assert stream == ["experienced", "in", "customer", "service", "and", "project", "management"]


def test_tokenize_stream_keeps_technical_shapes_whole() -> None:
    stream = tokenize_stream("Node.js, C++, C#, CI/CD, Python 3.8 and test-driven design.")
    for tok in ("node.js", "c++", "c#", "ci/cd", "3.8", "test-driven"):
        assert tok in stream, f"expected {tok!r} to survive as one token"


def test_tokenize_stream_strips_trailing_punctuation() -> None:
    assert tokenize_stream("React. Node.js! (AWS)") == ["react", "node.js", "aws"]


def test_tokenize_empty_inputs() -> None:
    assert tokenize_stream("") == []
    assert tokenize_stream("   \n\t ") == []
    assert split_lines("") == []


def test_tokenize_set_matches_stream_contents() -> None:
    text = "Customer service customer support."
    assert tokenize(text) == set(tokenize_stream(text))


def test_content_tokens_filters_stopwords_and_single_chars() -> None:
    tokens = tokenize_stream("We are seeking a candidate with experience in Python and R or C#")
    assert content_tokens(tokens) == ["python", "c#"]


def test_recruitment_boilerplate_never_becomes_content() -> None:
    text = (
        "Please apply now. Qualified candidates will be interviewed. "
        "Competitive salary package with benefits and opportunities."
    )
    content = content_tokens(tokenize_stream(text))
    for term in ("apply", "qualified", "candidates", "competitive", "package", "benefits", "opportunities"):
        assert term not in content


def test_technical_tokens_survive_content_filter() -> None:
    text = "Python TypeScript React AWS kubernetes terraform postgresql fastapi"
    content = content_tokens(tokenize_stream(text))
    for term in ("python", "typescript", "react", "aws", "kubernetes", "terraform", "postgresql", "fastapi"):
        assert term in content


def test_split_lines_keeps_blank_lines() -> None:
    assert split_lines("Experience\n\n- Led  things") == ["Experience", "", "- Led things"]


def test_dedupe_first_seen_keeps_order() -> None:
    assert dedupe_first_seen(["b", "a", "b", "", "c", "a"]) == ["b", "a", "c"]
