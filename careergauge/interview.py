from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from careergauge.core.text_processing import tokenize_stream
from careergauge.core.validation import coerce_text
from careergauge.keyword_bank import DEFAULT_KEYWORD_BANK, KeywordBank
from careergauge.scoring.keywords import extract_keywords
from careergauge.scoring.matcher import clamp100, match_keywords, round_half_up

WEIGHTS: Dict[str, float] = {
    "star": 0.30,
    "specificity": 0.25,
    "quantification": 0.20,
    "relevance": 0.15,
    "clarity": 0.10,
}

# STAR component points (sum to 100); action carries the most weight.
SITUATION_POINTS = 25
TASK_POINTS = 25
ACTION_POINTS = 30
RESULT_POINTS = 20

NEUTRAL_RELEVANCE = 70
# Answers cover a slice of a posting; full marks at half the keywords.
RELEVANCE_SCALE = 2.0

_SITUATION_PATTERNS = (
    re.compile(r"\b(?:when|while|during|at|in)\s+(?:my|our|the)\s+(?:previous|last|current)", re.IGNORECASE),
    re.compile(r"\b(?:faced|encountered|dealing with|working on)", re.IGNORECASE),
    re.compile(r"\b(?:situation|scenario|challenge|problem|issue)\b", re.IGNORECASE),
)
_TASK_PATTERNS = (
    re.compile(r"\b(?:responsible for|tasked with|needed to|had to|required to)", re.IGNORECASE),
    re.compile(r"\bmy (?:role|responsibility|job) was to", re.IGNORECASE),
    re.compile(r"\b(?:goal|objective|target) was", re.IGNORECASE),
)
_ACTION_PATTERNS = (
    re.compile(r"\bi (?:led|managed|developed|created|implemented|designed|built|organized|coordinated)", re.IGNORECASE),
    re.compile(r"\bi (?:analyzed|researched|investigated|identified|solved)", re.IGNORECASE),
    re.compile(r"\bi (?:collaborated|communicated|presented|negotiated)", re.IGNORECASE),
)
_RESULT_PATTERNS = (
    re.compile(r"\b(?:resulted in|led to|achieved|accomplished|delivered)", re.IGNORECASE),
    re.compile(r"\b(?:increased|decreased|improved|reduced|saved|generated)\s+\w+\s+by\s+\d+", re.IGNORECASE),
    re.compile(r"\b(?:as a result|consequently|ultimately|finally)", re.IGNORECASE),
    re.compile(r"(?<!\d)\d+%|\$[\d,]+|(?<![\d,])[\d,]+\s+(?:users|customers|hours|days)", re.IGNORECASE),
)

# Number patterns start at the first digit of a run.
_PERCENT_RE = re.compile(r"(?<!\d)\d+%")
_DOLLAR_RE = re.compile(r"\$[\d,]+")

# SPECIFIC_POINTS per match, capped at SPECIFIC_CAP per pattern.
_SPECIFIC_INDICATORS = (
    _PERCENT_RE,
    _DOLLAR_RE,
    re.compile(r"(?<!\d)\d+\s+(?:users|customers|clients|people)"),
    re.compile(r"(?:increased|decreased|improved|reduced)\s+\w+\s+by\s+\d+"),
    re.compile(r"[A-Z][a-z]+\s+\d{4}"),
    re.compile(r"\b\d+\s+(?:months|weeks|days|hours)\b"),
)
SPECIFIC_POINTS = 8
SPECIFIC_CAP = 40

VAGUE_TERMS: Tuple[str, ...] = (
    "various", "multiple", "several", "many", "some", "a lot of",
    "things", "stuff", "etc", "and so on",
)
VAGUE_PENALTY = 5

_TIME_RE = re.compile(r"(?<!\d)\d+\s+(?:months|weeks|days|hours|years)")
_SCALE_RE = re.compile(r"(?<!\d)\d+\s+(?:users|customers|clients|people|employees)")

FILLER_WORDS: Tuple[str, ...] = ("um", "uh", "like", "you know", "basically", "actually", "literally")
FILLER_PENALTY = 5

_SENTENCE_RE = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class StarAnalysis:
    has_situation: bool
    has_task: bool
    has_action: bool
    has_result: bool
    score: int


@dataclass(frozen=True)
class InterviewScore:
    overall: int
    star_structure: int
    specificity: int
    quantification: int
    relevance: int
    clarity: int
    star: StarAnalysis
    improvements: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "breakdown": {
                "starStructure": self.star_structure,
                "specificity": self.specificity,
                "quantification": self.quantification,
                "relevance": self.relevance,
                "clarity": self.clarity,
            },
            "starAnalysis": {
                "hasSituation": self.star.has_situation,
                "hasTask": self.star.has_task,
                "hasAction": self.star.has_action,
                "hasResult": self.star.has_result,
            },
            "improvements": list(self.improvements),
            "strengths": list(self.strengths),
        }

    def to_record(
            self,
            question: str,
            answer: str,
            job_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """`interview_analytics` row shape."""
        return {
            "question_text": question,
            "answer": answer,
            "overall_score": self.overall,
            "star_score": self.star_structure,
            "specificity_score": self.specificity,
            "quantification_score": self.quantification,
            "relevance_score": self.relevance,
            "clarity_score": self.clarity,
            "has_situation": self.star.has_situation,
            "has_task": self.star.has_task,
            "has_action": self.star.has_action,
            "has_result": self.star.has_result,
            "improvements": list(self.improvements),
            "strengths": list(self.strengths),
            "job_description": job_description or None,
        }


def analyze_star(answer: str) -> StarAnalysis:
    situation = any(p.search(answer) for p in _SITUATION_PATTERNS)
    task = any(p.search(answer) for p in _TASK_PATTERNS)
    action = any(p.search(answer) for p in _ACTION_PATTERNS)
    result = any(p.search(answer) for p in _RESULT_PATTERNS)
    score = (
            (SITUATION_POINTS if situation else 0)
            + (TASK_POINTS if task else 0)
            + (ACTION_POINTS if action else 0)
            + (RESULT_POINTS if result else 0)
    )
    return StarAnalysis(
        has_situation=situation,
        has_task=task,
        has_action=action,
        has_result=result,
        score=score,
    )


def _phrase_count(phrase: str, text: str) -> int:
    return len(re.findall(r"\b" + re.escape(phrase) + r"\b", text, re.IGNORECASE))


def specificity_score(answer: str) -> float:
    score = 50.0
    for pattern in _SPECIFIC_INDICATORS:
        found = len(pattern.findall(answer))
        if found:
            score += min(found * SPECIFIC_POINTS, SPECIFIC_CAP)
    for term in VAGUE_TERMS:
        score -= VAGUE_PENALTY * _phrase_count(term, answer)
    return clamp100(score)


def quantification_score(answer: str) -> float:
    percentages = len(_PERCENT_RE.findall(answer))
    dollars = len(_DOLLAR_RE.findall(answer))
    times = len(_TIME_RE.findall(answer))
    scales = len(_SCALE_RE.findall(answer))

    score = min(percentages * 15, 30) + min(dollars * 15, 30) + min(times * 10, 20) + min(scales * 10, 20)

    kinds = sum(1 for n in (percentages, dollars, times, scales) if n > 0)
    if kinds >= 3:
        score += 20
    elif kinds == 2:
        score += 10
    return float(min(100, score))


def relevance_score(
        answer: str,
        job_description: str = "",
        *,
        bank: KeywordBank = DEFAULT_KEYWORD_BANK,
) -> float:
    if not job_description.strip():
        return float(NEUTRAL_RELEVANCE)
    keywords = extract_keywords(job_description, bank=bank)
    match = match_keywords(tokenize_stream(answer), keywords)
    if match.total == 0:
        return float(NEUTRAL_RELEVANCE)
    return clamp100(len(match.matched) / match.total * 100 * RELEVANCE_SCALE)


def clarity_score(answer: str) -> float:
    """Sentence length (10-30 words is fine) minus filler words."""
    sentences = [s for s in _SENTENCE_RE.split(answer) if s.strip()]
    words = answer.split()
    if not sentences or not words:
        return 50.0

    score = 100.0
    avg = len(words) / len(sentences)
    if avg > 30:
        score -= 20
    elif avg < 10:
        score -= 10

    for filler in FILLER_WORDS:
        score -= FILLER_PENALTY * _phrase_count(filler, answer)
    return max(0.0, score)


def _improvements(star: StarAnalysis, specific: float, quant: float, rel: float, clarity: float) -> List[str]:
    out: List[str] = []
    if not star.has_situation:
        out.append("Add context: start with the situation or challenge you faced.")
    if not star.has_task:
        out.append("Clarify your role: explain what you were specifically responsible for.")
    if not star.has_action:
        out.append("Detail your actions: use strong action verbs (Led, Managed, Developed).")
    if not star.has_result:
        out.append("Show impact: include specific, measurable results.")
    if specific < 60:
        out.append("Be more specific: replace vague terms with concrete details.")
    if quant < 50:
        out.append("Add metrics: include numbers, percentages, or dollar amounts.")
    if rel < 60:
        out.append("Increase relevance: align your answer more closely with the job requirements.")
    if clarity < 70:
        out.append("Improve clarity: use shorter sentences and remove filler words.")
    return out


def _strengths(star: StarAnalysis, specific: float, quant: float, rel: float, clarity: float) -> List[str]:
    out: List[str] = []
    if star.score >= 75:
        out.append("Strong STAR structure.")
    if specific >= 70:
        out.append("Specific and detailed.")
    if quant >= 70:
        out.append("Well-quantified with metrics.")
    if rel >= 70:
        out.append("Highly relevant to the role.")
    if clarity >= 80:
        out.append("Clear and concise.")
    return out


def calculate_interview_score(
        answer: Optional[str],
        question: Optional[str] = "",
        job_description: Optional[str] = "",
        *,
        bank: Optional[KeywordBank] = None,
) -> InterviewScore:
    """
    Score one interview answer on STAR structure, specificity,
    quantification, relevance to the posting and clarity.

    The question is validated but does not affect the score.
    """
    text = coerce_text(answer, "answer")
    coerce_text(question, "question")
    job = coerce_text(job_description, "job_description")

    star = analyze_star(text)
    specific = specificity_score(text)
    quant = quantification_score(text)
    rel = relevance_score(text, job, bank=bank or DEFAULT_KEYWORD_BANK)
    clarity = clarity_score(text)

    overall = round_half_up(clamp100(
        star.score * WEIGHTS["star"]
        + specific * WEIGHTS["specificity"]
        + quant * WEIGHTS["quantification"]
        + rel * WEIGHTS["relevance"]
        + clarity * WEIGHTS["clarity"]
    ))

    return InterviewScore(
        overall=overall,
        star_structure=star.score,
        specificity=round_half_up(specific),
        quantification=round_half_up(quant),
        relevance=round_half_up(rel),
        clarity=round_half_up(clarity),
        star=star,
        improvements=_improvements(star, specific, quant, rel, clarity),
        strengths=_strengths(star, specific, quant, rel, clarity),
    )
