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
    "personalization": 0.35,
    "tone": 0.25,
    "keywords": 0.25,
    "professionalism": 0.15,
}

# Keyword alignment when there is no job description (or nothing to match).
NEUTRAL_KEYWORD_SCORE = 70

MAX_MISSING_KEYWORDS = 10

# Target tone per industry (formality, enthusiasm, confidence).
INDUSTRY_STANDARDS: Dict[str, Dict[str, int]] = {
    "tech": {"formality": 60, "enthusiasm": 75, "confidence": 80},
    "finance": {"formality": 85, "enthusiasm": 50, "confidence": 75},
    "creative": {"formality": 50, "enthusiasm": 85, "confidence": 70},
    "healthcare": {"formality": 80, "enthusiasm": 60, "confidence": 75},
    "general": {"formality": 70, "enthusiasm": 65, "confidence": 75},
}

TONE_TOLERANCE = 15

_SPECIFIC_PATTERNS = (
    re.compile(r"recent (?:launch|announcement|achievement|initiative|product)", re.IGNORECASE),
    re.compile(r"(?:mission|values|culture|vision) of", re.IGNORECASE),
    re.compile(r"your (?:team|company|organization)'s work on", re.IGNORECASE),
    re.compile(r"(?:impressed|excited|inspired) by your", re.IGNORECASE),
)

GENERIC_PHRASES: Tuple[str, ...] = (
    "to whom it may concern",
    "dear sir or madam",
    "i am writing to apply",
    "i would be a great fit",
    "i am a hard worker",
    "team player",
    "fast learner",
    "[company name]",
    "[position]",
    "[your name]",
)

FORMAL_WORDS = (
    "furthermore", "moreover", "consequently", "therefore", "accordingly",
    "professional", "expertise", "proficiency", "competency", "qualifications",
)
CASUAL_WORDS = (
    "awesome", "cool", "super", "really", "very", "pretty",
    "stuff", "things", "got", "gonna", "wanna",
)
ENTHUSIASM_MARKERS = (
    "excited", "passionate", "thrilled", "eager", "enthusiastic",
    "love", "inspired", "motivated", "driven", "!",
)
CONFIDENCE_MARKERS = (
    "i will", "i can", "i have successfully", "i excel at",
    "proven track record", "demonstrated ability", "expertise in",
)
WEAK_MARKERS = (
    "i think", "i believe", "i hope", "maybe", "perhaps",
    "i would try", "i might be able",
)

_GREETING_RE = re.compile(r"\b(?:dear|hello|hi)\b", re.IGNORECASE)
_CLOSING_RE = re.compile(r"\b(?:sincerely|regards|best|thank you)\b", re.IGNORECASE)

# Sloppy patterns; each costs points when it occurs more than twice.
_SLOPPY_PATTERNS = (
    re.compile(r"\bi\b"),        # lower-case "i"
    re.compile(r"[ \t]{2,}"),    # doubled spaces
    re.compile(r"[.!?]{2,}"),    # doubled punctuation
)
SLOPPY_REPEAT_LIMIT = 2

MIN_WORDS = 200
MAX_WORDS = 500


@dataclass(frozen=True)
class Personalization:
    score: float
    company_mentions: int
    specific_details: int
    generic_phrases: int


@dataclass(frozen=True)
class ToneAnalysis:
    score: float
    formality: int
    enthusiasm: int
    confidence: int
    recommendation: str


@dataclass(frozen=True)
class CoverLetterScore:
    overall: int
    personalization: int
    tone_match: int
    keyword_alignment: int
    professionalism: int
    tone: ToneAnalysis
    company_mentions: int
    specific_details: int
    generic_phrases: int
    industry: str
    improvements: List[str] = field(default_factory=list)
    strengths: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall": self.overall,
            "breakdown": {
                "personalization": self.personalization,
                "toneMatch": self.tone_match,
                "keywordAlignment": self.keyword_alignment,
                "professionalismScore": self.professionalism,
            },
            "toneAnalysis": {
                "formality": self.tone.formality,
                "enthusiasm": self.tone.enthusiasm,
                "confidence": self.tone.confidence,
                "recommendation": self.tone.recommendation,
            },
            "personalizationDetails": {
                "companyMentions": self.company_mentions,
                "specificDetails": self.specific_details,
                "genericPhrases": self.generic_phrases,
            },
            "improvements": list(self.improvements),
            "strengths": list(self.strengths),
            "missingKeywords": list(self.missing_keywords),
        }

    def to_record(
            self,
            company_name: Optional[str] = None,
            job_description: Optional[str] = None,
    ) -> Dict[str, Any]:
        """`cover_letter_metrics` row shape."""
        return {
            "overall_score": self.overall,
            "personalization_score": self.personalization,
            "tone_match_score": self.tone_match,
            "keyword_alignment_score": self.keyword_alignment,
            "professionalism_score": self.professionalism,
            "formality": self.tone.formality,
            "enthusiasm": self.tone.enthusiasm,
            "confidence": self.tone.confidence,
            "company_name": company_name or None,
            "company_mentions": self.company_mentions,
            "specific_details": self.specific_details,
            "generic_phrases_count": self.generic_phrases,
            "missing_keywords": list(self.missing_keywords),
            "improvements": list(self.improvements),
            "strengths": list(self.strengths),
            "industry": self.industry,
            "job_description": job_description or None,
        }


def _count_present(lower_text: str, markers: Tuple[str, ...]) -> int:
    return sum(1 for m in markers if m in lower_text)


def analyze_personalization(cover_letter: str, company_name: str = "") -> Personalization:
    score = 50.0

    company = (company_name or "").strip()
    mentions = len(re.findall(re.escape(company), cover_letter, re.IGNORECASE)) if company else 0
    if mentions >= 3:
        score += 20
    elif mentions == 2:
        score += 15
    elif mentions == 1:
        score += 5
    else:
        score -= 20

    specific = sum(1 for p in _SPECIFIC_PATTERNS if p.search(cover_letter))
    score += 10 * specific

    lower = cover_letter.lower()
    generic = _count_present(lower, GENERIC_PHRASES)
    score -= 10 * generic

    return Personalization(
        score=clamp100(score),
        company_mentions=mentions,
        specific_details=specific,
        generic_phrases=generic,
    )


def analyze_tone(cover_letter: str, industry: str = "general") -> ToneAnalysis:
    """
    Formality, enthusiasm and confidence (0-100 each), compared with the
    industry's target tone. Score = 100 - mean absolute distance.
    """
    lower = cover_letter.lower()

    formal = _count_present(lower, FORMAL_WORDS)
    casual = _count_present(lower, CASUAL_WORDS)
    formality = min(100.0, formal / (formal + casual + 1) * 150)

    enthusiasm = min(100.0, _count_present(lower, ENTHUSIASM_MARKERS) * 15.0)

    strong = _count_present(lower, CONFIDENCE_MARKERS)
    weak = _count_present(lower, WEAK_MARKERS)
    confidence = clamp100(strong * 20.0 - weak * 15.0)

    standard = INDUSTRY_STANDARDS.get((industry or "").lower(), INDUSTRY_STANDARDS["general"])

    if formality < standard["formality"] - TONE_TOLERANCE:
        recommendation = "Increase formality for this industry"
    elif formality > standard["formality"] + TONE_TOLERANCE:
        recommendation = "Tone is too formal - be more conversational"
    elif enthusiasm < standard["enthusiasm"] - TONE_TOLERANCE:
        recommendation = "Show more enthusiasm and passion"
    elif confidence < standard["confidence"] - TONE_TOLERANCE:
        recommendation = "Be more confident in your abilities"
    else:
        recommendation = "Tone is well-balanced for this industry"

    distance = (
            abs(formality - standard["formality"])
            + abs(enthusiasm - standard["enthusiasm"])
            + abs(confidence - standard["confidence"])
    ) / 3

    return ToneAnalysis(
        score=max(0.0, 100 - distance),
        formality=round_half_up(formality),
        enthusiasm=round_half_up(enthusiasm),
        confidence=round_half_up(confidence),
        recommendation=recommendation,
    )


def keyword_alignment(
        cover_letter: str,
        job_description: str = "",
        *,
        bank: KeywordBank = DEFAULT_KEYWORD_BANK,
) -> Tuple[float, List[str]]:
    if not job_description.strip():
        return float(NEUTRAL_KEYWORD_SCORE), []

    keywords = extract_keywords(job_description, bank=bank)
    match = match_keywords(tokenize_stream(cover_letter), keywords)
    if match.total == 0:
        return float(NEUTRAL_KEYWORD_SCORE), []
    return len(match.matched) / match.total * 100, list(match.missing[:MAX_MISSING_KEYWORDS])


def professionalism_score(cover_letter: str) -> float:
    score = 100.0
    if not _GREETING_RE.search(cover_letter):
        score -= 15
    if not _CLOSING_RE.search(cover_letter):
        score -= 15

    for pattern in _SLOPPY_PATTERNS:
        if len(pattern.findall(cover_letter)) > SLOPPY_REPEAT_LIMIT:
            score -= 10

    words = len(cover_letter.split())
    if words < MIN_WORDS:
        score -= 15
    elif words > MAX_WORDS:
        score -= 10
    return max(0.0, score)


def _improvements(p: Personalization, tone: ToneAnalysis, missing: List[str], prof: float) -> List[str]:
    out: List[str] = []
    if p.company_mentions < 2:
        out.append("Mention the company name at least 2-3 times.")
    if p.specific_details < 2:
        out.append("Add specific details about the company (recent news, products, values).")
    if p.generic_phrases > 0:
        out.append("Remove generic phrases - personalize your letter.")
    if tone.score < 70:
        out.append(f"{tone.recommendation}.")
    if missing:
        out.append(f"Include missing keywords: {', '.join(missing[:5])}")
    if prof < 80:
        out.append("Improve professionalism: check greeting, closing, and formatting.")
    return out


def _strengths(p: Personalization, tone: ToneAnalysis, kw_score: float, prof: float) -> List[str]:
    out: List[str] = []
    if p.score >= 75:
        out.append("Well-personalized for the company.")
    if tone.score >= 75:
        out.append("Appropriate tone for the industry.")
    if kw_score >= 75:
        out.append("Strong keyword alignment.")
    if prof >= 85:
        out.append("Professional structure and formatting.")
    return out


def calculate_cover_letter_score(
        cover_letter: Optional[str],
        company_name: Optional[str] = "",
        job_description: Optional[str] = "",
        industry: str = "general",
        *,
        bank: Optional[KeywordBank] = None,
) -> CoverLetterScore:
    letter = coerce_text(cover_letter, "cover_letter")
    company = coerce_text(company_name, "company_name")
    job = coerce_text(job_description, "job_description")
    industry_key = (industry or "general").lower()
    if industry_key not in INDUSTRY_STANDARDS:
        industry_key = "general"

    p = analyze_personalization(letter, company)
    tone = analyze_tone(letter, industry_key)
    kw_score, missing = keyword_alignment(letter, job, bank=bank or DEFAULT_KEYWORD_BANK)
    prof = professionalism_score(letter)

    overall = round_half_up(clamp100(
        p.score * WEIGHTS["personalization"]
        + tone.score * WEIGHTS["tone"]
        + kw_score * WEIGHTS["keywords"]
        + prof * WEIGHTS["professionalism"]
    ))

    return CoverLetterScore(
        overall=overall,
        personalization=round_half_up(p.score),
        tone_match=round_half_up(tone.score),
        keyword_alignment=round_half_up(kw_score),
        professionalism=round_half_up(prof),
        tone=tone,
        company_mentions=p.company_mentions,
        specific_details=p.specific_details,
        generic_phrases=p.generic_phrases,
        industry=industry_key,
        improvements=_improvements(p, tone, missing, prof),
        strengths=_strengths(p, tone, kw_score, prof),
        missing_keywords=missing,
    )
