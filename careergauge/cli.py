from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from careergauge.config import load_scoring_config
from careergauge.core.validation import InvalidInputError
from careergauge.cover_letter import INDUSTRY_STANDARDS, calculate_cover_letter_score
from careergauge.history import KINDS, JsonScoreHistory, ScoreHistory, default_history_dir
from careergauge.interview import calculate_interview_score
from careergauge.io.resume_loader import load_document_text
from careergauge.rating import score_rating
from careergauge.scoring.engine import calculate_ats_score


def _warn(message: str) -> None:
    print(f"[CareerGauge] {message}", file=sys.stderr)


def _read_required(path_str: str, label: str) -> str:
    p = Path(path_str)
    if not p.exists():
        _warn(f"{label} file not found: {p}")
        raise SystemExit(2)
    return p.read_text(encoding="utf-8")


def _read_optional(path_str: str, label: str) -> str:
    return _read_required(path_str, label) if path_str else ""


def _history(args: argparse.Namespace) -> ScoreHistory:
    base = Path(args.history_dir) if args.history_dir else default_history_dir()
    return JsonScoreHistory(base)


def _record(args: argparse.Namespace, kind: str, record: Dict[str, Any]) -> None:
    if args.dry_run:
        return
    _history(args).record(kind, record)


def _print_list(title: str, items: List[str]) -> None:
    if not items:
        return
    print(f"\n{title}:")
    for item in items:
        print(f"  - {item}")


def _cmd_resume(args: argparse.Namespace) -> Dict[str, Any]:
    for path_str, label in ((args.resume_text, "Resume"), (args.resume_pdf, "Resume PDF")):
        if path_str and not Path(path_str).exists():
            _warn(f"{label} file not found: {path_str}")
            raise SystemExit(2)

    loaded = load_document_text(
        text_path=args.resume_text or None,
        pdf_path=args.resume_pdf or None,
    )
    if loaded.source == "none":
        _warn("No resume text could be loaded; scoring an empty resume.")

    job = args.job_text or _read_optional(args.job, "Job description")
    score = calculate_ats_score(loaded.text, job, config=load_scoring_config())
    _record(args, "resume", score.to_record(job_description=job))

    if not args.json:
        b = score.breakdown
        print("\n=== CareerGauge ATS Score ===")
        print(f"Source: {loaded.source}" + (f" ({loaded.path})" if loaded.path else ""))
        print(f"Overall: {score.overall}/100 ({score_rating(score.overall)})")
        print(
            f"Keywords: {b.keyword_match} | Formatting: {b.formatting} | "
            f"Structure: {b.structure} | Readability: {b.readability}"
        )
        d = score.details
        print(f"Matched {d.matched_count}/{d.total_keywords} keywords ({d.match_percentage}%)")
        _print_list("Matched keywords", list(score.matched_keywords))
        _print_list("Missing keywords", list(score.missing_keywords))
        _print_list("Improvements", list(score.improvements))
    return score.to_dict()


def _cmd_cover_letter(args: argparse.Namespace) -> Dict[str, Any]:
    letter = _read_required(args.letter, "Cover letter")
    job = _read_optional(args.job, "Job description")
    score = calculate_cover_letter_score(letter, args.company, job, args.industry)
    _record(args, "cover_letter", score.to_record(company_name=args.company, job_description=job))

    if not args.json:
        print("\n=== CareerGauge Cover Letter Score ===")
        print(f"Overall: {score.overall}/100 ({score_rating(score.overall)})")
        print(
            f"Personalization: {score.personalization} | Tone: {score.tone_match} | "
            f"Keywords: {score.keyword_alignment} | Professionalism: {score.professionalism}"
        )
        print(f"Tone: {score.tone.recommendation}")
        _print_list("Strengths", score.strengths)
        _print_list("Improvements", score.improvements)
    return score.to_dict()


def _cmd_interview(args: argparse.Namespace) -> Dict[str, Any]:
    answer = _read_required(args.answer, "Answer")
    job = _read_optional(args.job, "Job description")
    score = calculate_interview_score(answer, args.question, job)
    _record(args, "interview", score.to_record(args.question, answer, job_description=job))

    if not args.json:
        s = score.star
        print("\n=== CareerGauge Interview Answer Score ===")
        print(f"Overall: {score.overall}/100 ({score_rating(score.overall)})")
        print(
            f"STAR: {score.star_structure} | Specificity: {score.specificity} | "
            f"Metrics: {score.quantification} | Relevance: {score.relevance} | Clarity: {score.clarity}"
        )
        flags = [name for name, ok in (
            ("situation", s.has_situation), ("task", s.has_task),
            ("action", s.has_action), ("result", s.has_result),
        ) if ok]
        print(f"STAR parts found: {', '.join(flags) if flags else '-'}")
        _print_list("Strengths", score.strengths)
        _print_list("Improvements", score.improvements)
    return score.to_dict()


def _cmd_progress(args: argparse.Namespace) -> Dict[str, Any]:
    history = _history(args)
    kinds = [args.kind] if args.kind else list(KINDS)
    summaries = [history.progress(k) for k in kinds]

    if not args.json:
        print("\n=== CareerGauge Progress ===")
        for p in summaries:
            if not p.sessions:
                print(f"{p.kind}: no sessions yet")
                continue
            print(
                f"{p.kind}: {p.sessions} sessions | avg {p.average} | best {p.best} | "
                f"last {p.last} | change {p.improvement:+d}"
            )
    return {"progress": [p.to_dict() for p in summaries]}


def build_parser() -> argparse.ArgumentParser:
    shared = argparse.ArgumentParser(add_help=False)
    shared.add_argument("--json", action="store_true", help="Print JSON only (machine-readable)")
    shared.add_argument("--dry-run", action="store_true", help="Score without writing to the history")
    shared.add_argument("--history-dir", type=str, default="", help="Override the local history directory")

    parser = argparse.ArgumentParser(prog="careergauge", description="CareerGauge resume, cover letter and interview scoring")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("resume", parents=[shared], help="ATS score for a resume")
    p.add_argument("--resume-text", type=str, default="", help="Path to resume .txt")
    p.add_argument("--resume-pdf", type=str, default="", help="Path to resume .pdf")
    p.add_argument("--job", type=str, default="", help="Path to a job description .txt")
    p.add_argument("--job-text", type=str, default="", help="Job description given inline")
    p.set_defaults(handler=_cmd_resume)

    p = sub.add_parser("cover-letter", parents=[shared], help="Score a cover letter")
    p.add_argument("--letter", type=str, required=True, help="Path to cover letter .txt")
    p.add_argument("--company", type=str, default="", help="Company name the letter is addressed to")
    p.add_argument("--job", type=str, default="", help="Path to a job description .txt")
    p.add_argument("--industry", choices=sorted(INDUSTRY_STANDARDS), default="general", help="Industry tone profile")
    p.set_defaults(handler=_cmd_cover_letter)

    p = sub.add_parser("interview", parents=[shared], help="Score an interview answer (STAR method)")
    p.add_argument("--question", type=str, required=True, help="The interview question")
    p.add_argument("--answer", type=str, required=True, help="Path to the answer .txt")
    p.add_argument("--job", type=str, default="", help="Path to a job description .txt")
    p.set_defaults(handler=_cmd_interview)

    p = sub.add_parser("progress", parents=[shared], help="Summarize recorded scores")
    p.add_argument("--kind", choices=list(KINDS), default=None, help="Only this kind of score")
    p.set_defaults(handler=_cmd_progress)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        payload = args.handler(args)
    except InvalidInputError as e:
        _warn(f"Invalid input: {e}")
        raise SystemExit(2)

    if args.json:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
