from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from careergauge.core.text_processing import STOPWORDS


@dataclass(frozen=True)
class KeywordBank:
    """
    Curated vocabulary handed to the keyword extractor.

    - technical_terms: tools, languages, platforms, practices (highest specificity)
    - soft_skills: soft-skill phrases, multi-word preferred
    - generic_keywords: baseline set checked when no job description is given
    - stopwords: words never promoted to keywords on frequency alone

    Swap in a different bank (e.g. per industry) instead of mutating this one.
    """
    technical_terms: Tuple[str, ...] = ()
    soft_skills: Tuple[str, ...] = ()
    generic_keywords: Tuple[str, ...] = ()
    stopwords: FrozenSet[str] = STOPWORDS


TECHNICAL_TERMS: Tuple[str, ...] = (
    # languages
    "python", "java", "javascript", "typescript", "c++", "c#", "golang", "rust", "ruby", "php",
    "swift", "kotlin", "scala", "sql", "nosql", "html", "css", "bash", "r programming",
    # frameworks / libraries
    "react", "angular", "vue", "node.js", "express.js", "next.js", "django", "flask", "fastapi",
    "spring boot", "redux", "jquery", "tensorflow", "pytorch", "pandas", "numpy", "scikit-learn",
    # cloud / infrastructure
    "aws", "azure", "gcp", "google cloud", "docker", "kubernetes", "terraform", "ansible",
    "jenkins", "github actions", "ci/cd", "linux", "serverless", "containerization",
    "cloud services", "cloud computing", "infrastructure as code",
    # data
    "postgresql", "mysql", "mongodb", "redis", "elasticsearch", "kafka", "spark", "hadoop",
    "airflow", "snowflake", "relational databases", "data modeling", "etl", "data pipelines",
    "tableau", "power bi", "excel",
    # practices / architecture
    "graphql", "rest api", "restful api", "microservices", "microservices architecture",
    "distributed systems", "system design", "api design", "object-oriented programming",
    "design patterns", "machine learning", "deep learning", "data analysis", "data science",
    "natural language processing", "computer vision", "unit testing", "automated testing",
    "integration testing", "test-driven development", "jest", "cypress", "selenium", "git",
    "agile", "scrum", "kanban", "jira", "devops", "security", "performance optimization",
    "computer science",
)

SOFT_SKILLS: Tuple[str, ...] = (
    "communication", "written communication", "verbal communication", "leadership",
    "team leadership", "technical leadership", "teamwork", "collaboration", "problem solving",
    "problem-solving", "critical thinking", "project management", "product management",
    "stakeholder management", "time management", "people management", "mentoring",
    "coaching", "attention to detail", "customer service", "cross-functional",
    "negotiation", "presentation skills", "public speaking", "strategic planning",
    "analytical skills", "adaptability", "decision making", "conflict resolution",
    "ownership", "self-motivated", "organizational skills",
)

# Baseline check used when no job description is supplied: common ATS terms
# spanning technical and soft skills.
GENERIC_KEYWORDS: Tuple[str, ...] = (
    "communication", "leadership", "teamwork", "collaboration", "problem solving",
    "project management", "time management", "attention to detail", "critical thinking",
    "customer service", "mentoring", "cross-functional", "stakeholder", "strategic planning",
    "decision making", "negotiation", "presentation", "training", "budget", "reporting",
    "analysis", "data analysis", "research", "planning", "process improvement",
    "quality assurance", "documentation", "compliance", "operations", "strategy",
    "management", "results", "achievement", "innovation", "automation",
    "software development", "testing", "database", "sql", "python", "javascript",
    "excel", "microsoft office", "cloud", "api", "git", "agile", "scrum", "security",
    "design", "certification",
)

DEFAULT_KEYWORD_BANK = KeywordBank(
    technical_terms=TECHNICAL_TERMS,
    soft_skills=SOFT_SKILLS,
    generic_keywords=GENERIC_KEYWORDS,
)
