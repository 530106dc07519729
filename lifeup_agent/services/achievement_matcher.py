"""Keyword-overlap matcher linking a free-text task name to achievements.

Deterministic: same inputs always give the same ranking.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

MAX_KEYWORDS = 5
MAX_RESULTS = 5
MAX_REASONS = 3
MAX_CONFIDENCE = 100

KEYWORD_SCORE = 20
NAME_OVERLAP_BONUS = 15
CATEGORY_BONUS = 10

STOP_WORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of",
        "with", "by", "from", "is", "are", "was", "were", "be", "have", "has", "had",
        "do", "does", "did", "will", "would", "could", "should", "may", "might",
        "must", "can", "my", "your", "his", "her", "its", "our", "their", "this",
        "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
        "new", "old", "good", "bad", "task", "complete", "finish",
    }
)

_SPLIT_RE = re.compile(r"[\s\-_]+")


@dataclass
class MatchResult:
    achievement: Mapping[str, Any]
    confidence: int
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "achievement": dict(self.achievement),
            "confidence": self.confidence,
            "reasons": self.reasons,
        }


def extract_keywords(text: str) -> list[str]:
    """Lowercase tokens of ``text`` minus stop words and short tokens, first five kept."""
    tokens = _SPLIT_RE.split((text or "").lower())
    keywords = [t for t in tokens if len(t) > 2 and t not in STOP_WORDS]
    return keywords[:MAX_KEYWORDS]


def _description(achievement: Mapping[str, Any]) -> str:
    return achievement.get("description") or achievement.get("desc") or ""


def _score(
    keywords: list[str],
    achievement: Mapping[str, Any],
    category_id: Optional[int],
) -> tuple[int, list[str]]:
    name = achievement.get("name") or ""
    text = f"{name} {_description(achievement)}".lower()

    score = 0
    reasons = []
    for keyword in keywords:
        if keyword in text:
            score += KEYWORD_SCORE
            reasons.append(f'Contains "{keyword}"')

    name_keywords = extract_keywords(name)
    if any(tk in nk or nk in tk for tk in keywords for nk in name_keywords):
        score += NAME_OVERLAP_BONUS

    if category_id and achievement.get("category_id") == category_id:
        score += CATEGORY_BONUS
        reasons.append("Same category")

    return score, reasons


def find_matches(
    task_name: str,
    achievements: Sequence[Mapping[str, Any]],
    category_id: Optional[int] = None,
) -> list[MatchResult]:
    """Rank ``achievements`` by relevance to ``task_name``.

    Zero-score candidates are dropped; the rest are sorted by confidence
    (stable, so ties keep input order) and the top five returned.
    """
    keywords = extract_keywords(task_name)

    matches = []
    for achievement in achievements:
        score, reasons = _score(keywords, achievement, category_id)
        if score > 0:
            matches.append(
                MatchResult(
                    achievement=achievement,
                    confidence=min(score, MAX_CONFIDENCE),
                    reasons=reasons[:MAX_REASONS],
                )
            )

    matches.sort(key=lambda m: m.confidence, reverse=True)
    return matches[:MAX_RESULTS]
