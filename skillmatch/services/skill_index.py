# skillmatch/services/skill_index.py
"""
Skill Index
Normalized teach/learn views over a user's skill rows.

Two labels that normalize equal are the same skill for matching; the label
as first entered is kept for display.
"""

import re
from typing import Dict, Iterable, List

from skillmatch.models.user import SkillType

_WHITESPACE = re.compile(r"\s+")


def normalize(skill: str) -> str:
    """Trim, collapse internal whitespace and casefold a skill label."""
    return _WHITESPACE.sub(" ", (skill or "").strip()).casefold()


def clean_label(skill: str) -> str:
    """Display form: trimmed with internal whitespace collapsed, casing kept."""
    return _WHITESPACE.sub(" ", (skill or "").strip())


def dedupe_skills(labels: Iterable[str]) -> List[str]:
    """
    Drop empty and normalized-duplicate labels, keeping the first casing seen.

    >>> dedupe_skills(["Python", " python ", "Machine  Learning", ""])
    ['Python', 'Machine Learning']
    """
    seen = set()
    result = []
    for raw in labels or []:
        key = normalize(raw)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(clean_label(raw))
    return result


class SkillIndex:
    """
    Per-user normalized skill sets for membership tests.

    Built from a ``User`` row each time it is needed; there is no cache to
    invalidate, so a query always sees the profile as last committed.
    """

    def __init__(self, teach: Iterable[str], learn: Iterable[str]):
        self._teach: Dict[str, str] = {}
        self._learn: Dict[str, str] = {}
        for label in teach:
            self._teach.setdefault(normalize(label), clean_label(label))
        for label in learn:
            self._learn.setdefault(normalize(label), clean_label(label))
        self._teach.pop("", None)
        self._learn.pop("", None)

    @classmethod
    def for_user(cls, user) -> "SkillIndex":
        teach = [s.label for s in user.skills if s.skill_type == SkillType.TEACH.value]
        learn = [s.label for s in user.skills if s.skill_type == SkillType.LEARN.value]
        return cls(teach, learn)

    @property
    def teach_keys(self) -> frozenset:
        return frozenset(self._teach)

    @property
    def learn_keys(self) -> frozenset:
        return frozenset(self._learn)

    def teaches(self, skill: str) -> bool:
        return normalize(skill) in self._teach

    def wants(self, skill: str) -> bool:
        return normalize(skill) in self._learn

    def teach_label(self, skill: str) -> str:
        """Display label for a taught skill, or the cleaned input if unknown."""
        return self._teach.get(normalize(skill), clean_label(skill))

    def learn_label(self, skill: str) -> str:
        return self._learn.get(normalize(skill), clean_label(skill))


def teaches(user, skill: str) -> bool:
    return SkillIndex.for_user(user).teaches(skill)


def wants(user, skill: str) -> bool:
    return SkillIndex.for_user(user).wants(skill)


def overlap(offering: SkillIndex, wanting: SkillIndex) -> List[str]:
    """
    Skills ``offering`` teaches that ``wanting`` wants to learn.

    Returned as the offering side's display labels, sorted by normalized form.
    """
    shared = offering.teach_keys & wanting.learn_keys
    return [offering.teach_label(key) for key in sorted(shared)]
