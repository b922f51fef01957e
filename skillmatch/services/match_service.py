# skillmatch/services/match_service.py
"""
Match Scorer
Ranks other users by bidirectional skill overlap with a requester.

    can_teach_me      = |candidate.teach ∩ requester.learn|
    can_learn_from_me = |candidate.learn ∩ requester.teach|
    score             = can_teach_me + can_learn_from_me

Ordering is score desc, reputation average desc, user id asc.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from skillmatch import models
from skillmatch.crud import user as user_crud
from skillmatch.schemas.match import MatchCandidate, TeacherOption
from skillmatch.services.skill_index import SkillIndex, overlap


def score_candidate(requester: SkillIndex, candidate: SkillIndex) -> tuple[List[str], List[str]]:
    """
    Return ``(can_teach_me, can_learn_from_me)`` skill labels.

    Labels come from the candidate's side for what they teach and from the
    requester's side for what the candidate wants from them.
    """
    can_teach_me = overlap(candidate, requester)
    can_learn_from_me = overlap(requester, candidate)
    return can_teach_me, can_learn_from_me


def match_score(requester: models.User, candidate: models.User) -> int:
    can_teach_me, can_learn_from_me = score_candidate(
        SkillIndex.for_user(requester),
        SkillIndex.for_user(candidate),
    )
    return len(can_teach_me) + len(can_learn_from_me)


def _rank_key(candidate: MatchCandidate):
    return (-candidate.score, -candidate.reputation_average, candidate.user_id)


def rank_matches(
    db: Session,
    requester_id: int,
    *,
    name_filter: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[MatchCandidate]:
    """
    Ranked candidates for ``requester_id``.

    Args:
        db: Database session
        requester_id: User asking for matches
        name_filter: Optional case-insensitive substring on display name
        limit: Optional maximum number of candidates

    Raises:
        NotFound: If the requester does not exist
    """
    requester = user_crud.require_user(db, requester_id)
    requester_index = SkillIndex.for_user(requester)
    needle = (name_filter or "").strip().casefold()

    candidates = []
    for user in user_crud.list_users(db):
        if user.id == requester.id:
            continue
        can_teach_me, can_learn_from_me = score_candidate(
            requester_index, SkillIndex.for_user(user)
        )
        score = len(can_teach_me) + len(can_learn_from_me)
        if score == 0:
            continue
        if needle and needle not in (user.display_name or "").casefold():
            continue
        candidates.append(
            MatchCandidate(
                user_id=user.id,
                display_name=user.display_name,
                score=score,
                can_teach_me=can_teach_me,
                can_learn_from_me=can_learn_from_me,
                reputation_average=user.reputation_average or 0.0,
            )
        )

    candidates.sort(key=_rank_key)
    if limit is not None:
        candidates = candidates[:limit]
    return candidates


def bookable_skills(db: Session, student_id: int, teacher_id: int) -> List[str]:
    """Skills ``teacher_id`` teaches that ``student_id`` wants, in the teacher's casing."""
    student = user_crud.require_user(db, student_id, role="Student")
    teacher = user_crud.require_user(db, teacher_id, role="Teacher")
    return overlap(SkillIndex.for_user(teacher), SkillIndex.for_user(student))


def available_teachers(db: Session, student_id: int) -> List[TeacherOption]:
    """Users teaching at least one skill the student wants, ordered by id."""
    student = user_crud.require_user(db, student_id, role="Student")
    student_index = SkillIndex.for_user(student)

    options = []
    for user in user_crud.list_users(db):
        if user.id == student.id:
            continue
        skills = overlap(SkillIndex.for_user(user), student_index)
        if skills:
            options.append(
                TeacherOption(user_id=user.id, display_name=user.display_name, skills=skills)
            )
    return options
