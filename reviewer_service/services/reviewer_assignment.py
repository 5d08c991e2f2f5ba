"""Reviewer selection rules.

Selection is deterministic: candidates are taken in the team's stored member
order, never shuffled or load-balanced. These functions do no I/O.
"""

from typing import Iterable, List, Optional

from reviewer_service.models.dtos import UserDTO

# Fixed assignment policy
MAX_REVIEWERS = 2


def candidate_pool(team_members: Iterable[UserDTO], exclude_ids: Iterable[str]) -> List[UserDTO]:
    """Active members not in exclude_ids, preserving team order."""
    excluded = set(exclude_ids)
    return [
        member for member in team_members
        if member.is_active and member.user_id not in excluded
    ]


def select_initial_reviewers(team_members: Iterable[UserDTO], author_id: str) -> List[str]:
    """Pick up to MAX_REVIEWERS reviewers for a new pull request.

    Args:
        team_members: The author's team, in stored order
        author_id: Author of the pull request, never selected

    Returns:
        Reviewer ids, possibly empty when nobody else is active
    """
    candidates = candidate_pool(team_members, [author_id])
    return [member.user_id for member in candidates[:MAX_REVIEWERS]]


def select_replacement(team_members: Iterable[UserDTO], exclude_ids: Iterable[str]) -> Optional[str]:
    """Pick the first active member outside exclude_ids.

    Args:
        team_members: Team to draw from, in stored order
        exclude_ids: Author plus every currently assigned reviewer

    Returns:
        The replacement's user id, or None when no candidate is available
    """
    candidates = candidate_pool(team_members, exclude_ids)
    if not candidates:
        return None
    return candidates[0].user_id
