"""Domain errors raised by the stores and the review service.

Every domain failure is a ``ReviewServiceError`` whose ``kind`` is one member of
the closed ``ErrorKind`` enum, so callers can map failures exhaustively.
Anything that is not a ``ReviewServiceError`` is an infrastructure failure.
"""

import enum


class ErrorKind(enum.Enum):
    """Closed set of domain failure kinds."""

    TEAM_EXISTS = "TeamExists"
    TEAM_NOT_FOUND = "TeamNotFound"
    USER_NOT_FOUND = "UserNotFound"
    AUTHOR_NOT_FOUND = "AuthorNotFound"
    PULL_REQUEST_EXISTS = "PullRequestExists"
    PULL_REQUEST_NOT_FOUND = "PullRequestNotFound"
    PR_MERGED = "PRMerged"
    REVIEWER_NOT_ASSIGNED = "ReviewerNotAssigned"
    NO_REVIEWERS_AVAILABLE = "NoReviewersAvailable"


class ReviewServiceError(Exception):
    """Base class for domain decision failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TeamExistsError(ReviewServiceError):
    kind = ErrorKind.TEAM_EXISTS

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"Team {team_name} already exists")


class TeamNotFoundError(ReviewServiceError):
    kind = ErrorKind.TEAM_NOT_FOUND

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"Team {team_name} not found")


class UserNotFoundError(ReviewServiceError):
    kind = ErrorKind.USER_NOT_FOUND

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class AuthorNotFoundError(ReviewServiceError):
    kind = ErrorKind.AUTHOR_NOT_FOUND

    def __init__(self, author_id: str):
        self.author_id = author_id
        super().__init__(f"Author {author_id} not found")


class PullRequestExistsError(ReviewServiceError):
    kind = ErrorKind.PULL_REQUEST_EXISTS

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"PR id {pull_request_id} already exists")


class PullRequestNotFoundError(ReviewServiceError):
    kind = ErrorKind.PULL_REQUEST_NOT_FOUND

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"Pull request {pull_request_id} not found")


class PRMergedError(ReviewServiceError):
    kind = ErrorKind.PR_MERGED

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"Cannot reassign on merged PR {pull_request_id}")


class ReviewerNotAssignedError(ReviewServiceError):
    kind = ErrorKind.REVIEWER_NOT_ASSIGNED

    def __init__(self, pull_request_id: str, user_id: str):
        self.pull_request_id = pull_request_id
        self.user_id = user_id
        super().__init__(
            f"Reviewer {user_id} is not assigned to pull request {pull_request_id}"
        )


class NoReviewersAvailableError(ReviewServiceError):
    kind = ErrorKind.NO_REVIEWERS_AVAILABLE

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"No active replacement candidate in team {team_name}")


class ConcurrentUpdateError(Exception):
    """A conditional update found the row changed since it was read.

    Not a domain decision: the caller may re-read and retry.
    """

    def __init__(self, entity_id: str, expected_version: int):
        self.entity_id = entity_id
        self.expected_version = expected_version
        super().__init__(
            f"{entity_id} was modified concurrently (expected version {expected_version})"
        )
