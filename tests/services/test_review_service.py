"""Tests for the pull request lifecycle and team administration."""

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import OperationalError

from conftest import make_team
from reviewer_service.models.dtos import PullRequestDTO, UserDTO
from reviewer_service.models.pull_request import PullRequestStatus
from reviewer_service.services.errors import (
    AuthorNotFoundError,
    ErrorKind,
    NoReviewersAvailableError,
    PRMergedError,
    PullRequestExistsError,
    PullRequestNotFoundError,
    ReviewerNotAssignedError,
    TeamExistsError,
    TeamNotFoundError,
    UserNotFoundError,
)
from reviewer_service.services.review_service import ReviewService


class TestTeamAdministration:
    """add_team / get_team / set_user_active."""

    def test_add_team_returns_members_in_request_order(self, review_service):
        team = review_service.add_team(make_team("backend", [
            ("u3", "Carol", True),
            ("u1", "Alice", False),
            ("u2", "Bob", True),
        ]))

        assert team.team_name == "backend"
        assert [m.user_id for m in team.members] == ["u3", "u1", "u2"]
        assert [m.is_active for m in team.members] == [True, False, True]

    def test_add_existing_team_fails(self, review_service, dev_team):
        with pytest.raises(TeamExistsError) as exc_info:
            review_service.add_team(make_team("dev-team", [("zed", "Zed", True)]))

        assert exc_info.value.kind is ErrorKind.TEAM_EXISTS
        assert "dev-team" in exc_info.value.message

    def test_get_team(self, review_service, dev_team):
        team = review_service.get_team("dev-team")

        assert team == dev_team

    def test_get_unknown_team(self, review_service):
        with pytest.raises(TeamNotFoundError):
            review_service.get_team("nope")

    def test_set_user_active(self, review_service, dev_team):
        user = review_service.set_user_active("david", True)

        assert user == UserDTO(user_id="david", username="David", team_name="dev-team", is_active=True)
        assert review_service.get_team("dev-team").members[3].is_active is True

    def test_set_unknown_user_active(self, review_service):
        with pytest.raises(UserNotFoundError):
            review_service.set_user_active("ghost", False)

    def test_team_with_no_members(self, review_service):
        team = review_service.add_team(make_team("empty", []))
        assert team.members == []


class TestCreatePullRequest:
    """create_pull_request."""

    def test_dev_team_scenario(self, review_service, dev_team, clock):
        pr = review_service.create_pull_request("pr-001", "Add search", "alice")

        assert pr.status == PullRequestStatus.OPEN
        assert len(pr.assigned_reviewers) == 2
        assert set(pr.assigned_reviewers) <= {"bob", "charlie"}
        assert "alice" not in pr.assigned_reviewers
        assert "david" not in pr.assigned_reviewers
        assert pr.created_at == clock()
        assert pr.merged_at is None

    def test_reviewers_follow_team_order(self, review_service, dev_team):
        pr = review_service.create_pull_request("pr-001", "Add search", "alice")
        assert pr.assigned_reviewers == ["bob", "charlie"]

    def test_only_author_active_gives_no_reviewers(self, review_service):
        review_service.add_team(make_team("solo", [
            ("solo-1", "Author", True),
            ("solo-2", "Sleeper", False),
        ]))

        pr = review_service.create_pull_request("pr-solo", "Lonely change", "solo-1")

        assert pr.assigned_reviewers == []
        assert pr.status == PullRequestStatus.OPEN

    def test_one_candidate_gives_one_reviewer(self, review_service):
        review_service.add_team(make_team("pair", [("p1", "One", True), ("p2", "Two", True)]))

        pr = review_service.create_pull_request("pr-pair", "Pairing", "p1")

        assert pr.assigned_reviewers == ["p2"]

    def test_inactive_author_can_still_create(self, review_service, dev_team):
        pr = review_service.create_pull_request("pr-david", "From inactive", "david")
        assert pr.assigned_reviewers == ["alice", "bob"]

    def test_unknown_author(self, review_service, dev_team):
        with pytest.raises(AuthorNotFoundError) as exc_info:
            review_service.create_pull_request("pr-x", "Ghost PR", "ghost")

        assert exc_info.value.kind is ErrorKind.AUTHOR_NOT_FOUND
        assert exc_info.value.author_id == "ghost"

    def test_duplicate_id(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "First", "alice")

        with pytest.raises(PullRequestExistsError):
            review_service.create_pull_request("pr-001", "Second", "bob")

    def test_duplicate_id_checked_before_author(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "First", "alice")

        with pytest.raises(PullRequestExistsError):
            review_service.create_pull_request("pr-001", "Second", "ghost")

    def test_persisted(self, review_service, pr_store, dev_team):
        created = review_service.create_pull_request("pr-001", "Add search", "alice")
        assert pr_store.get_by_id("pr-001") == created


class TestMergePullRequest:
    """merge_pull_request."""

    def test_merge_sets_status_and_timestamp(self, review_service, dev_team, clock):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        merge_time = clock.advance(hours=2)

        pr = review_service.merge_pull_request("pr-001")

        assert pr.status == PullRequestStatus.MERGED
        assert pr.merged_at == merge_time
        assert pr.assigned_reviewers == ["bob", "charlie"]

    def test_merge_is_idempotent(self, review_service, dev_team, clock):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        clock.advance(minutes=5)
        first = review_service.merge_pull_request("pr-001")

        clock.advance(minutes=5)
        second = review_service.merge_pull_request("pr-001")

        assert second.merged_at == first.merged_at
        assert second == first

    def test_merge_unknown(self, review_service):
        with pytest.raises(PullRequestNotFoundError):
            review_service.merge_pull_request("missing")


class TestReassignReviewer:
    """reassign_reviewer."""

    @pytest.fixture
    def big_team(self, review_service):
        return review_service.add_team(make_team("reassign-team", [
            ("u5000", "Alice", True),
            ("u5001", "Bob", True),
            ("u5002", "Charlie", True),
            ("u5003", "David", True),
        ]))

    def test_replaces_in_place(self, review_service, big_team):
        review_service.create_pull_request("pr-r1", "Reassign me", "u5000")

        pr, new_reviewer = review_service.reassign_reviewer("pr-r1", "u5001")

        assert new_reviewer == "u5003"
        assert pr.assigned_reviewers == ["u5003", "u5002"]

    def test_replaces_second_slot_keeping_first(self, review_service, big_team):
        review_service.create_pull_request("pr-r1", "Reassign me", "u5000")

        pr, new_reviewer = review_service.reassign_reviewer("pr-r1", "u5002")

        assert pr.assigned_reviewers == ["u5001", "u5003"]
        assert len(pr.assigned_reviewers) == 2

    def test_new_reviewer_is_never_author_or_current(self, review_service, big_team):
        review_service.create_pull_request("pr-r1", "Reassign me", "u5000")

        _, new_reviewer = review_service.reassign_reviewer("pr-r1", "u5001")

        assert new_reviewer not in {"u5000", "u5001", "u5002"}

    def test_persists(self, review_service, pr_store, big_team):
        review_service.create_pull_request("pr-r1", "Reassign me", "u5000")
        pr, _ = review_service.reassign_reviewer("pr-r1", "u5001")

        assert pr_store.get_by_id("pr-r1").assigned_reviewers == pr.assigned_reviewers

    def test_single_reviewer_slot(self, review_service):
        review_service.add_team(make_team("trio", [
            ("t1", "A", True), ("t2", "B", True), ("t3", "C", False),
        ]))
        review_service.create_pull_request("pr-t", "Trio", "t1")
        review_service.set_user_active("t3", True)

        pr, new_reviewer = review_service.reassign_reviewer("pr-t", "t2")

        assert new_reviewer == "t3"
        assert pr.assigned_reviewers == ["t3"]

    def test_unknown_pull_request(self, review_service, big_team):
        with pytest.raises(PullRequestNotFoundError):
            review_service.reassign_reviewer("missing", "u5001")

    def test_merged_pull_request(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        review_service.merge_pull_request("pr-001")

        with pytest.raises(PRMergedError) as exc_info:
            review_service.reassign_reviewer("pr-001", "bob")

        assert exc_info.value.kind is ErrorKind.PR_MERGED

    def test_merged_check_comes_before_assignment_check(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        review_service.merge_pull_request("pr-001")

        with pytest.raises(PRMergedError):
            review_service.reassign_reviewer("pr-001", "david")

    def test_reviewer_not_assigned(self, review_service, big_team):
        review_service.create_pull_request("pr-r1", "Reassign me", "u5000")

        with pytest.raises(ReviewerNotAssignedError) as exc_info:
            review_service.reassign_reviewer("pr-r1", "u5003")

        assert exc_info.value.user_id == "u5003"
        assert exc_info.value.pull_request_id == "pr-r1"

    def test_no_spare_candidate(self, review_service, dev_team):
        # alice authors; bob and charlie review; david is inactive
        review_service.create_pull_request("pr-001", "Add search", "alice")

        with pytest.raises(NoReviewersAvailableError) as exc_info:
            review_service.reassign_reviewer("pr-001", "bob")

        assert exc_info.value.kind is ErrorKind.NO_REVIEWERS_AVAILABLE
        assert exc_info.value.team_name == "dev-team"

    def test_no_candidate_leaves_pull_request_unchanged(self, review_service, pr_store, dev_team):
        before = review_service.create_pull_request("pr-001", "Add search", "alice")

        with pytest.raises(NoReviewersAvailableError):
            review_service.reassign_reviewer("pr-001", "bob")

        assert pr_store.get_by_id("pr-001") == before

    def test_reactivated_member_becomes_candidate(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        review_service.set_user_active("david", True)

        pr, new_reviewer = review_service.reassign_reviewer("pr-001", "charlie")

        assert new_reviewer == "david"
        assert pr.assigned_reviewers == ["bob", "david"]

    def test_pool_uses_old_reviewers_current_team(self, review_service, dev_team):
        review_service.create_pull_request("pr-001", "Add search", "alice")
        # bob moves to another team that has a spare active member
        review_service.add_team(make_team("platform", [
            ("bob", "Bob", True),
            ("paula", "Paula", True),
        ]))

        pr, new_reviewer = review_service.reassign_reviewer("pr-001", "bob")

        assert new_reviewer == "paula"
        assert pr.assigned_reviewers == ["paula", "charlie"]


class TestGetUserReviews:
    """get_user_reviews."""

    def test_lists_all_statuses(self, review_service, dev_team, clock):
        review_service.create_pull_request("pr-1", "One", "alice")
        clock.advance(minutes=1)
        review_service.create_pull_request("pr-2", "Two", "alice")
        review_service.merge_pull_request("pr-1")

        reviews = review_service.get_user_reviews("bob")

        assert [pr.pull_request_id for pr in reviews] == ["pr-1", "pr-2"]
        assert [pr.status for pr in reviews] == [PullRequestStatus.MERGED, PullRequestStatus.OPEN]

    def test_user_without_reviews(self, review_service, dev_team):
        review_service.create_pull_request("pr-1", "One", "alice")
        assert review_service.get_user_reviews("alice") == []

    def test_unknown_user(self, review_service):
        with pytest.raises(UserNotFoundError):
            review_service.get_user_reviews("ghost")

    def test_reflects_reassignment(self, review_service, dev_team):
        review_service.create_pull_request("pr-1", "One", "alice")
        review_service.set_user_active("david", True)
        review_service.reassign_reviewer("pr-1", "bob")

        assert review_service.get_user_reviews("bob") == []
        assert [pr.pull_request_id for pr in review_service.get_user_reviews("david")] == ["pr-1"]


class TestStoreFailures:
    """Failures that are not domain decisions pass through untouched."""

    @pytest.fixture
    def stores(self):
        return MagicMock(), MagicMock(), MagicMock()

    def test_infrastructure_error_propagates(self, stores):
        team_store, user_store, pr_store = stores
        pr_store.exists.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        service = ReviewService(team_store, user_store, pr_store)

        with pytest.raises(OperationalError):
            service.create_pull_request("pr-1", "One", "alice")

        assert pr_store.exists.call_count == 1

    def test_merged_pull_request_is_not_written(self, stores):
        team_store, user_store, pr_store = stores
        pr_store.get_by_id.return_value = PullRequestDTO(
            pull_request_id="pr-1",
            pull_request_name="One",
            author_id="alice",
            status=PullRequestStatus.MERGED,
            assigned_reviewers=["bob"],
        )
        service = ReviewService(team_store, user_store, pr_store)

        service.merge_pull_request("pr-1")

        pr_store.update.assert_not_called()

    def test_author_lookup_failure_becomes_author_not_found(self, stores):
        team_store, user_store, pr_store = stores
        pr_store.exists.return_value = False
        user_store.get_by_id.side_effect = UserNotFoundError("ghost")
        service = ReviewService(team_store, user_store, pr_store)

        with pytest.raises(AuthorNotFoundError):
            service.create_pull_request("pr-1", "One", "ghost")

        pr_store.create.assert_not_called()
