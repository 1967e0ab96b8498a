"""Tests for the tally engine — proves lowest-index tie-breaking."""

from ballot.engine.tally import TallyEngine
from ballot.models.campaign import Proposal


def _proposals(*counts: int) -> list[Proposal]:
    return [Proposal(description=f"p{i}", vote_count=c) for i, c in enumerate(counts)]


class TestWinnerSelection:
    def test_highest_count_wins(self) -> None:
        result = TallyEngine.tally(_proposals(0, 1, 2))
        assert result.winning_proposal_id == 2
        assert result.winning_vote_count == 2
        assert result.total_votes == 3

    def test_tie_goes_to_lowest_index(self) -> None:
        result = TallyEngine.tally(_proposals(2, 1, 2))
        assert result.winning_proposal_id == 0

    def test_later_tie_does_not_replace_leader(self) -> None:
        result = TallyEngine.tally(_proposals(1, 3, 3, 3))
        assert result.winning_proposal_id == 1

    def test_all_zero_selects_first(self) -> None:
        result = TallyEngine.tally(_proposals(0, 0, 0))
        assert result.winning_proposal_id == 0
        assert result.total_votes == 0


class TestEmptyCampaign:
    def test_no_proposals_has_no_winner(self) -> None:
        result = TallyEngine.tally([])
        assert result.winning_proposal_id is None
        assert result.winning_vote_count == 0
        assert result.total_votes == 0
