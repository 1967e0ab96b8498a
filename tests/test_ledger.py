"""Tests for the campaign ledger — proves registration and indexing rules."""

import pytest

from ballot.engine.ledger import CampaignLedger
from ballot.errors import (
    AlreadyRegisteredError,
    NotFoundError,
    ProposalNotFoundError,
    VoterNotFoundError,
)


@pytest.fixture
def ledger() -> CampaignLedger:
    return CampaignLedger()


class TestVoterRegistration:
    def test_new_voter_defaults(self, ledger: CampaignLedger) -> None:
        ledger.register_voter("alice")
        voter = ledger.get_voter("alice")
        assert voter.is_registered is True
        assert voter.has_voted is False
        assert voter.voted_proposal_id == 0

    def test_duplicate_registration_rejected(self, ledger: CampaignLedger) -> None:
        ledger.register_voter("alice")
        with pytest.raises(AlreadyRegisteredError):
            ledger.register_voter("alice")
        assert ledger.voter_count == 1

    def test_unknown_voter_not_found(self, ledger: CampaignLedger) -> None:
        with pytest.raises(VoterNotFoundError):
            ledger.get_voter("nobody")
        assert ledger.is_registered("nobody") is False


class TestProposalIndexing:
    def test_indexes_are_sequential(self, ledger: CampaignLedger) -> None:
        assert ledger.append_proposal("first") == 0
        assert ledger.append_proposal("second") == 1
        assert ledger.append_proposal("third") == 2
        assert [p.description for p in ledger.proposals()] == ["first", "second", "third"]

    def test_new_proposal_has_zero_votes(self, ledger: CampaignLedger) -> None:
        idx = ledger.append_proposal("first")
        assert ledger.get_proposal(idx).vote_count == 0

    @pytest.mark.parametrize("bad_index", [1, -1, "0", None, True])
    def test_out_of_range_not_found(self, ledger: CampaignLedger, bad_index) -> None:
        ledger.append_proposal("only")
        with pytest.raises(ProposalNotFoundError):
            ledger.get_proposal(bad_index)

    def test_proposal_not_found_is_not_found_error(self, ledger: CampaignLedger) -> None:
        with pytest.raises(NotFoundError):
            ledger.get_proposal(0)


class TestRecordVote:
    def test_vote_updates_voter_and_count(self, ledger: CampaignLedger) -> None:
        ledger.register_voter("alice")
        ledger.append_proposal("a")
        ledger.append_proposal("b")
        ledger.record_vote("alice", 1)

        voter = ledger.get_voter("alice")
        assert voter.has_voted is True
        assert voter.voted_proposal_id == 1
        assert ledger.get_proposal(1).vote_count == 1
        assert ledger.get_proposal(0).vote_count == 0

    def test_returned_records_are_snapshots(self, ledger: CampaignLedger) -> None:
        ledger.register_voter("alice")
        ledger.append_proposal("a")
        before_voter = ledger.get_voter("alice")
        before_proposal = ledger.get_proposal(0)

        ledger.record_vote("alice", 0)

        assert before_voter.has_voted is False
        assert before_proposal.vote_count == 0
        assert ledger.get_proposal(0).vote_count == 1
