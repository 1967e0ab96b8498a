"""Campaign ledger — the in-memory store of voters and proposals.

The ledger holds state for exactly one campaign. It performs no
authorization or phase checks; those belong to the workflow
controller, which is the only component that mutates it.

Records are frozen dataclasses. A mutation replaces the stored record,
so anything previously returned to a caller stays a stable snapshot.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from ballot.errors import (
    AlreadyRegisteredError,
    ProposalNotFoundError,
    VoterNotFoundError,
)
from ballot.models.campaign import Proposal, Voter


class CampaignLedger:
    """Voters keyed by address, proposals in an append-only list.

    Usage:
        ledger = CampaignLedger()
        ledger.register_voter("alice")
        idx = ledger.append_proposal("Extend library hours")
        ledger.record_vote("alice", idx)
    """

    def __init__(self) -> None:
        self._voters: dict[str, Voter] = {}
        self._proposals: list[Proposal] = []

    # ------------------------------------------------------------------
    # Voters
    # ------------------------------------------------------------------

    def register_voter(self, address: str) -> Voter:
        """Insert a fresh voter. Raises AlreadyRegisteredError on duplicates."""
        if address in self._voters:
            raise AlreadyRegisteredError(address)
        voter = Voter(address=address)
        self._voters[address] = voter
        return voter

    def is_registered(self, address: str) -> bool:
        voter = self._voters.get(address)
        return voter is not None and voter.is_registered

    def get_voter(self, address: str) -> Voter:
        voter = self._voters.get(address)
        if voter is None:
            raise VoterNotFoundError(address)
        return voter

    @property
    def voter_count(self) -> int:
        return len(self._voters)

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    def append_proposal(self, description: str) -> int:
        """Append a proposal and return its permanent 0-based index."""
        proposal_id = len(self._proposals)
        self._proposals.append(Proposal(description=description))
        return proposal_id

    def has_proposal(self, proposal_id: Any) -> bool:
        return (
            isinstance(proposal_id, int)
            and not isinstance(proposal_id, bool)
            and 0 <= proposal_id < len(self._proposals)
        )

    def get_proposal(self, proposal_id: Any) -> Proposal:
        if not self.has_proposal(proposal_id):
            raise ProposalNotFoundError(proposal_id)
        return self._proposals[proposal_id]

    def proposals(self) -> list[Proposal]:
        """Return all proposals in index order."""
        return list(self._proposals)

    @property
    def proposal_count(self) -> int:
        return len(self._proposals)

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    def record_vote(self, address: str, proposal_id: int) -> None:
        """Mark the voter as having voted and bump the proposal count.

        The caller must already have checked registration, vote state
        and proposal range.
        """
        voter = self._voters[address]
        proposal = self._proposals[proposal_id]
        self._voters[address] = replace(
            voter, has_voted=True, voted_proposal_id=proposal_id,
        )
        self._proposals[proposal_id] = replace(
            proposal, vote_count=proposal.vote_count + 1,
        )
