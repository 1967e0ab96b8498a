"""Tally engine — selects the winning proposal once voting has closed.

Proposals are scanned in index order. A later proposal takes the lead
only with a strictly greater vote count, so ties resolve to the
earliest-created proposal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ballot.models.campaign import Proposal


@dataclass(frozen=True)
class TallyResult:
    """Outcome of a tally. winning_proposal_id is None when no proposals exist."""
    winning_proposal_id: Optional[int]
    winning_vote_count: int
    total_votes: int


class TallyEngine:
    """Pure computation over a finalized proposal list."""

    @staticmethod
    def tally(proposals: Sequence[Proposal]) -> TallyResult:
        winner: Optional[int] = None
        best = 0
        total = 0
        for index, proposal in enumerate(proposals):
            total += proposal.vote_count
            if winner is None or proposal.vote_count > best:
                winner = index
                best = proposal.vote_count
        return TallyResult(
            winning_proposal_id=winner,
            winning_vote_count=best,
            total_votes=total,
        )
