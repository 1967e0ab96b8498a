"""Campaign data models — voters, proposals, and the workflow phases.

A campaign moves through six phases, one-way and without skipping:

    REGISTERING_VOTERS → PROPOSALS_REGISTRATION_STARTED →
    PROPOSALS_REGISTRATION_ENDED → VOTING_SESSION_STARTED →
    VOTING_SESSION_ENDED → VOTES_TALLIED

Records handed out to callers are frozen snapshots. Only the ledger
holds the mutable versions.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class WorkflowStatus(str, enum.Enum):
    """Campaign workflow phases, in order."""
    REGISTERING_VOTERS = "registering_voters"
    PROPOSALS_REGISTRATION_STARTED = "proposals_registration_started"
    PROPOSALS_REGISTRATION_ENDED = "proposals_registration_ended"
    VOTING_SESSION_STARTED = "voting_session_started"
    VOTING_SESSION_ENDED = "voting_session_ended"
    VOTES_TALLIED = "votes_tallied"

    @property
    def ordinal(self) -> int:
        """Position in the workflow (0 = initial, 5 = terminal)."""
        return _PHASE_ORDER.index(self)

    @property
    def is_terminal(self) -> bool:
        return self is WorkflowStatus.VOTES_TALLIED

    def next(self) -> Optional[WorkflowStatus]:
        """Return the successor phase, or None for the terminal phase."""
        if self.is_terminal:
            return None
        return _PHASE_ORDER[self.ordinal + 1]


_PHASE_ORDER: tuple[WorkflowStatus, ...] = tuple(WorkflowStatus)


@dataclass(frozen=True)
class Voter:
    """A registered voter.

    voted_proposal_id is 0 both before voting and after voting for
    proposal 0. Always check has_voted before reading it.
    """
    address: str
    is_registered: bool = True
    has_voted: bool = False
    voted_proposal_id: int = 0


@dataclass(frozen=True)
class Proposal:
    """A proposal submitted during the registration window."""
    description: str
    vote_count: int = 0
