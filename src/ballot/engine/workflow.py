"""Workflow controller — the campaign phase state machine.

Rules:
- Six phases, strictly linear. Each transition requires the current
  phase to be the exact predecessor. No skipping, no regression.
- Admin-only operations compare the caller against the admin identity
  fixed at construction. Voter-only operations require a registered
  caller.
- Checks run in a fixed order: caller authorization, then phase, then
  operation-specific validation. All checks complete before the ledger
  is touched, so a rejected call leaves no trace.
- Each successful operation appends exactly one event and returns it.

The controller does no locking. Callers that share a campaign across
threads must serialize access themselves (see BallotService).
"""

from __future__ import annotations

from typing import Any, Optional

from ballot.engine.ledger import CampaignLedger
from ballot.engine.tally import TallyEngine, TallyResult
from ballot.errors import (
    AlreadyRegisteredError,
    AlreadyVotedError,
    EmptyProposalError,
    InvalidPhaseError,
    NotAVoterError,
    NotOwnerError,
    ProposalNotFoundError,
    UnregisteredCallerError,
)
from ballot.models.campaign import Proposal, Voter, WorkflowStatus
from ballot.observability.logging import get_logger
from ballot.persistence.event_log import EventKind, EventLog, EventRecord

log = get_logger(__name__)


# Phase-advancing operations and the phase each one must start from.
_TRANSITIONS: dict[str, WorkflowStatus] = {
    "start_proposals_registration": WorkflowStatus.REGISTERING_VOTERS,
    "end_proposals_registration": WorkflowStatus.PROPOSALS_REGISTRATION_STARTED,
    "start_voting_session": WorkflowStatus.PROPOSALS_REGISTRATION_ENDED,
    "end_voting_session": WorkflowStatus.VOTING_SESSION_STARTED,
    "tally_votes": WorkflowStatus.VOTING_SESSION_ENDED,
}


class WorkflowController:
    """Owns the ledger for one campaign and gates every mutation.

    Usage:
        controller = WorkflowController(admin="owner")
        controller.register_voter("owner", "alice")
        controller.start_proposals_registration("owner")
        controller.add_proposal("alice", "Extend library hours")
        controller.end_proposals_registration("owner")
        controller.start_voting_session("owner")
        controller.set_vote("alice", 0)
        controller.end_voting_session("owner")
        controller.tally_votes("owner")
        controller.winning_proposal_id  # -> 0
    """

    def __init__(
        self,
        admin: str,
        event_log: Optional[EventLog] = None,
    ) -> None:
        if not admin:
            raise ValueError("Campaign admin identity cannot be empty")
        self._admin = admin
        self._ledger = CampaignLedger()
        self._event_log = event_log if event_log is not None else EventLog()
        self._status = WorkflowStatus.REGISTERING_VOTERS
        self._tally: Optional[TallyResult] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def workflow_status(self) -> WorkflowStatus:
        return self._status

    @property
    def winning_proposal_id(self) -> Optional[int]:
        """Index of the winning proposal; None until votes are tallied."""
        return self._tally.winning_proposal_id if self._tally else None

    @property
    def tally_result(self) -> Optional[TallyResult]:
        return self._tally

    @property
    def event_log(self) -> EventLog:
        return self._event_log

    @property
    def voter_count(self) -> int:
        return self._ledger.voter_count

    @property
    def proposal_count(self) -> int:
        return self._ledger.proposal_count

    def get_voter(self, caller: str, address: str) -> Voter:
        """Return a voter record. Readable by registered voters only."""
        self._require_reader(caller)
        return self._ledger.get_voter(address)

    def get_proposal(self, caller: str, proposal_id: Any) -> Proposal:
        """Return a proposal record. Readable by registered voters only."""
        self._require_reader(caller)
        return self._ledger.get_proposal(proposal_id)

    def proposals(self, caller: str) -> list[Proposal]:
        self._require_reader(caller)
        return self._ledger.proposals()

    # ------------------------------------------------------------------
    # Voter registration
    # ------------------------------------------------------------------

    def register_voter(self, caller: str, address: str) -> EventRecord:
        self._require_admin(caller)
        self._require_phase("register_voter", WorkflowStatus.REGISTERING_VOTERS)
        if self._ledger.is_registered(address):
            raise AlreadyRegisteredError(address)

        self._ledger.register_voter(address)
        log.info("voter_registered", address=address)
        return self._emit(
            EventKind.VOTER_REGISTERED, caller, {"voter_address": address},
        )

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    def start_proposals_registration(self, caller: str) -> EventRecord:
        return self._advance(caller, "start_proposals_registration")

    def add_proposal(self, caller: str, description: str) -> EventRecord:
        self._require_voter(caller)
        self._require_phase(
            "add_proposal", WorkflowStatus.PROPOSALS_REGISTRATION_STARTED,
        )
        if not isinstance(description, str) or not description.strip():
            raise EmptyProposalError()

        proposal_id = self._ledger.append_proposal(description)
        log.info("proposal_registered", proposal_id=proposal_id, author=caller)
        return self._emit(
            EventKind.PROPOSAL_REGISTERED, caller, {"proposal_id": proposal_id},
        )

    def end_proposals_registration(self, caller: str) -> EventRecord:
        return self._advance(caller, "end_proposals_registration")

    # ------------------------------------------------------------------
    # Voting
    # ------------------------------------------------------------------

    def start_voting_session(self, caller: str) -> EventRecord:
        return self._advance(caller, "start_voting_session")

    def set_vote(self, caller: str, proposal_id: int) -> EventRecord:
        self._require_voter(caller)
        self._require_phase("set_vote", WorkflowStatus.VOTING_SESSION_STARTED)
        if self._ledger.get_voter(caller).has_voted:
            raise AlreadyVotedError(caller)
        if not self._ledger.has_proposal(proposal_id):
            raise ProposalNotFoundError(proposal_id)

        self._ledger.record_vote(caller, proposal_id)
        log.info("vote_cast", voter=caller, proposal_id=proposal_id)
        return self._emit(
            EventKind.VOTED, caller, {"voter": caller, "proposal_id": proposal_id},
        )

    def end_voting_session(self, caller: str) -> EventRecord:
        return self._advance(caller, "end_voting_session")

    # ------------------------------------------------------------------
    # Tallying
    # ------------------------------------------------------------------

    def tally_votes(self, caller: str) -> EventRecord:
        self._require_admin(caller)
        self._require_phase("tally_votes", _TRANSITIONS["tally_votes"])

        self._tally = TallyEngine.tally(self._ledger.proposals())
        log.info(
            "votes_tallied",
            winning_proposal_id=self._tally.winning_proposal_id,
            winning_vote_count=self._tally.winning_vote_count,
            total_votes=self._tally.total_votes,
        )
        return self._change_status(caller)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_admin(self, caller: str) -> None:
        if caller != self._admin:
            raise NotOwnerError(caller)

    def _require_voter(self, caller: str) -> None:
        if not self._ledger.is_registered(caller):
            raise NotAVoterError(caller)

    def _require_reader(self, caller: str) -> None:
        if not self._ledger.is_registered(caller):
            raise UnregisteredCallerError(caller)

    def _require_phase(self, operation: str, required: WorkflowStatus) -> None:
        if self._status is not required:
            raise InvalidPhaseError(operation, self._status, required)

    def _advance(self, caller: str, operation: str) -> EventRecord:
        """Run a plain admin-only phase transition."""
        self._require_admin(caller)
        self._require_phase(operation, _TRANSITIONS[operation])
        return self._change_status(caller)

    def _change_status(self, caller: str) -> EventRecord:
        previous = self._status
        new = previous.next()
        # Only reachable from a validated non-terminal phase.
        assert new is not None
        self._status = new
        log.info(
            "workflow_status_changed",
            previous_status=previous.value,
            new_status=new.value,
        )
        return self._emit(
            EventKind.WORKFLOW_STATUS_CHANGE,
            caller,
            {"previous_status": previous.ordinal, "new_status": new.ordinal},
        )

    def _emit(
        self, kind: EventKind, actor_id: str, payload: dict[str, Any],
    ) -> EventRecord:
        event = EventRecord.create(
            event_id=self._event_log.next_event_id(),
            event_kind=kind,
            actor_id=actor_id,
            payload=payload,
        )
        self._event_log.append(event)
        return event
