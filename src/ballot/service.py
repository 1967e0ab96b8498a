"""Ballot service — facade over one voting campaign.

This is the interface for harnesses, front-ends, and the CLI. It wraps
a WorkflowController and:
- turns typed campaign errors into ServiceResult values,
- serializes concurrent callers with a single re-entrant lock,
- logs every rejected operation with its error type.

The controller stays the source of truth; nothing here mutates the
ledger except through controller operations.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Optional

from ballot.engine.workflow import WorkflowController
from ballot.errors import BallotError
from ballot.models.campaign import WorkflowStatus
from ballot.observability.logging import get_logger
from ballot.persistence.event_log import EventKind, EventLog, EventRecord

log = get_logger(__name__)


@dataclass(frozen=True)
class ServiceResult:
    """Result of a service operation."""
    success: bool
    errors: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


class BallotService:
    """Campaign facade.

    Usage:
        service = BallotService(admin="owner")
        service.register_voter("owner", "alice")
        service.start_proposals_registration("owner")
        result = service.add_proposal("alice", "Extend library hours")
        result.data["event"]["payload"]["proposal_id"]  # -> 0
    """

    # Operation names accepted by dispatch(), mapped to their argument names.
    OPERATIONS: dict[str, tuple[str, ...]] = {
        "register_voter": ("address",),
        "start_proposals_registration": (),
        "add_proposal": ("description",),
        "end_proposals_registration": (),
        "start_voting_session": (),
        "set_vote": ("proposal_id",),
        "end_voting_session": (),
        "tally_votes": (),
        "get_voter": ("address",),
        "get_proposal": ("proposal_id",),
    }

    def __init__(self, admin: str, event_log: Optional[EventLog] = None) -> None:
        self._controller = WorkflowController(admin, event_log=event_log)
        self._lock = threading.RLock()

    @property
    def controller(self) -> WorkflowController:
        return self._controller

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def register_voter(self, caller: str, address: str) -> ServiceResult:
        return self._run_event(
            "register_voter", caller, lambda: self._controller.register_voter(caller, address),
        )

    def start_proposals_registration(self, caller: str) -> ServiceResult:
        return self._run_event(
            "start_proposals_registration", caller,
            lambda: self._controller.start_proposals_registration(caller),
        )

    def add_proposal(self, caller: str, description: str) -> ServiceResult:
        return self._run_event(
            "add_proposal", caller,
            lambda: self._controller.add_proposal(caller, description),
        )

    def end_proposals_registration(self, caller: str) -> ServiceResult:
        return self._run_event(
            "end_proposals_registration", caller,
            lambda: self._controller.end_proposals_registration(caller),
        )

    def start_voting_session(self, caller: str) -> ServiceResult:
        return self._run_event(
            "start_voting_session", caller,
            lambda: self._controller.start_voting_session(caller),
        )

    def set_vote(self, caller: str, proposal_id: int) -> ServiceResult:
        return self._run_event(
            "set_vote", caller, lambda: self._controller.set_vote(caller, proposal_id),
        )

    def end_voting_session(self, caller: str) -> ServiceResult:
        return self._run_event(
            "end_voting_session", caller,
            lambda: self._controller.end_voting_session(caller),
        )

    def tally_votes(self, caller: str) -> ServiceResult:
        def _tally() -> dict[str, Any]:
            event = self._controller.tally_votes(caller)
            return {
                "event": event.to_dict(),
                "winning_proposal_id": self._controller.winning_proposal_id,
            }

        return self._run("tally_votes", caller, _tally)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_voter(self, caller: str, address: str) -> ServiceResult:
        return self._run(
            "get_voter", caller,
            lambda: {"voter": asdict(self._controller.get_voter(caller, address))},
        )

    def get_proposal(self, caller: str, proposal_id: int) -> ServiceResult:
        return self._run(
            "get_proposal", caller,
            lambda: {
                "proposal_id": proposal_id,
                "proposal": asdict(self._controller.get_proposal(caller, proposal_id)),
            },
        )

    @property
    def workflow_status(self) -> WorkflowStatus:
        return self._controller.workflow_status

    @property
    def winning_proposal_id(self) -> Optional[int]:
        return self._controller.winning_proposal_id

    def events(self, kind: Optional[EventKind] = None) -> list[EventRecord]:
        return self._controller.event_log.events(kind)

    def status(self) -> dict[str, Any]:
        """Return a campaign summary."""
        with self._lock:
            status = self._controller.workflow_status
            return {
                "admin": self._controller.admin,
                "workflow_status": status.value,
                "phase": status.ordinal,
                "voters": self._controller.voter_count,
                "proposals": self._controller.proposal_count,
                "winning_proposal_id": self._controller.winning_proposal_id,
                "events": self._controller.event_log.count,
            }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(
        self, operation: str, caller: str, args: Optional[dict[str, Any]] = None,
    ) -> ServiceResult:
        """Invoke an operation by name, as used by scenario replay."""
        args = dict(args or {})
        expected = self.OPERATIONS.get(operation)
        if expected is None:
            return ServiceResult(
                success=False, errors=[f"Unknown operation: {operation}"],
            )
        missing = [name for name in expected if name not in args]
        unexpected = sorted(set(args) - set(expected))
        if missing or unexpected:
            errors = []
            if missing:
                errors.append(f"{operation}: missing argument(s) {', '.join(missing)}")
            if unexpected:
                errors.append(f"{operation}: unexpected argument(s) {', '.join(unexpected)}")
            return ServiceResult(success=False, errors=errors)
        handler = getattr(self, operation)
        return handler(caller, **args)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _run_event(
        self, operation: str, caller: str, action: Callable[[], EventRecord],
    ) -> ServiceResult:
        return self._run(operation, caller, lambda: {"event": action().to_dict()})

    def _run(
        self, operation: str, caller: str, action: Callable[[], dict[str, Any]],
    ) -> ServiceResult:
        with self._lock:
            try:
                data = action()
            except BallotError as e:
                log.info(
                    "operation_rejected",
                    operation=operation,
                    caller=caller,
                    error_type=type(e).__name__,
                    reason=str(e),
                )
                return ServiceResult(
                    success=False,
                    errors=[str(e)],
                    data={"error_type": type(e).__name__},
                )
        return ServiceResult(success=True, data=data)
