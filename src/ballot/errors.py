"""Typed failures for campaign operations.

Every rejected operation raises one of these before any state is
written, so a caught error always means "nothing changed".
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ballot.models.campaign import WorkflowStatus


class BallotError(Exception):
    """Base class for all campaign errors."""


class AuthorizationError(BallotError):
    """Caller is not allowed to invoke this operation."""


class NotOwnerError(AuthorizationError):
    """Raised when a non-admin calls an admin-only operation."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__("Ownable: caller is not the owner")


class NotAVoterError(AuthorizationError):
    """Raised when an unregistered caller invokes a voter-only operation."""

    def __init__(self, caller: str) -> None:
        self.caller = caller
        super().__init__("You're not a voter")


class UnregisteredCallerError(NotAVoterError):
    """Raised when an unregistered caller reads voter-gated data."""


class InvalidPhaseError(BallotError):
    """Raised when an operation is attempted outside its required phase."""

    def __init__(
        self,
        operation: str,
        current: WorkflowStatus,
        required: WorkflowStatus,
    ) -> None:
        self.operation = operation
        self.current = current
        self.required = required
        super().__init__(
            f"{operation} requires phase {required.value}, "
            f"current phase is {current.value}"
        )


class AlreadyRegisteredError(BallotError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Already registered: {address}")


class AlreadyVotedError(BallotError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__("You have already voted")


class EmptyProposalError(BallotError):
    def __init__(self) -> None:
        super().__init__("Proposal description cannot be empty")


class NotFoundError(BallotError):
    """Unknown voter address or out-of-range proposal index."""


class VoterNotFoundError(NotFoundError):
    def __init__(self, address: str) -> None:
        self.address = address
        super().__init__(f"Voter not found: {address}")


class ProposalNotFoundError(NotFoundError):
    def __init__(self, proposal_id: Any) -> None:
        self.proposal_id = proposal_id
        super().__init__(f"Proposal not found: {proposal_id}")
