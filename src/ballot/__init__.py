"""Ballot — an authorization-gated voting workflow for a single campaign."""

from ballot.engine.workflow import WorkflowController
from ballot.models.campaign import Proposal, Voter, WorkflowStatus
from ballot.service import BallotService, ServiceResult

__version__ = "0.1.0"

__all__ = [
    "BallotService",
    "Proposal",
    "ServiceResult",
    "Voter",
    "WorkflowController",
    "WorkflowStatus",
]
