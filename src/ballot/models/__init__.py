"""Core data models for ballot campaigns."""

from ballot.models.campaign import Proposal, Voter, WorkflowStatus

__all__ = [
    "Proposal",
    "Voter",
    "WorkflowStatus",
]
