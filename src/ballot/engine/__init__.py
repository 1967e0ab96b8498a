"""Campaign engine — ledger, workflow state machine, and tally."""

from ballot.engine.ledger import CampaignLedger
from ballot.engine.tally import TallyEngine, TallyResult
from ballot.engine.workflow import WorkflowController

__all__ = ["CampaignLedger", "TallyEngine", "TallyResult", "WorkflowController"]
