"""Database models."""

from perfreview.models.cycle import Cycle
from perfreview.models.evaluation import EvaluationRow
from perfreview.models.consensus import ConsensusRow
from perfreview.models.pdi import PDIPlanRow

__all__ = ["Cycle", "EvaluationRow", "ConsensusRow", "PDIPlanRow"]
