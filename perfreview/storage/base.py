"""Persistence collaborator contract.

Implementations must make ``create_consensus`` atomic with respect to the
(employee_id, cycle_id) uniqueness constraint and raise ConflictError when
it is violated. That constraint, not any in-process check, is what
guarantees at most one consensus per pair. Timeouts and connectivity
failures surface as TransientError.
"""

from typing import Protocol

from perfreview.schemas.consensus import ConsensusRecord
from perfreview.schemas.cycle import CycleStatus, EvaluationCycle
from perfreview.schemas.evaluation import Evaluation, EvaluationType
from perfreview.schemas.pdi import PDIPlan


class ReviewStore(Protocol):
    async def get_cycle(self, cycle_id: str) -> EvaluationCycle | None: ...

    async def list_cycles(self) -> list[EvaluationCycle]: ...

    async def create_cycle(self, cycle: EvaluationCycle) -> EvaluationCycle: ...

    async def set_cycle_status(self, cycle_id: str, status: CycleStatus) -> EvaluationCycle: ...

    async def get_evaluation(
        self, employee_id: str, cycle_id: str, evaluation_type: EvaluationType
    ) -> Evaluation | None: ...

    async def save_evaluation(self, evaluation: Evaluation) -> Evaluation: ...

    async def consensus_exists(self, employee_id: str, cycle_id: str) -> bool: ...

    async def get_consensus(self, employee_id: str, cycle_id: str) -> ConsensusRecord | None: ...

    async def create_consensus(self, record: ConsensusRecord) -> ConsensusRecord: ...

    async def get_pdi_plan(self, employee_id: str) -> PDIPlan | None: ...

    async def save_pdi_plan(self, plan: PDIPlan) -> PDIPlan: ...
