"""Per-loan two-step analysis: prediction, then strategy"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Any, Awaitable, Callable, Dict, Tuple

from loan_recovery.dashboard.status import StatusSlot
from loan_recovery.domain.exceptions import ScoringServiceError
from loan_recovery.domain.formatting import PREDICTION_FAILED, STRATEGY_FAILED, format_error
from loan_recovery.domain.models import AnalysisPhase, AnalyzerState
from loan_recovery.infrastructure.clients.scoring import ScoringClient
from loan_recovery.infrastructure.observability.logging import log_analysis
from loan_recovery.infrastructure.observability.metrics import analysis_step_counter, record_outcome


@dataclass(frozen=True)
class AnalysisStep:
    """One remote call of the pipeline and the AnalyzerState field it fills"""

    name: str
    result_field: str
    default_error: str
    call: Callable[[str], Awaitable[Any]]


class LoanAnalyzer:
    """
    Runs the analysis pipeline for a single loan and owns that loan's state.

    Steps run strictly one after another and every step runs once the previous
    one has settled, whether it succeeded or not. A failing step leaves its
    result field empty and overwrites the shared message; a succeeding step
    never touches the message.
    """

    def __init__(self, loan_id: str, client: ScoringClient, status: StatusSlot):
        self.loan_id = loan_id
        self.status = status
        self.state = AnalyzerState()
        self.steps: Tuple[AnalysisStep, ...] = (
            AnalysisStep("predict", "prediction", PREDICTION_FAILED, client.predict),
            AnalysisStep("strategy", "strategy", STRATEGY_FAILED, client.strategy),
        )

    async def analyze(self) -> AnalyzerState:
        start_time = time.time()
        outcomes: Dict[str, bool] = {}
        self.state = replace(self.state, phase=AnalysisPhase.RUNNING, loading=True)
        try:
            for step in self.steps:
                outcomes[step.name] = await self._run_step(step)
        finally:
            self.state = replace(self.state, phase=AnalysisPhase.DONE, loading=False)
            log_analysis(
                self.loan_id,
                outcomes.get("predict", False),
                outcomes.get("strategy", False),
                (time.time() - start_time) * 1000,
            )
        return self.state

    async def _run_step(self, step: AnalysisStep) -> bool:
        try:
            result = await step.call(self.loan_id)
        except ScoringServiceError as e:
            # State is replaced whole, never mutated in place
            self.state = replace(self.state, **{step.result_field: None})
            self.status.set_message(format_error(e, step.default_error))
            record_outcome(analysis_step_counter, False, step=step.name)
            logging.warning(f"{step.name} failed: {e}", extra={"loan_id": self.loan_id, "step": step.name})
            return False

        self.state = replace(self.state, **{step.result_field: result})
        record_outcome(analysis_step_counter, True, step=step.name)
        return True
