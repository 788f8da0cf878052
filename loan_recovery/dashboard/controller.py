"""Dashboard composition root: snapshot, shared status and per-loan analyzers"""

import logging
from typing import Dict, Tuple

from loan_recovery.dashboard.analyzer import LoanAnalyzer
from loan_recovery.dashboard.fetcher import CollectionFetcher
from loan_recovery.dashboard.status import StatusSlot
from loan_recovery.domain.models import AnalyzerState, JoinedEntry, Snapshot
from loan_recovery.infrastructure.clients.scoring import ScoringClient


class Dashboard:
    """
    State container consumed by the rendering layer.

    Exposes the joined view, the shared loading/message slot and one analyzer
    per loan in the current snapshot. Analyzers are created when a loan appears
    in a refreshed snapshot and dropped when it disappears.
    """

    def __init__(self, client: ScoringClient | None = None):
        self.client = client or ScoringClient()
        self.status = StatusSlot()
        self.fetcher = CollectionFetcher(self.client, self.status, on_snapshot=self._sync_analyzers)
        self._analyzers: Dict[str, LoanAnalyzer] = {}

    @property
    def view(self) -> Tuple[JoinedEntry, ...]:
        return self.fetcher.view

    async def refresh(self) -> None:
        await self.fetcher.refresh()

    async def train(self) -> None:
        await self.fetcher.train()

    async def analyze(self, loan_id: str) -> AnalyzerState:
        """
        Run prediction then strategy for one loan.

        A loan id outside the current snapshot is still sent to the scoring
        service, on a detached analyzer: its result is returned but not kept.
        """
        analyzer = self._analyzers.get(loan_id)
        if analyzer is None:
            logging.warning("Analyzing loan outside current snapshot", extra={"loan_id": loan_id})
            analyzer = LoanAnalyzer(loan_id, self.client, self.status)
        return await analyzer.analyze()

    def analysis(self, loan_id: str) -> AnalyzerState:
        analyzer = self._analyzers.get(loan_id)
        return analyzer.state if analyzer is not None else AnalyzerState()

    def _sync_analyzers(self, snapshot: Snapshot) -> None:
        current = snapshot.loan_ids
        # In-flight runs on dropped analyzers finish on the dropped instance
        for loan_id in [loan_id for loan_id in self._analyzers if loan_id not in current]:
            del self._analyzers[loan_id]
        for loan in snapshot.loans:
            if loan.id not in self._analyzers:
                self._analyzers[loan.id] = LoanAnalyzer(loan.id, self.client, self.status)
