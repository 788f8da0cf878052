"""Collection fetcher: borrowers + loans snapshot, and model training"""

import asyncio
import logging
import time
from typing import Callable, Optional, Tuple

from loan_recovery.dashboard.snapshot import BorrowerIndex, join_loans
from loan_recovery.dashboard.status import StatusSlot
from loan_recovery.domain.exceptions import ScoringServiceError
from loan_recovery.domain.formatting import TRAINING_FAILED, format_error, format_training_summary
from loan_recovery.domain.models import JoinedEntry, Snapshot
from loan_recovery.infrastructure.clients.scoring import ScoringClient
from loan_recovery.infrastructure.observability.logging import log_refresh, log_training
from loan_recovery.infrastructure.observability.metrics import record_outcome, refresh_counter, training_counter


class CollectionFetcher:
    """Owns the borrower/loan snapshot and drives refresh() and train()"""

    def __init__(
        self,
        client: ScoringClient,
        status: StatusSlot,
        on_snapshot: Optional[Callable[[Snapshot], None]] = None,
    ):
        self.client = client
        self.status = status
        self.on_snapshot = on_snapshot
        self.snapshot = Snapshot()
        self.index = BorrowerIndex()

    @property
    def view(self) -> Tuple[JoinedEntry, ...]:
        return join_loans(self.snapshot, self.index)

    async def refresh(self) -> None:
        """
        Re-fetch borrowers and loans and replace the snapshot.

        Both requests run concurrently and are awaited until both settle. If
        either fails, nothing is replaced and the message slot gets the error.
        Overlapping refreshes are not checked for staleness: whichever settles
        last installs its snapshot.
        """
        start_time = time.time()
        self.status.set_loading(True)
        try:
            results = await asyncio.gather(
                self.client.list_borrowers(),
                self.client.list_loans(),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            borrowers, loans = results

            self._install(Snapshot(
                borrowers=tuple(borrowers),
                loans=tuple(loans),
                version=self.snapshot.version + 1,
            ))
            self.status.clear_message()

            record_outcome(refresh_counter, True)
            duration_ms = (time.time() - start_time) * 1000
            log_refresh(self.snapshot.version, len(loans), len(borrowers), duration_ms)

        except ScoringServiceError as e:
            record_outcome(refresh_counter, False)
            message = format_error(e)
            self.status.set_message(message)
            logging.error(f"Refresh failed: {e}", extra={"step": "refresh_failed"})

        finally:
            self.status.set_loading(False)

    def _install(self, snapshot: Snapshot) -> None:
        # Single assignment: readers see either the old or the new pair of collections
        self.snapshot = snapshot
        self.index.mapping_for(snapshot)
        if self.on_snapshot is not None:
            self.on_snapshot(snapshot)

    async def train(self) -> None:
        """Retrain the remote model; the snapshot is left untouched"""
        start_time = time.time()
        self.status.set_loading(True)
        self.status.clear_message()
        try:
            result = await self.client.train()
            self.status.set_message(format_training_summary(result))

            record_outcome(training_counter, True)
            log_training(result.samples_used, result.auc, (time.time() - start_time) * 1000)

        except ScoringServiceError as e:
            record_outcome(training_counter, False)
            self.status.set_message(format_error(e, TRAINING_FAILED))
            logging.error(f"Training failed: {e}", extra={"step": "train_failed"})

        finally:
            self.status.set_loading(False)
