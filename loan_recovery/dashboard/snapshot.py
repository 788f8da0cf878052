"""Borrower lookup and loan/borrower join over a snapshot"""

from typing import Dict, Tuple

from loan_recovery.domain.models import Borrower, JoinedEntry, Snapshot


class BorrowerIndex:
    """
    Borrower-by-id mapping memoized on snapshot version.

    The mapping is rebuilt only when a snapshot with a different version is
    presented, i.e. after borrowers have been re-fetched.
    """

    def __init__(self) -> None:
        self._version: int | None = None
        self._by_id: Dict[str, Borrower] = {}
        self.builds = 0

    def mapping_for(self, snapshot: Snapshot) -> Dict[str, Borrower]:
        if snapshot.version != self._version:
            self._by_id = {borrower.id: borrower for borrower in snapshot.borrowers}
            self._version = snapshot.version
            self.builds += 1
        return self._by_id


def join_loans(snapshot: Snapshot, index: BorrowerIndex) -> Tuple[JoinedEntry, ...]:
    """Pair every loan, in fetch order, with its borrower or None when unresolved"""
    by_id = index.mapping_for(snapshot)
    return tuple(JoinedEntry(loan=loan, borrower=by_id.get(loan.borrower_id)) for loan in snapshot.loans)
