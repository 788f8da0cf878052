"""Shared loading flag and message slot"""


class StatusSlot:
    """
    Global loading flag plus the single most-recent user-facing message.

    Every dashboard operation writes here without queuing or locking, so the
    contract is last-writer-wins: whichever write happens last is what readers
    see. An empty message means "no message". ``revision`` increases on every
    write so callers can tell which write they are looking at.
    """

    def __init__(self) -> None:
        self._is_loading = False
        self._message = ""
        self.revision = 0

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def message(self) -> str:
        return self._message

    def set_loading(self, loading: bool) -> None:
        self._is_loading = loading
        self.revision += 1

    def set_message(self, message: str) -> None:
        """Overwrite the message; messages are never accumulated"""
        self._message = message
        self.revision += 1

    def clear_message(self) -> None:
        self.set_message("")
