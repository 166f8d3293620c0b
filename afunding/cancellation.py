"""
Cancellation token shared between a mounted view and its fetch sequence.
"""


class CancellationToken:
    """Cooperative cancellation flag. Work checks it between network calls."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled
