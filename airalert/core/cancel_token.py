"""Cancellation flag shared by one activation's timer and check cycles"""


class CancelToken:
    """
    Marks the cycles of one activation as discarded

    A new token is handed out on every activation; deactivation cancels
    it so that cycles still in flight skip dispatching their alerts.
    """

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self):
        self._cancelled = True
