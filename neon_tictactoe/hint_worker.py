import logging

from PySide6.QtCore import QObject, Signal, Slot

logger = logging.getLogger(__name__)


class HintWorker(QObject):
    """
    qt worker that runs the blocking advisor call off the gui thread
    """
    hint_ready = Signal(object, object)   # ticket, HintSuggestion

    def __init__(self, advisor):
        """
        keep the advisor; the worker is moved to its own QThread by the window
        """
        super().__init__()
        self.advisor = advisor

    @Slot(object)
    def request_hint(self, ticket):
        """
        ask the advisor for the ticket's position, emit the answer
        """
        logger.debug("hint request %s started", ticket.request_id)
        # request_hint never raises; failures come back as the fallback
        suggestion = self.advisor.request_hint(ticket.board, ticket.mark)
        self.hint_ready.emit(ticket, suggestion)
