"""
Simulated message sending for the contact form.

SendSimulator stands in for a network submission: it waits for a fixed delay
on the Qt event loop and then reports completion exactly once.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QTimer, Signal, Slot

logger = logging.getLogger(__name__)


class SendSimulator(QObject):
    """
    Timer-driven stand-in for an asynchronous submission.

    Signals:
        sendStarted(): A send was started
        sendFinished(): The send completed
    """

    sendStarted = Signal()
    sendFinished = Signal()

    def __init__(self, delay_ms: int = 1000, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._on_timeout)
        self.set_delay(delay_ms)
        self.setObjectName("SendSimulator")

    def delay_ms(self) -> int:
        return self._timer.interval()

    def set_delay(self, delay_ms: int) -> None:
        self._timer.setInterval(max(0, delay_ms))

    def is_active(self) -> bool:
        """Check if a send is currently in flight."""
        return self._timer.isActive()

    @Slot()
    def start(self) -> bool:
        """
        Start a simulated send.

        Returns:
            False if a send is already in flight and nothing was started
        """
        if self._timer.isActive():
            logger.warning("Cannot start send: another send is already in flight")
            return False

        logger.info(f"Sending message (simulated, {self._timer.interval()} ms)")
        self.sendStarted.emit()
        self._timer.start()
        return True

    @Slot()
    def restart(self) -> None:
        """Drop any send in flight and start a new one with the full delay."""
        if self._timer.isActive():
            logger.info("Superseding the send already in flight")
            self._timer.stop()
        self.start()

    @Slot()
    def _on_timeout(self) -> None:
        logger.debug("Simulated send finished")
        self.sendFinished.emit()
