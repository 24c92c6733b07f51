"""
Main window for the contact form application.
"""

import logging

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow

from core.settings import FormConfig
from gui.contact_form import ContactFormWidget
from gui.utils.styling import FORM_STYLESHEET


class MainWindow(QMainWindow):
    """Top-level window hosting the contact form."""

    def __init__(self, config: FormConfig | None = None) -> None:
        super().__init__()
        self._logger = logging.getLogger(__name__)

        self.setWindowTitle("Contact Us")
        self.setMinimumSize(420, 480)
        self.setStyleSheet(FORM_STYLESHEET)

        self.form = ContactFormWidget(config, parent=self)
        self.setCentralWidget(self.form)
        self.form.submissionSucceeded.connect(lambda: self.statusBar().showMessage("Message sent", 3000))

        self.form.name_input.setFocus()

    def closeEvent(self, event: QCloseEvent) -> None:
        if self.form.sender.is_active():
            self._logger.info("Closing with a send in flight; the message is dropped")
        super().closeEvent(event)
