"""
Contact form widget.

ContactFormWidget owns the Qt event subscriptions for the form and forwards
every event to a FormController. After each operation it renders the
controller's FormState; it never applies validation rules itself.
"""

from __future__ import annotations

import logging

from PySide6.QtCore import QEvent, QObject, Qt, QTimer, Signal, Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.error_handler import get_error_handler
from core.form_controller import FormController, SubmitOutcome, SubmitStatus
from core.form_state import FieldKey, FieldUpdate, FormState, SubmissionPhase
from core.settings import FormConfig
from gui.submission import SendSimulator
from gui.utils.styling import apply_field_state, apply_flash, apply_warning

logger = logging.getLogger(__name__)

SEND_LABEL = "Send Message"
SENDING_LABEL = "Sending…"

FORM_PAGE = 0
SUCCESS_PAGE = 1

ERROR_FLASH_MS = 400


class ContactFormWidget(QWidget):
    """
    Contact form with live validation, progress and simulated sending.

    Signals:
        formStateChanged(object): FormState after any rendered change
        submissionSucceeded(): The success screen was shown
        errorFlashed(object): FieldKey whose unchanged error was highlighted again
    """

    formStateChanged = Signal(object)  # FormState
    submissionSucceeded = Signal()
    errorFlashed = Signal(object)  # FieldKey

    def __init__(self, config: FormConfig | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.config = config or FormConfig()
        self.controller = FormController(self.config.rules)
        self.sender = SendSimulator(self.config.send_delay_ms, parent=self)
        self._error_handler = get_error_handler()

        self._flash_timer = QTimer(self)
        self._flash_timer.setSingleShot(True)
        self._flash_timer.setInterval(ERROR_FLASH_MS)

        self._setup_ui()
        self._connect_signals()
        self._render()

    # UI construction

    def _setup_ui(self) -> None:
        self.setObjectName("contactForm")
        self.setAccessibleName("Contact form")

        self.stack = QStackedWidget(self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.addWidget(self.stack)

        self.stack.addWidget(self._build_form_view())
        self.stack.addWidget(self._build_success_view())

        # Ctrl+Enter (Cmd+Enter on macOS) submits from anywhere in the form
        self.submit_action = QAction(self)
        self.submit_action.setShortcuts([QKeySequence("Ctrl+Return"), QKeySequence("Ctrl+Enter")])
        self.submit_action.setShortcutContext(Qt.ShortcutContext.WidgetWithChildrenShortcut)
        self.addAction(self.submit_action)

    def _build_form_view(self) -> QWidget:
        view = QWidget()
        view.setObjectName("formView")
        layout = QVBoxLayout(view)

        self.progress_bar = QProgressBar()
        self.progress_bar.setObjectName("progressBar")
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setAccessibleName("Form completion")
        layout.addWidget(self.progress_bar)

        self.name_input = QLineEdit()
        self.name_input.setPlaceholderText("Your name")
        self.email_input = QLineEdit()
        self.email_input.setPlaceholderText("you@example.com")
        self.message_input = QPlainTextEdit()
        self.message_input.setPlaceholderText("How can we help?")
        self.message_input.setTabChangesFocus(True)

        self.inputs: dict[FieldKey, QLineEdit | QPlainTextEdit] = {
            FieldKey.NAME: self.name_input,
            FieldKey.EMAIL: self.email_input,
            FieldKey.MESSAGE: self.message_input,
        }
        self.error_labels: dict[FieldKey, QLabel] = {}

        form_layout = QFormLayout()
        for key, widget in self.inputs.items():
            widget.setObjectName(f"{key.value}Input")
            widget.setAccessibleName(key.value.capitalize())

            error_label = QLabel()
            error_label.setObjectName("fieldError")
            error_label.setWordWrap(True)
            self.error_labels[key] = error_label

            field_box = QVBoxLayout()
            field_box.setSpacing(2)
            field_box.addWidget(widget)
            field_box.addWidget(error_label)
            if key is FieldKey.MESSAGE:
                self.char_count_label = QLabel()
                self.char_count_label.setObjectName("charCount")
                self.char_count_label.setAlignment(Qt.AlignmentFlag.AlignRight)
                field_box.addWidget(self.char_count_label)

            form_layout.addRow(f"{key.value.capitalize()}:", field_box)
        layout.addLayout(form_layout)

        buttons = QHBoxLayout()
        self.reset_button = QPushButton("Reset")
        self.reset_button.setObjectName("resetButton")
        self.submit_button = QPushButton(SEND_LABEL)
        self.submit_button.setObjectName("submitButton")
        self.submit_button.setDefault(True)
        buttons.addStretch()
        buttons.addWidget(self.reset_button)
        buttons.addWidget(self.submit_button)
        layout.addLayout(buttons)

        return view

    def _build_success_view(self) -> QWidget:
        view = QWidget()
        view.setObjectName("successScreen")
        layout = QVBoxLayout(view)
        layout.addStretch()

        title = QLabel("Message sent!")
        title.setObjectName("successTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(title)

        body = QLabel("Thanks for reaching out. We'll get back to you soon.")
        body.setAlignment(Qt.AlignmentFlag.AlignCenter)
        body.setWordWrap(True)
        layout.addWidget(body)

        self.send_another_button = QPushButton("Send another")
        self.send_another_button.setObjectName("sendAnotherButton")
        layout.addWidget(self.send_another_button, alignment=Qt.AlignmentFlag.AlignCenter)
        layout.addStretch()

        return view

    def _connect_signals(self) -> None:
        self.name_input.textChanged.connect(lambda: self._on_input(FieldKey.NAME))
        self.email_input.textChanged.connect(lambda: self._on_input(FieldKey.EMAIL))
        self.message_input.textChanged.connect(lambda: self._on_input(FieldKey.MESSAGE))

        for widget in self.inputs.values():
            widget.installEventFilter(self)

        self.submit_button.clicked.connect(self.submit)
        self.submit_action.triggered.connect(self.submit)
        self.reset_button.clicked.connect(self.reset)
        self.send_another_button.clicked.connect(self.start_over)
        self.sender.sendFinished.connect(self._on_send_finished)
        self._flash_timer.timeout.connect(self._clear_flash)

    # Event handling

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.FocusOut:
            for key, widget in self.inputs.items():
                if watched is widget:
                    self._apply_update(self.controller.on_field_blur(key, self.value(key)), replay_cue=True)
                    break
        return super().eventFilter(watched, event)

    def _on_input(self, key: FieldKey) -> None:
        self._apply_update(self.controller.on_field_input(key, self.value(key)))

    def _apply_update(self, update: FieldUpdate, replay_cue: bool = False) -> None:
        if update.ignored:
            return
        self._render()
        # Re-checking a field that is still wrong leaves nothing new on screen
        if replay_cue and update.validated and not update.changed and update.state.is_invalid:
            self.flash_error(update.key)

    def flash_error(self, key: FieldKey) -> None:
        """Briefly highlight a field's error message again."""
        apply_flash(self.error_labels[key], True)
        self._flash_timer.start()
        self.errorFlashed.emit(key)

    @Slot()
    def _clear_flash(self) -> None:
        for label in self.error_labels.values():
            apply_flash(label, False)

    @Slot()
    def submit(self) -> SubmitOutcome:
        """Validate the whole form and start sending when it passes."""
        outcome = self.controller.on_submit(self.values())

        if outcome.status is SubmitStatus.IGNORED:
            if outcome.error is not None:
                self._error_handler.handle(outcome.error)
            return outcome

        self._render()

        if outcome.status is SubmitStatus.REJECTED:
            for key, result in outcome.results.items():
                if not result.valid:
                    self._error_handler.report_field_error(key.value, result.message)
            if outcome.first_invalid is not None:
                self.inputs[outcome.first_invalid].setFocus()
            return outcome

        # A send left over from before a reset must not complete this submission
        self.sender.restart()
        return outcome

    @Slot()
    def reset(self) -> None:
        """Clear the form, whatever state it is in."""
        self.controller.reset_form()
        self._clear_inputs()
        self._render()

    @Slot()
    def start_over(self) -> None:
        """Leave the success screen for a fresh form."""
        result = self.controller.start_over()
        if not result.ok and result.error is not None:
            self._error_handler.handle(result.error)
            return
        self._render()
        self.name_input.setFocus()

    @Slot()
    def _on_send_finished(self) -> None:
        result = self.controller.complete_submission()
        if not result.ok and result.error is not None:
            # The form was reset while the send was in flight
            self._error_handler.handle(result.error)
            return

        self._clear_inputs()
        self._render()
        self.submissionSucceeded.emit()

    # Rendering

    def value(self, key: FieldKey) -> str:
        widget = self.inputs[key]
        if isinstance(widget, QPlainTextEdit):
            return widget.toPlainText()
        return widget.text()

    def values(self) -> dict[FieldKey, str]:
        return {key: self.value(key) for key in FieldKey}

    def _clear_inputs(self) -> None:
        for widget in self.inputs.values():
            widget.blockSignals(True)
            try:
                widget.clear()
            finally:
                widget.blockSignals(False)

    def _render(self) -> None:
        state = self.controller.state

        for key, widget in self.inputs.items():
            field_state = state.fields[key]
            apply_field_state(widget, field_state)
            self.error_labels[key].setText(field_state.message)
            widget.setAccessibleDescription(f"Error: {field_state.message}" if field_state.is_invalid else "")
            widget.setReadOnly(state.phase is not SubmissionPhase.IDLE)

        self.progress_bar.setValue(state.progress_percent)
        self.char_count_label.setText(f"{state.character_count} / {self.config.rules.message_max_length}")
        apply_warning(self.char_count_label, state.character_warning)

        self.submit_button.setEnabled(state.can_submit)
        self.submit_button.setText(SENDING_LABEL if state.is_loading else SEND_LABEL)
        self.reset_button.setEnabled(state.phase is not SubmissionPhase.SUCCEEDED)
        self.stack.setCurrentIndex(SUCCESS_PAGE if state.phase is SubmissionPhase.SUCCEEDED else FORM_PAGE)

        self.formStateChanged.emit(state)

    def form_state(self) -> FormState:
        return self.controller.state
