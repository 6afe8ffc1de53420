from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from pomodoro_clock.core.app_state import AppState
from pomodoro_clock.core.clock import UNTITLED_TASK
from pomodoro_clock.core.phase import Phase
from pomodoro_clock.core.settings import TimerSettings
from pomodoro_clock.core.timer import PomodoroTimer
from pomodoro_clock.data.storage import CLOCK_CANCELLED, CLOCK_DONE
from pomodoro_clock.ui.styles import phase_label_style
from pomodoro_clock.ui.tray import APP_TITLE, TrayStatusSink


logger = logging.getLogger(__name__)

PHASE_TITLES = {
    Phase.IDLE: "Idle",
    Phase.WORK: "Pomodoro",
    Phase.SHORT_BREAK: "Short break",
    Phase.LONG_BREAK: "Long break",
}


class MainWindow(QMainWindow):
    def __init__(self, timer: PomodoroTimer, app_state: AppState, status_sink: TrayStatusSink) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(820, 520)

        self.timer = timer
        self.app_state = app_state
        self.status_sink = status_sink

        self._build_ui()
        self._connect_signals()
        self._load_settings_form(self.app_state.settings)
        self.refresh_tasks()
        self.refresh_history()
        self._refresh_current_task()
        self._on_status_changed(self.status_sink.text)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        split = QSplitter(Qt.Orientation.Horizontal)
        left = QWidget()
        right = QWidget()
        split.addWidget(left)
        split.addWidget(right)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 1)

        root_layout = QHBoxLayout(central)
        root_layout.addWidget(split)

        left_layout = QVBoxLayout(left)
        self.phase_label = QLabel(PHASE_TITLES[Phase.IDLE])
        self.phase_label.setObjectName("Heading")
        self.status_label = QLabel("")
        self.status_label.setObjectName("TimerLabel")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.count_label = QLabel("0")
        self.count_label.setObjectName("StatValue")
        left_layout.addWidget(self.phase_label)
        left_layout.addWidget(self.status_label, 1)

        counter_row = QHBoxLayout()
        counter_row.addWidget(QLabel("Pomodoros since long break:"))
        counter_row.addWidget(self.count_label)
        counter_row.addStretch()
        left_layout.addLayout(counter_row)

        self.toggle_btn = QPushButton("Start")
        self.toggle_btn.setObjectName("PrimaryButton")
        controls = QHBoxLayout()
        controls.addWidget(self.toggle_btn)
        controls.addStretch()
        left_layout.addLayout(controls)

        settings_box = QWidget()
        settings_form = QFormLayout(settings_box)
        self.work_minutes = self._minutes_spin(1, 240)
        self.short_break_minutes = self._minutes_spin(1, 120)
        self.long_break_minutes = self._minutes_spin(1, 240)
        self.long_break_frequency = self._minutes_spin(1, 20)
        self.play_sounds = QCheckBox("Play sounds")
        settings_form.addRow("Pomodoro min:", self.work_minutes)
        settings_form.addRow("Short break min:", self.short_break_minutes)
        settings_form.addRow("Long break min:", self.long_break_minutes)
        settings_form.addRow("Long break after:", self.long_break_frequency)
        settings_form.addRow("", self.play_sounds)
        left_layout.addWidget(settings_box)

        right_layout = QVBoxLayout(right)
        task_bar = QHBoxLayout()
        self.task_input = QLineEdit()
        self.task_input.setPlaceholderText("New task")
        self.add_task_btn = QPushButton("Add")
        self.remove_task_btn = QPushButton("Remove")
        self.task_up_btn = QPushButton("Up")
        self.task_down_btn = QPushButton("Down")
        task_bar.addWidget(self.task_input, 1)
        task_bar.addWidget(self.add_task_btn)
        task_bar.addWidget(self.remove_task_btn)
        task_bar.addWidget(self.task_up_btn)
        task_bar.addWidget(self.task_down_btn)
        self.current_task_label = QLabel("")
        self.current_task_label.setObjectName("MutedText")

        self.task_list = QListWidget()
        self.history_list = QListWidget()
        heading = QLabel("Tasks")
        heading.setObjectName("SubtleTitle")
        right_layout.addWidget(heading)
        right_layout.addWidget(self.current_task_label)
        right_layout.addLayout(task_bar)
        right_layout.addWidget(self.task_list, 1)
        heading = QLabel("Clocked pomodoros")
        heading.setObjectName("SubtleTitle")
        right_layout.addWidget(heading)
        right_layout.addWidget(self.history_list, 1)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.toggle)
        self.addAction(space_action)

    def _minutes_spin(self, low: int, high: int) -> QSpinBox:
        spin = QSpinBox()
        spin.setRange(low, high)
        return spin

    def _connect_signals(self) -> None:
        self.toggle_btn.clicked.connect(self.toggle)
        self.add_task_btn.clicked.connect(self._add_task)
        self.task_input.returnPressed.connect(self._add_task)
        self.remove_task_btn.clicked.connect(self._remove_task)
        self.task_up_btn.clicked.connect(lambda: self._move_selected_task(-1))
        self.task_down_btn.clicked.connect(lambda: self._move_selected_task(1))
        self.task_list.itemChanged.connect(self._on_task_item_changed)
        for spin in (self.work_minutes, self.short_break_minutes, self.long_break_minutes, self.long_break_frequency):
            spin.valueChanged.connect(self._apply_settings_form)
        self.play_sounds.toggled.connect(self._apply_settings_form)

        self.status_sink.status_changed.connect(self._on_status_changed)
        self.app_state.tasks_changed.connect(self.refresh_tasks)
        self.app_state.history_changed.connect(self.refresh_history)
        self.app_state.state_changed.connect(self._refresh_current_task)
        self.app_state.settings_changed.connect(self.timer.configure)
        for hook in ("started", "work_finished", "break_finished", "killed"):
            self.timer.hooks.register(hook, self._on_timer_transition)

    def toggle(self) -> None:
        self.timer.toggle(self._confirm_kill)

    def _confirm_kill(self) -> bool:
        answer = QMessageBox.question(
            self,
            "Pomodoro",
            "There is already a running timer. Stop it?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return answer == QMessageBox.StandardButton.Yes

    def _on_timer_transition(self) -> None:
        self.app_state.refresh_history()
        self._update_controls()

    def _on_status_changed(self, _text: str) -> None:
        snapshot = self.timer.snapshot()
        self.phase_label.setText(PHASE_TITLES[snapshot.phase])
        self.phase_label.setStyleSheet(phase_label_style(snapshot.phase))
        self.status_label.setText(snapshot.status_text)
        self.count_label.setText(str(snapshot.completed_work_count))
        self._update_controls()

    def _update_controls(self) -> None:
        self.toggle_btn.setText("Kill" if self.timer.is_running else "Start")

    def _load_settings_form(self, settings: TimerSettings) -> None:
        widgets = (self.work_minutes, self.short_break_minutes, self.long_break_minutes, self.long_break_frequency, self.play_sounds)
        for widget in widgets:
            widget.blockSignals(True)
        self.work_minutes.setValue(settings.work_minutes)
        self.short_break_minutes.setValue(settings.short_break_minutes)
        self.long_break_minutes.setValue(settings.long_break_minutes)
        self.long_break_frequency.setValue(settings.long_break_frequency)
        self.play_sounds.setChecked(settings.play_sounds)
        for widget in widgets:
            widget.blockSignals(False)

    def _apply_settings_form(self, *_args) -> None:
        try:
            self.app_state.update_settings(
                work_minutes=self.work_minutes.value(),
                short_break_minutes=self.short_break_minutes.value(),
                long_break_minutes=self.long_break_minutes.value(),
                long_break_frequency=self.long_break_frequency.value(),
                play_sounds=self.play_sounds.isChecked(),
            )
        except ValueError as exc:
            logger.warning("Rejected settings: %s", exc)
            self._load_settings_form(self.app_state.settings)

    def _add_task(self) -> None:
        title = self.task_input.text()
        if not self.app_state.add_task(title):
            QMessageBox.information(self, "Tasks", "Task title is empty or the task list is full.")
            return
        self.task_input.clear()

    def _remove_task(self) -> None:
        item = self.task_list.currentItem()
        if item is None:
            return
        self.app_state.remove_task(item.data(Qt.ItemDataRole.UserRole))

    def _move_selected_task(self, direction: int) -> None:
        item = self.task_list.currentItem()
        if item is None:
            return
        task_id = item.data(Qt.ItemDataRole.UserRole)
        if direction < 0:
            self.app_state.move_task_up(task_id)
        else:
            self.app_state.move_task_down(task_id)
        self._select_task(task_id)

    def _select_task(self, task_id: int) -> None:
        for row in range(self.task_list.count()):
            if self.task_list.item(row).data(Qt.ItemDataRole.UserRole) == task_id:
                self.task_list.setCurrentRow(row)
                return

    def _refresh_current_task(self) -> None:
        task = self.app_state.current_task()
        title = task.title if task else UNTITLED_TASK
        self.current_task_label.setText(f"Clocking into: {title}")

    def _on_task_item_changed(self, item: QListWidgetItem) -> None:
        done = item.checkState() == Qt.CheckState.Checked
        self.app_state.toggle_task_done(item.data(Qt.ItemDataRole.UserRole), done)

    def refresh_tasks(self) -> None:
        self.task_list.blockSignals(True)
        self.task_list.clear()
        for task in self.app_state.tasks:
            item = QListWidgetItem(task.title, self.task_list)
            item.setData(Qt.ItemDataRole.UserRole, task.id)
            item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
            item.setCheckState(Qt.CheckState.Checked if task.is_done else Qt.CheckState.Unchecked)
        self.task_list.blockSignals(False)

    def refresh_history(self) -> None:
        self.history_list.clear()
        for row in self.app_state.history:
            if row.status == CLOCK_DONE:
                status = "✅"
            elif row.status == CLOCK_CANCELLED:
                status = "❌"
            else:
                status = "⏳"
            minutes = (row.duration_sec or 0) // 60
            QListWidgetItem(f"{status} {row.started_at} · {minutes}m · {row.task_title}", self.history_list)

    def closeEvent(self, event) -> None:  # noqa: N802
        if self.timer.is_running:
            answer = QMessageBox.question(
                self,
                "Exit",
                "A pomodoro is running. Exit and kill it?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            )
            if answer == QMessageBox.StandardButton.Yes:
                self.timer.kill()
                event.accept()
            else:
                event.ignore()
            return
        event.accept()
