from __future__ import annotations

from PyQt6.QtWidgets import QApplication

from pomodoro_clock.core.phase import Phase


TOMATO = "#d9503a"
LEAF = "#4f8a4b"

PHASE_COLORS = {
    Phase.IDLE: "#7d726a",
    Phase.WORK: TOMATO,
    Phase.SHORT_BREAK: LEAF,
    Phase.LONG_BREAK: "#3f6f9a",
}

THEME_QSS = f"""
QWidget {{
    background: #faf6f2;
    color: #2b2622;
    font-size: 13px;
}}

QLabel, QCheckBox {{
    background: transparent;
}}

QLabel#Heading {{
    font-size: 20px;
    font-weight: 700;
}}

QLabel#SubtleTitle {{
    font-size: 14px;
    font-weight: 600;
    color: #6f645b;
}}

QLabel#MutedText {{
    color: #867b71;
}}

QLabel#TimerLabel {{
    font-size: 52px;
    font-weight: 700;
}}

QLabel#StatValue {{
    font-size: 20px;
    font-weight: 700;
    color: {TOMATO};
}}

QPushButton {{
    border: none;
    background: #f3e9e1;
    border-radius: 14px;
    padding: 8px 14px;
    font-weight: 600;
}}

QPushButton:hover {{
    background: #ecdfd4;
}}

QPushButton#PrimaryButton {{
    background: {TOMATO};
    color: #ffffff;
    border-radius: 20px;
    padding: 10px 28px;
    font-size: 14px;
}}

QPushButton#PrimaryButton:pressed {{
    background: #b9412e;
}}

QLineEdit, QSpinBox {{
    background: #fffaf6;
    border: none;
    border-radius: 12px;
    padding: 6px 10px;
}}

QListWidget {{
    background: #fffaf6;
    border: none;
    border-radius: 12px;
    padding: 6px;
}}

QListWidget::item:selected {{
    background: #f4e4d8;
    color: #2b2622;
}}

QCheckBox::indicator:checked {{
    background: {LEAF};
    border-radius: 8px;
}}

QSplitter::handle {{
    background: transparent;
    width: 16px;
}}
"""


def apply_theme(app: QApplication) -> None:
    app.setStyleSheet(THEME_QSS)


def phase_label_style(phase: Phase) -> str:
    return f"color: {PHASE_COLORS.get(phase, PHASE_COLORS[Phase.IDLE])};"
