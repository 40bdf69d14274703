# src/retro_chip8/ui/register_view.py
"""
CPUのレジスタとフラグを表示する汎用ウィジェット。
CPUのレイアウト情報を利用して動的にUIを構築します。
"""
from typing import Dict, List, Optional
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QGridLayout, QLabel, QGroupBox
from PySide6.QtGui import QFontDatabase
from PySide6.QtCore import Qt

from retro_chip8.arch.chip8.cpu import Chip8Cpu

# @intent:responsibility CPUのレジスタ値とフラグ状態を表示する汎用UIウィジェットを提供します。
class RegisterView(QWidget):
    """
    CPUのレジスタ状態を表示するウィジェット。
    CPUから取得したレイアウト情報に基づいて動的にフィールドを生成します。
    """
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #121212; color: #BBBBBB;")

        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(5, 5, 5, 5)

        self._font_family = QFontDatabase.systemFont(QFontDatabase.FixedFont).family()
        self._register_labels: Dict[str, QLabel] = {}
        self._register_widths: Dict[str, int] = {}
        self._flag_labels: Dict[str, QLabel] = {}
        self._key_labels: List[QLabel] = []
        self._cpu: Optional[Chip8Cpu] = None

    # @intent:responsibility 表示対象のCPUを設定し、UIレイアウトを構築します。
    def set_cpu(self, cpu: Chip8Cpu) -> None:
        self._cpu = cpu
        self._setup_ui()

    def _value_label(self, text: str) -> QLabel:
        label = QLabel(text)
        label.setStyleSheet(f"font-family: '{self._font_family}', monospace; color: #FFD700;")
        label.setAlignment(Qt.AlignRight)
        return label

    # @intent:responsibility CPUから取得したレイアウト情報に基づいてUIを構築します。
    def _setup_ui(self):
        while self.layout.count():
            item = self.layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()
        self._register_labels.clear()
        self._register_widths.clear()
        self._flag_labels.clear()
        self._key_labels.clear()

        for group in self._cpu.get_register_layout():
            group_box = QGroupBox(group.group_name)
            group_layout = QFormLayout(group_box)
            group_layout.setLabelAlignment(Qt.AlignLeft)
            group_layout.setSpacing(3)

            for reg in group.registers:
                hex_width = (reg.width + 3) // 4  # 16bit -> 4chars, 8bit -> 2chars
                self._register_widths[reg.name] = hex_width
                label_value = self._value_label(f"0x{'0' * hex_width}")
                group_layout.addRow(QLabel(f"{reg.name}:"), label_value)
                self._register_labels[reg.name] = label_value

            self.layout.addWidget(group_box)

        flag_box = QGroupBox("Flags")
        flag_layout = QHBoxLayout(flag_box)
        for flag_name in self._cpu.get_flag_state():
            label_value = self._value_label("0")
            flag_layout.addWidget(QLabel(f"{flag_name}:"))
            flag_layout.addWidget(label_value)
            self._flag_labels[flag_name] = label_value
        self.layout.addWidget(flag_box)

        # キーパッドは 0〜F を4x4で並べる
        keypad_box = QGroupBox("Keypad")
        keypad_layout = QGridLayout(keypad_box)
        for n in range(len(self._cpu.get_keypad_state())):
            label_value = self._value_label(".")
            label_value.setAlignment(Qt.AlignCenter)
            keypad_layout.addWidget(label_value, n // 4, n % 4)
            self._key_labels.append(label_value)
        self.layout.addWidget(keypad_box)

        self.layout.addStretch()

    # @intent:responsibility 現在のCPU状態を取得し、表示値を更新します。
    def update_registers(self):
        if not self._cpu:
            return

        for name, value in self._cpu.get_register_map().items():
            if name in self._register_labels:
                width = self._register_widths[name]
                self._register_labels[name].setText(f"0x{value:0{width}X}")

        for name, is_set in self._cpu.get_flag_state().items():
            if name in self._flag_labels:
                self._flag_labels[name].setText("1" if is_set else "0")

        for n, pressed in enumerate(self._cpu.get_keypad_state()):
            self._key_labels[n].setText(f"{n:X}" if pressed else ".")

    def register_text(self, name: str) -> str:
        return self._register_labels[name].text()

    def keypad_text(self) -> str:
        return "".join(label.text() for label in self._key_labels)
