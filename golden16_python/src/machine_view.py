from PySide6.QtWidgets import QWidget
from PySide6.QtGui import QPainter, QColor, QFont, QPen
from PySide6.QtCore import Qt, QRect

import arithmetic as arith
import emulator as em

class MachineView(QWidget):
    def __init__(self, regfile, parent=None):
        super().__init__(parent)
        self.rf = regfile
        self.last_result = None
        self.setMinimumSize(600, 400)

    def set_result(self, result):
        self.last_result = result
        self.update_view()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        background_color = QColor("#1a1a1a")
        component_fill_color = QColor("#2a2a2a")
        component_border_color = QColor("#007acc")
        text_color = QColor("#e0e0e0")
        value_color = QColor("#00ff00")
        bus_color = QColor("#ff8c00")
        highlight_color = QColor("#ffff00")

        painter.fillRect(self.rect(), background_color)

        # --- Decode block ---
        dec_rect = QRect(self.width() // 2 - 100, 50, 260, 200)
        painter.fillRect(dec_rect, component_fill_color)
        painter.setPen(QPen(component_border_color, 2))
        painter.drawRect(dec_rect)
        painter.setPen(text_color)
        painter.setFont(QFont("Arial", 14, QFont.Bold))
        painter.drawText(dec_rect.adjusted(0, 0, 0, -dec_rect.height() + 30), Qt.AlignCenter, "Decode")

        painter.setFont(QFont("Courier New", 10))
        painter.setPen(value_color)
        x = dec_rect.x() + 15
        y = dec_rect.y() + 55
        line_height = 18
        r = self.last_result
        if r is None:
            painter.drawText(x, y, "no instruction executed")
        else:
            d = r.decoded
            lines = [
                f"instr : {arith.word_to_hex4(d.instr)}",
                f"op    : {d.opcode:x} {d.mnemonic}",
                f"d a b : {d.dest_reg:x} {d.src1_reg:x} {d.src2_reg:x}",
                f"imm   : {arith.word_to_hex4(d.src2_imm)}",
                f"value : {arith.word_to_hex4(r.dest_value)}",
                f"{em.show_instr(d)}",
                f"record: {r.to_record()}",
            ]
            for i, line in enumerate(lines):
                painter.drawText(x, y + i * line_height, line)

        # --- Register file ---
        gpr_rect = QRect(50, dec_rect.y(), 160, 290)
        painter.fillRect(gpr_rect, component_fill_color)
        painter.setPen(QPen(component_border_color, 2))
        painter.drawRect(gpr_rect)
        painter.setPen(text_color)
        painter.setFont(QFont("Arial", 12, QFont.Bold))
        painter.drawText(gpr_rect.adjusted(0, 0, 0, -gpr_rect.height() + 20), Qt.AlignCenter, "Registers")

        painter.setFont(QFont("Courier New", 9))
        written = r.dest_reg if r is not None and r.dest_reg != 0 else None
        reg_y_offset = gpr_rect.y() + 35
        reg_height = 16
        for i in range(len(self.rf)):
            value = self.rf.regs[i]
            painter.setPen(QPen(highlight_color, 1) if i == written else text_color)
            painter.drawText(gpr_rect.x() + 8, reg_y_offset + i * reg_height,
                             f"R{i:<2}: {arith.word_to_hex4(value)} {arith.word_to_int(value):6d}")

        # --- Write-back bus ---
        painter.setPen(QPen(bus_color, 2, Qt.DotLine))
        painter.drawLine(dec_rect.left(), dec_rect.center().y(), gpr_rect.right(), gpr_rect.center().y())

        painter.end()

    def update_view(self):
        self.update()
