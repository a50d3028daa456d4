import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QIcon, QTextOption
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QTextEdit, QVBoxLayout, QWidget,
    QTableView, QHeaderView, QSplitter, QGroupBox, QFileDialog, QToolBar
)
from PySide6.QtGui import QStandardItemModel, QStandardItem

import common
import arithmetic as arith
import emulator
import tracer
from machine_view import MachineView

class RegisterModel(QStandardItemModel):
    def __init__(self, regfile):
        super().__init__(len(regfile), 3)
        self.rf = regfile
        self.setHorizontalHeaderLabels(["Register", "Hex", "Int"])

    def update(self, written=None):
        for i in range(len(self.rf)):
            value = self.rf.regs[i]
            value_item = QStandardItem(arith.word_to_hex4(value))
            int_item = QStandardItem(str(arith.word_to_int(value)))
            if i == written:
                value_item.setBackground(Qt.GlobalColor.yellow)
                int_item.setBackground(Qt.GlobalColor.yellow)
            self.setItem(i, 0, QStandardItem(f"R{i}"))
            self.setItem(i, 1, value_item)
            self.setItem(i, 2, int_item)

class MainWindow(QMainWindow):
    def __init__(self, file_name=None):
        super().__init__()
        self.setWindowTitle("golden16")
        self.setGeometry(100, 100, 1200, 800)

        self.rf = emulator.RegisterFile()
        self.words = []
        self.pc = 0
        self.results = []
        self.current_file = None

        main_splitter = QSplitter(Qt.Orientation.Horizontal)
        self.setCentralWidget(main_splitter)

        # Test case and trace on the left
        left_splitter = QSplitter(Qt.Orientation.Vertical)
        main_splitter.addWidget(left_splitter)

        src_group = QGroupBox("Test Case")
        src_layout = QVBoxLayout(src_group)
        self.src_editor = QTextEdit()
        self.src_editor.setWordWrapMode(QTextOption.NoWrap)
        src_layout.addWidget(self.src_editor)
        left_splitter.addWidget(src_group)

        trace_group = QGroupBox("Trace")
        trace_layout = QVBoxLayout(trace_group)
        self.trace_log = QTextEdit()
        self.trace_log.setReadOnly(True)
        trace_layout.addWidget(self.trace_log)
        left_splitter.addWidget(trace_group)

        # Registers and machine view on the right
        right_splitter = QSplitter(Qt.Orientation.Vertical)
        main_splitter.addWidget(right_splitter)

        reg_group = QGroupBox("Registers")
        reg_layout = QVBoxLayout(reg_group)
        self.reg_view = QTableView()
        self.reg_model = RegisterModel(self.rf)
        self.reg_view.setModel(self.reg_model)
        self.reg_view.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        reg_layout.addWidget(self.reg_view)
        right_splitter.addWidget(reg_group)

        self.machine_view = MachineView(self.rf)
        right_splitter.addWidget(self.machine_view)

        self.toolbar = QToolBar("Main Toolbar")
        self.addToolBar(self.toolbar)

        open_action = QAction(QIcon.fromTheme("document-open"), "Open...", self)
        open_action.triggered.connect(self.open_file)
        self.toolbar.addAction(open_action)

        self.step_action = QAction(QIcon.fromTheme("media-skip-forward"), "Step", self)
        self.step_action.triggered.connect(self.step_code)
        self.toolbar.addAction(self.step_action)

        self.run_action = QAction(QIcon.fromTheme("media-playback-start"), "Run", self)
        self.run_action.triggered.connect(self.run_code)
        self.toolbar.addAction(self.run_action)

        self.reset_action = QAction(QIcon.fromTheme("view-refresh"), "Reset", self)
        self.reset_action.triggered.connect(self.reset_emulator)
        self.toolbar.addAction(self.reset_action)

        save_action = QAction(QIcon.fromTheme("document-save-as"), "Save Trace...", self)
        save_action.triggered.connect(self.save_trace)
        self.toolbar.addAction(save_action)

        if file_name:
            self.load_file(file_name)
        self.update_views()

    def update_views(self):
        last = self.results[-1] if self.results else None
        self.reg_model.update(last.dest_reg if last is not None and last.dest_reg != 0 else None)
        self.machine_view.set_result(last)

    # The test case is parsed from the editor when execution starts, so
    # edits take effect after a reset
    def _load_words(self):
        text = self.src_editor.toPlainText()
        if text and not text.endswith("\n"):
            text += "\n"
        try:
            self.words = [w for _, w in tracer.read_instructions(text.splitlines(keepends=True))]
        except common.MalformedInput as e:
            self.trace_log.append(f"Error: {e}")
            self.words = []
            return False
        return True

    def _execute_next(self):
        try:
            result = emulator.execute_instruction(self.words[self.pc], self.rf)
        except common.GoldenModelError as e:
            self.trace_log.append(f"Error: {e}")
            self.pc = len(self.words)
            return False
        self.pc += 1
        self.results.append(result)
        self.trace_log.append(f"{result.to_record()}    {emulator.show_instr(result.decoded)}")
        return True

    def step_code(self):
        if self.pc == 0 and not self.results and not self._load_words():
            return
        if self.pc >= len(self.words):
            self.trace_log.append("End of test case.")
            return
        self._execute_next()
        self.update_views()

    def run_code(self):
        if self.pc == 0 and not self.results and not self._load_words():
            return
        while self.pc < len(self.words):
            if not self._execute_next():
                break
        self.trace_log.append(f"Finished after {len(self.results)} instructions.")
        self.update_views()

    def reset_emulator(self):
        self.rf.reset()
        self.words = []
        self.pc = 0
        self.results = []
        self.trace_log.clear()
        self.trace_log.append("Emulator reset.")
        self.update_views()

    def load_file(self, file_name):
        try:
            with tracer.open_input(file_name, errors="replace") as f:
                self.src_editor.setText(f.read())
        except OSError as e:
            self.trace_log.append(f"Error opening file: {e}")
            return
        self.current_file = file_name
        self.setWindowTitle(f"golden16 - {file_name}")
        self.reset_emulator()
        self.trace_log.append(f"File loaded: {file_name}")

    def open_file(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open Test Case", ".", "Test Cases (*.txt);;All Files (*)")
        if file_name:
            self.load_file(file_name)

    def save_trace(self):
        file_name, _ = QFileDialog.getSaveFileName(self, "Save Trace As", tracer.default_output_path(), "Traces (*.txt);;All Files (*)")
        if file_name:
            try:
                with tracer.open_output(file_name) as f:
                    for r in self.results:
                        f.write(tracer.format_record(r))
                self.trace_log.append(f"Trace saved as: {file_name}")
            except OSError as e:
                self.trace_log.append(f"Error saving trace: {e}")

def start_gui(file_name=None):
    app = QApplication(sys.argv)
    app.setStyleSheet("""
    QMainWindow {
        background-color: #1a1a1a;
        color: #e0e0e0;
    }
    QTextEdit {
        background-color: #2a2a2a;
        color: #00ff00;
        border: 1px solid #007acc;
        padding: 5px;
        font-family: "Consolas", "Monaco", "Courier New", monospace;
        font-size: 10pt;
    }
    QTableView {
        background-color: #2a2a2a;
        color: #e0e0e0;
        border: 1px solid #007acc;
        gridline-color: #444444;
    }
    QHeaderView::section {
        background-color: #3a3a3a;
        color: #e0e0e0;
        padding: 4px;
        border: 1px solid #007acc;
        font-weight: bold;
    }
    QGroupBox {
        color: #e0e0e0;
        border: 1px solid #007acc;
        border-radius: 4px;
        margin-top: 10px;
    }
    QToolBar {
        background-color: #2a2a2a;
        border: none;
        padding: 5px;
    }
    """)
    window = MainWindow(file_name)
    window.show()
    return app.exec()
