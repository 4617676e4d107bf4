import logging

from ..advisor import default_advisor
from ..config import load_settings
from ..hint_worker import HintWorker
from ..session import GameSession, Phase
from ..ui.board_widget import BoardWidget

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QLabel, QMenuBar, QMenu, QSizePolicy, QApplication
)
from PySide6.QtGui import QAction, QFont
from PySide6.QtCore import Qt, QThread, QTimer, Signal, Slot

logger = logging.getLogger(__name__)

COPIED_TOAST_MS = 2000


class TicTacToeWindow(QMainWindow):
    """
    main window UI and game flow
    """
    hint_requested = Signal(object)   # HintTicket, delivered to the worker thread

    def __init__(self, advisor=None, settings=None):
        """
        init state, ui widgets, hint worker thread
        """
        super().__init__()
        self.settings = settings or load_settings()
        self.session = GameSession()
        self.board_widget = BoardWidget(self.session, parent=self)
        self._setup_ui()
        self._setup_hint_worker(advisor or default_advisor(self.settings))
        self._refresh()

    def _setup_ui(self):
        '''window look + layout'''
        self.setWindowTitle("Neon Tic-Tac-Toe")
        self.setStyleSheet("""
            QMainWindow { background-color: #030712; }
            QPushButton { padding: 10px 16px; font-weight: bold; }
        """)
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self._create_menu_bar()            # top menu
        self.status_label = QLabel("")
        f = QFont(); f.setPointSize(16); f.setBold(True); self.status_label.setFont(f)
        self.status_label.setAlignment(Qt.AlignCenter)
        self.main_layout.addWidget(self.status_label)

        self.main_layout.addWidget(self.board_widget, 1)
        self.board_widget.cell_clicked.connect(self._on_cell_clicked)

        self.hint_label = QLabel("")
        self.hint_label.setWordWrap(True)
        self.hint_label.setAlignment(Qt.AlignCenter)
        self.hint_label.setStyleSheet("color: #facc15;")
        self.main_layout.addWidget(self.hint_label)

        self._create_bottom_controls()     # message + buttons
        self.main_layout.addWidget(self.controls_bottom_widget)

    def _create_menu_bar(self):
        '''game menu actions'''
        menu_bar = QMenuBar()
        game_menu = QMenu("Game", self)
        restart_action = QAction("Restart", self)
        restart_action.triggered.connect(self.reset_game)
        share_action = QAction("Share", self)
        share_action.triggered.connect(self._share)
        quit_action = QAction("Quit", self)
        quit_action.triggered.connect(self.close)
        for act in (restart_action, share_action): game_menu.addAction(act)
        game_menu.addSeparator(); game_menu.addAction(quit_action)
        menu_bar.addMenu(game_menu)
        self.setMenuBar(menu_bar)

    def _create_bottom_controls(self):
        # transient message + restart/share/hint buttons
        self.controls_bottom_widget = QWidget()
        hl = QHBoxLayout(self.controls_bottom_widget)
        self.controls_bottom_widget.setStyleSheet("background: transparent;")
        self.message_label = QLabel("")
        self.message_label.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        self.message_label.setWordWrap(True)
        self.reset_button = QPushButton("Restart"); self.reset_button.clicked.connect(self.reset_game)
        self.share_button = QPushButton("Share"); self.share_button.clicked.connect(self._share)
        self.hint_button = QPushButton("Ask AI"); self.hint_button.clicked.connect(self._request_hint)
        for w in (self.message_label, None, self.reset_button,
                  self.share_button, self.hint_button):
            if w: hl.addWidget(w)
            else: hl.addStretch(1)
        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(lambda: self.message_label.setText(""))

    def _setup_hint_worker(self, advisor):
        # create thread + worker + connect signals
        self.hint_thread = QThread(self)
        self.hint_worker = HintWorker(advisor)
        self.hint_worker.moveToThread(self.hint_thread)
        self.hint_requested.connect(self.hint_worker.request_hint)
        self.hint_worker.hint_ready.connect(self._on_hint_ready)
        self.hint_thread.finished.connect(self.hint_worker.deleteLater)
        self.hint_thread.start()

    def _show_message(self, text, is_error=False, timeout_ms=0):
        # set message text + style, optionally clear it later
        style = "color: #ff8a8a; font-weight: bold;" if is_error else "color: #e879f9;"
        self.message_label.setStyleSheet(style)
        self.message_label.setText(text)
        if timeout_ms:
            self._message_timer.start(timeout_ms)

    def _refresh(self):
        # sync every widget with the session phase
        s = self.session
        if s.phase is Phase.WON:
            win = s.win_result
            self.status_label.setText(f"PLAYER {win.mark} WINS!")
        elif s.phase is Phase.DRAWN:
            self.status_label.setText("DRAW!")
        else:
            self.status_label.setText(f"Turn: PLAYER {s.current_player}")

        if s.hint and not s.is_over:
            if s.hint.is_fallback:
                self.hint_label.setText(s.hint.reasoning)
            else:
                self.hint_label.setText(
                    f'Try cell {s.hint.suggested_index + 1}: "{s.hint.reasoning}"'
                )
        else:
            self.hint_label.setText("")

        awaiting = s.phase is Phase.AWAITING_HINT
        self.hint_button.setText("Analyzing..." if awaiting else "Ask AI")
        self.hint_button.setEnabled(s.can_request_hint)
        self.board_widget.set_accept_clicks(s.accepts_moves)
        self.board_widget.update()

    @Slot(int)
    def _on_cell_clicked(self, index):
        res = self.session.play(index)
        if res == "invalid":
            return
        self._refresh()

    @Slot()
    def _request_hint(self):
        ticket = self.session.begin_hint()
        if ticket is None:
            return
        self._refresh()
        self.hint_requested.emit(ticket)

    @Slot(object, object)
    def _on_hint_ready(self, ticket, suggestion):
        # stale answers are dropped by the session
        if self.session.resolve_hint(ticket, suggestion):
            self._refresh()

    def _clipboard(self):
        return QApplication.clipboard()

    @Slot()
    def _share(self):
        # copy the share link; clipboard failure is not fatal
        url = self.settings.share_url
        clipboard = self._clipboard()
        if clipboard is None:
            logger.warning("share failed: no clipboard available")
            self._show_message("Could not copy link.", is_error=True, timeout_ms=COPIED_TOAST_MS)
            return
        clipboard.setText(url)
        if clipboard.text() != url:
            logger.warning("share failed: clipboard rejected the link")
            self._show_message("Could not copy link.", is_error=True, timeout_ms=COPIED_TOAST_MS)
            return
        self._show_message("LINK COPIED!", timeout_ms=COPIED_TOAST_MS)

    @Slot()
    def reset_game(self):
        # fresh board; an in-flight hint will be discarded on arrival
        self.session.reset()
        self.message_label.setText("")
        self._refresh()

    def closeEvent(self, event):
        # the thread must not be destroyed while a hint call is running
        self.hint_thread.quit()
        self.hint_thread.wait()
        event.accept()
