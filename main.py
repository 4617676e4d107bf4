import logging
import os
import sys

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt
from PySide6.QtGui import QPalette, QColor
from neon_tictactoe.config import resolve_log_level
from neon_tictactoe.ui.main_window import TicTacToeWindow

# -----------------------------------------------------------------------------
# COLOR CONSTANTS
# -----------------------------------------------------------------------------

WINDOW_COLOR = QColor(3, 7, 18)          # gray-950
TEXT_COLOR = QColor(229, 231, 235)       # gray-200
BASE_COLOR = QColor(17, 24, 39)
BUTTON_COLOR = QColor(31, 41, 55)
NEON_CYAN = QColor(34, 211, 238)
MUTED_COLOR = QColor(107, 114, 128)     # disabled text and buttons

# -----------------------------------------------------------------------------
# PALETTE SETUP
# -----------------------------------------------------------------------------

def apply_default_palette(app: QApplication):
    """
    Apply the neon dark theme palette using predefined constants.
    """
    palette = QPalette()
    for role in (QPalette.WindowText, QPalette.Text):
        palette.setColor(role, TEXT_COLOR)
    palette.setColor(QPalette.Window, WINDOW_COLOR)
    palette.setColor(QPalette.Base, BASE_COLOR)
    palette.setColor(QPalette.Button, BUTTON_COLOR)
    palette.setColor(QPalette.ButtonText, Qt.white)
    # focus ring and menu selection
    palette.setColor(QPalette.Highlight, NEON_CYAN)
    palette.setColor(QPalette.HighlightedText, Qt.black)
    # "Ask AI" greys out while a hint is pending
    for role in (QPalette.ButtonText, QPalette.WindowText, QPalette.Text):
        palette.setColor(QPalette.Disabled, role, MUTED_COLOR)
    app.setPalette(palette)

# -----------------------------------------------------------------------------
# ENTRY POINT
# -----------------------------------------------------------------------------

def main():
    logging.basicConfig(
        level=resolve_log_level(os.getenv("NEON_TTT_LOG_LEVEL")),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    # Apply neon dark theme
    apply_default_palette(app)

    window = TicTacToeWindow()
    window.resize(480, 640)
    window.show()
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
