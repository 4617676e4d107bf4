from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtCore import Qt, QSize, Signal, QPointF, QRectF
from PySide6.QtGui import QPainter, QColor, QPen, QFont

from ..game_logic import PLAYER_X

GRID_SIZE = 3

X_COLOR = "#22d3ee"      # cyan
O_COLOR = "#e879f9"      # fuchsia
HINT_COLOR = "#facc15"   # yellow


def cell_at(x, y, width, height):
    """
    map a point in widget coords to a cell index, or None outside the grid
    """
    side = min(width, height)
    if side <= 0:
        return None
    ox, oy = (width-side)/2, (height-side)/2
    # only inside grid
    if not (ox <= x < ox+side and oy <= y < oy+side):
        return None
    cell = side / GRID_SIZE
    col = int((x-ox)//cell); row = int((y-oy)//cell)
    # clamp to valid range
    row = max(0, min(row, GRID_SIZE-1)); col = max(0, min(col, GRID_SIZE-1))
    return row*GRID_SIZE + col


class BoardWidget(QWidget):
    """
    custom widget to draw and click on tic-tac-toe board
    """
    cell_clicked = Signal(int)  # emits cell index 0-8 on click

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session        # reference to game state
        self.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.setMinimumSize(QSize(150, 150))
        self._accept_clicks = True      # toggle click handling

    def set_accept_clicks(self, accept):
        # enable/disable user input
        self._accept_clicks = accept

    def heightForWidth(self, width):
        # keep square shape
        return width

    def hasHeightForWidth(self):
        return True

    def _cell_rect(self, index, ox, oy, cell_size):
        r, c = divmod(index, GRID_SIZE)
        return QRectF(ox + c*cell_size, oy + r*cell_size, cell_size, cell_size)

    def paintEvent(self, event):
        """
        draw grid, marks, winning line glow and the hinted cell
        """
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        w, h = self.width(), self.height()
        side = min(w, h)
        ox, oy = (w-side)/2, (h-side)/2
        cell_size = side / GRID_SIZE
        # background
        painter.fillRect(self.rect(), QColor("#111827"))

        # winning cells get a tinted background
        win = self.session.win_result
        if win:
            tint = QColor(X_COLOR if win.mark == PLAYER_X else O_COLOR)
            tint.setAlpha(60)
            for i in win.line:
                painter.fillRect(self._cell_rect(i, ox, oy, cell_size), tint)

        # grid lines
        painter.setPen(QPen(QColor("#164e63"), 2))
        for i in range(1, GRID_SIZE):
            x = ox + i*cell_size
            painter.drawLine(int(x), int(oy), int(x), int(oy+side))
            y = oy + i*cell_size
            painter.drawLine(int(ox), int(y), int(ox+side), int(y))

        # hinted cell outline
        hint = self.session.hint
        if hint and not hint.is_fallback and not self.session.is_over:
            painter.setPen(QPen(QColor(HINT_COLOR), 3, Qt.DashLine))
            painter.drawRect(self._cell_rect(hint.suggested_index, ox, oy, cell_size)
                             .adjusted(6, 6, -6, -6))

        # draw marks
        rad = cell_size/2 * 0.6
        for i, sym in enumerate(self.session.board):
            if not sym: continue
            rect = self._cell_rect(i, ox, oy, cell_size)
            cx, cy = rect.center().x(), rect.center().y()
            if sym == PLAYER_X:
                painter.setPen(QPen(QColor(X_COLOR), 5, Qt.SolidLine, Qt.RoundCap))
                # two crossing lines
                painter.drawLine(QPointF(cx-rad, cy-rad), QPointF(cx+rad, cy+rad))
                painter.drawLine(QPointF(cx+rad, cy-rad), QPointF(cx-rad, cy+rad))
            else:
                painter.setPen(QPen(QColor(O_COLOR), 5))
                painter.drawEllipse(QPointF(cx, cy), rad, rad)

        # if game won, draw winner in center
        if win:
            font = QFont("Arial", max(1, int(side*0.15)), QFont.Bold)
            painter.setFont(font)
            color = QColor(X_COLOR if win.mark == PLAYER_X else O_COLOR)
            color.setAlpha(200)
            painter.setPen(QPen(color, 10))
            painter.drawText(QRectF(ox, oy, side, side), Qt.AlignCenter, f"{win.mark} WINS")
        painter.end()

    def mouseReleaseEvent(self, event):
        """
        handle clicks: map coords to board cell and emit
        """
        if not self._accept_clicks or not self.session.accepts_moves:
            return
        pos = event.position()
        index = cell_at(pos.x(), pos.y(), self.width(), self.height())
        if index is None:
            return
        self.cell_clicked.emit(index)  # notify main window
