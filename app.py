# ============================================================================
#  COMPUTER ASSEMBLY - desktop pricer
# ----------------------------------------------------------------------------
#  Left:  pick one component per category, Calculate Total Cost.
#  Right: admin forms that add priced components; Remove beside each picker.
#  Prices live in core.catalog.PriceTable (defaults + stored records);
#  admin changes write through to the configured store (core.store).
# ============================================================================

import sys
from pathlib import Path
try:
    APP_DIR = str(Path(__file__).resolve().parent)
except NameError:
    APP_DIR = str(Path.cwd())
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (QApplication, QMainWindow, QWidget, QHBoxLayout,
    QVBoxLayout, QGridLayout, QLabel, QPushButton, QLineEdit, QComboBox, QGroupBox,
    QDialog, QTableWidget, QTableWidgetItem, QHeaderView, QMessageBox)

from core.commands import AssemblySession
from core.config import load_config
from core.errors import CatalogInputError
from core.model import CATEGORIES, SENTINEL, Category
from core.pricing import format_total
from core.store import open_store
from lore import lorekeeper
from lore.lorekeeper import log_event, log_error

APP_TITLE = "Computer Assembly"


class CatalogDialog(QDialog):
    """Read-only view of every priced component in the current session."""

    def __init__(self, session: AssemblySession, parent=None):
        super().__init__(parent)
        self.setWindowTitle(f"Catalog - {len(session.table)} components")
        lay = QVBoxLayout(self)

        records = session.table.records()
        self.table = QTableWidget(len(records), 4)
        self.table.setHorizontalHeaderLabels(["Category", "Name", "Price", "Source"])
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        hdr = self.table.horizontalHeader()
        hdr.setSectionResizeMode(0, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(1, QHeaderView.Stretch)
        hdr.setSectionResizeMode(2, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(3, QHeaderView.ResizeToContents)

        for r, rec in enumerate(records):
            price = QTableWidgetItem(f"${rec.price:,}")
            price.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.table.setItem(r, 0, QTableWidgetItem(rec.category.value))
            self.table.setItem(r, 1, QTableWidgetItem(rec.name))
            self.table.setItem(r, 2, price)
            self.table.setItem(r, 3, QTableWidgetItem(session.table.source(rec.category, rec.name)))
        lay.addWidget(self.table)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        lay.addWidget(close_btn)
        self.resize(520, 480)


class Main(QMainWindow):
    def __init__(self, session: AssemblySession):
        super().__init__()
        self.session = session
        self.setWindowTitle(APP_TITLE)
        self.resize(800, 450)

        self.boxes: dict[Category, QComboBox] = {}
        self.remove_buttons: dict[Category, QPushButton] = {}
        self.name_fields: dict[Category, QLineEdit] = {}
        self.price_fields: dict[Category, QLineEdit] = {}
        self.add_buttons: dict[Category, QPushButton] = {}

        root = QWidget()
        cols = QHBoxLayout(root)
        cols.addWidget(self._build_assembly_panel())
        cols.addWidget(self._build_admin_panel())
        self.setCentralWidget(root)

    # ---------------- layout ----------------
    def _build_assembly_panel(self) -> QWidget:
        panel = QWidget()
        grid = QGridLayout(panel)
        grid.setSpacing(5)

        for row, cat in enumerate(CATEGORIES):
            box = QComboBox()
            box.setObjectName(cat.value)
            self._fill_box(box, cat)
            remove_btn = QPushButton("Remove")
            remove_btn.clicked.connect(lambda _=False, c=cat: self.on_remove(c))

            grid.addWidget(QLabel(f"Select {cat.value}:"), row, 0)
            grid.addWidget(box, row, 1)
            grid.addWidget(remove_btn, row, 2)
            self.boxes[cat] = box
            self.remove_buttons[cat] = remove_btn

        row = len(CATEGORIES)
        self.calculate_btn = QPushButton("Calculate Total Cost")
        self.calculate_btn.clicked.connect(self.on_calculate)
        self.total_field = QLineEdit()
        self.total_field.setReadOnly(True)
        self.catalog_btn = QPushButton("Catalog…")
        self.catalog_btn.clicked.connect(self.open_catalog_dialog)

        grid.addWidget(self.calculate_btn, row, 0)
        grid.addWidget(self.total_field, row, 1)
        grid.addWidget(self.catalog_btn, row, 2)
        return panel

    def _build_admin_panel(self) -> QWidget:
        group = QGroupBox("Admin - Add New Components")
        grid = QGridLayout(group)
        grid.setSpacing(5)

        for row, cat in enumerate(CATEGORIES):
            name_field = QLineEdit()
            price_field = QLineEdit()
            add_btn = QPushButton("Add")
            add_btn.clicked.connect(lambda _=False, c=cat: self.on_add(c))

            grid.addWidget(QLabel(f"{cat.value} Name:"), row, 0)
            grid.addWidget(name_field, row, 1)
            grid.addWidget(QLabel(f"{cat.value} Price:"), row, 2)
            grid.addWidget(price_field, row, 3)
            grid.addWidget(add_btn, row, 4, alignment=Qt.AlignRight)
            self.name_fields[cat] = name_field
            self.price_fields[cat] = price_field
            self.add_buttons[cat] = add_btn
        return group

    def _fill_box(self, box: QComboBox, cat: Category):
        box.clear()
        box.addItem(SENTINEL)
        for name in self.session.table.names_for(cat):
            box.addItem(name)

    def _sync_box(self, cat: Category):
        """Rebuild one picker from the table, keeping the selection if it still exists."""
        box = self.boxes[cat]
        current = box.currentText()
        self._fill_box(box, cat)
        idx = box.findText(current)
        box.setCurrentIndex(idx if idx >= 0 else 0)

    # ---------------- notices ----------------
    def _notice(self, message: str):
        QMessageBox.warning(self, APP_TITLE, message)

    def _store_failure(self, action: str, exc: Exception):
        log_error(action, exc)
        QMessageBox.critical(self, "Catalog Store Error", f"{type(exc).__name__}: {exc}")

    # ---------------- actions ----------------
    def current_selections(self) -> dict[Category, str]:
        return {cat: box.currentText() for cat, box in self.boxes.items()}

    def on_calculate(self) -> int:
        total = self.session.calculate_total(self.current_selections())
        self.total_field.setText(format_total(total))
        log_event("total_calculated", [f"total={total}"])
        return total

    def on_add(self, cat: Category):
        name_field, price_field = self.name_fields[cat], self.price_fields[cat]
        try:
            rec = self.session.add_component(cat, name_field.text(), price_field.text())
        except CatalogInputError as e:
            self._notice(e.message)
            return None
        except Exception as e:
            # table already holds the entry; the picker has to list it
            self._sync_box(cat)
            self._store_failure("add component failure", e)
            return None

        box = self.boxes[cat]
        if box.findText(rec.name) < 0:
            box.addItem(rec.name)
        name_field.clear()
        price_field.clear()
        return rec

    def on_remove(self, cat: Category):
        box = self.boxes[cat]
        selected = box.currentText()
        try:
            name = self.session.remove_component(cat, selected)
        except CatalogInputError as e:
            self._notice(e.message)
            return None
        except Exception as e:
            self._sync_box(cat)
            self._store_failure("remove component failure", e)
            return None

        idx = box.findText(name)
        if idx >= 0:
            box.removeItem(idx)
        box.setCurrentIndex(0)
        return name

    def open_catalog_dialog(self):
        CatalogDialog(self.session, self).exec()

    def closeEvent(self, event):
        try:
            self.session.close()
        except Exception as e:
            log_error("store close failure", e)
        log_event("app_stopped")
        super().closeEvent(event)


def main(argv=None) -> int:
    from PySide6.QtGui import QGuiApplication

    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(Qt.HighDpiScaleFactorRoundingPolicy.PassThrough)
    app = QApplication.instance() or QApplication(argv if argv is not None else sys.argv)

    cfg = load_config()
    lorekeeper.configure(cfg.lore_dir, debug=cfg.debug)
    log_event("app_started", [f"store={cfg.store}"])

    try:
        session = AssemblySession.open(open_store(cfg))
    except Exception as e:
        log_error("catalog store open failure", e)
        QMessageBox.critical(None, "Catalog Store Error", f"{type(e).__name__}: {e}")
        return 1

    w = Main(session)
    w.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
