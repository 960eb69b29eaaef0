import sys
from PyQt6.QtWidgets import QApplication
from PyQt6.QtGui import QFont
from infrastructure.logger import configure_logging, LoggingConfig
from ui.desktop.main_window import MainWindow

def main() -> None:
    configure_logging(LoggingConfig(level="INFO", log_file="runs/client.log"))

    app = QApplication(sys.argv)
    app.setApplicationName("Hollomon Card Trader")

    # Set default app font using points (not pixels) to avoid QFont warnings
    font = QFont("Segoe UI", 10)
    font.setStyleStrategy(QFont.StyleStrategy.PreferAntialias)
    app.setFont(font)

    w = MainWindow()
    w.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
