"""Punto de entrada de la calculadora."""

import os
import tkinter as tk

from calculator_ui import CalculatorApp
from logger_config import configure_logging


LOG_LEVEL = os.environ.get("CALCULADORA_LOG_LEVEL", "WARNING")
WINDOW_GEOMETRY = "360x520"
WINDOW_MIN_SIZE = (320, 480)
DEFAULT_ANGLE_MODE = "rad"


def main():
    configure_logging(LOG_LEVEL)
    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, angle_mode=DEFAULT_ANGLE_MODE)
    root.mainloop()


if __name__ == "__main__":
    main()
