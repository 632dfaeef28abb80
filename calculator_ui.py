"""
Interfaz gráfica de la calculadora.

Usa tkinter. La ventana solo traduce botones y teclas a eventos del
motor y muestra el texto que el motor le entrega; toda la lógica de
cálculo vive en calculator_engine.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine
from math_functions import MathFunctionProvider


# ═════════════════════════════════════════════════════════════════
#  Widget: campo de resultado
# ═════════════════════════════════════════════════════════════════

class ResultDisplay:
    """Entry de solo lectura que implementa la pantalla del motor."""

    VISIBLE_CHARS = 17       # caracteres visibles en el campo de resultado

    def __init__(self, parent, **kw):
        self._var = tk.StringVar(value="0")
        kw.setdefault("width", self.VISIBLE_CHARS + 1)
        self._entry = tk.Entry(parent, textvariable=self._var,
                               state="readonly", **kw)

    @property
    def widget(self):
        return self._entry

    # ── Texto ────────────────────────────────────────────────────

    def render(self, text: str) -> None:
        self._var.set(text)
        # Mantener visible el final del número
        self._entry.xview_moveto(1.0)

    def current_text(self) -> str:
        return self._var.get()


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "func":       "#45475A",
        "func_fg":    "#CDD6F4",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "toggle_on":  "#A6E3A1",
        "result_fg":  "#A6E3A1",
    }

    # ── Panel de funciones ───────────────────────────────────────
    #  Las etiquetas coinciden con las que entiende el motor

    FUNCTION_ROWS = [
        ["√x", "∛x", "x²", "x³"],
        ["x!", "sin", "cos", "tan"],
    ]

    # ── Definiciones del teclado principal ────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)
    #  tipo_color: "num", "op", "func", "special", "equals"

    KEYPAD = [
        [("C",  "clear",     "special"), ("+/-", "key:+/-", "func"),
         ("%",  "key:%",     "func"),    ("÷", "key:÷", "op")],

        [("7",  "key:7",  "num"), ("8", "key:8", "num"),
         ("9",  "key:9",  "num"), ("×", "key:×", "op")],

        [("4",  "key:4",  "num"), ("5", "key:5", "num"),
         ("6",  "key:6",  "num"), ("-", "key:-", "op")],

        [("1",  "key:1",  "num"), ("2", "key:2", "num"),
         ("3",  "key:3",  "num"), ("+", "key:+", "op")],

        [("Off", "off",   "special"), ("0", "key:0", "num"),
         (".",  "key:.",  "num"),     ("=", "key:=", "equals")],
    ]

    # Teclas físicas que se envían tal cual al motor
    KEYBOARD_CHARS = "0123456789.,+-*/=%"

    # ────────────────────────────────────────────────────────────

    def __init__(self, root: tk.Tk, engine=None, angle_mode: str = "rad"):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])
        self.root.resizable(False, False)

        self._init_fonts()
        self._create_display()

        if engine is None:
            engine = CalculatorEngine(provider=MathFunctionProvider(angle_mode))
        self.engine = engine
        self.engine.attach_display(self.result_display)

        self._create_toggle_bar()
        self._create_function_panel()
        self._create_keypad()
        self._bind_keyboard()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_result = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_btn    = tkfont.Font(family="Segoe UI", size=15)
        self._f_func   = tkfont.Font(family="Segoe UI", size=12)
        self._f_small  = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.result_display = ResultDisplay(
            frame,
            font=self._f_result, bg=self.C["display_bg"],
            fg=self.C["result_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        )
        self.result_display.widget.pack(fill="x", pady=(4, 4))

    # ── Barra de toggles (RAD/DEG) ───────────────────────────────

    def _create_toggle_bar(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=(2, 2))

        self.angle_btn = tk.Button(
            frame, text="RAD", font=self._f_small, width=6,
            bg=self.C["toggle_on"], fg=self.C["bg"],
            activebackground=self.C["toggle_on"], relief="flat",
            command=self._toggle_angle,
        )
        self.angle_btn.pack(side="left", padx=(0, 4))
        self._refresh_angle_button()

    # ── Panel de funciones ───────────────────────────────────────

    def _create_function_panel(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="x", padx=6, pady=2)
        for col in range(4):
            frame.columnconfigure(col, weight=1, uniform="fn")

        for r, row_def in enumerate(self.FUNCTION_ROWS):
            for col, label in enumerate(row_def):
                tk.Button(
                    frame, text=label, font=self._f_func,
                    bg=self.C["func"], fg=self.C["func_fg"],
                    activebackground=self.C["special"], relief="flat",
                    command=lambda lbl=label: self._on_key(f"key:{lbl}"),
                ).grid(row=r, column=col, sticky="nsew", padx=2, pady=2,
                       ipady=6)

    # ── Teclado numérico / operadores ────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            for col, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"],
                    relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=col, sticky="nsew",
                         padx=2, pady=2, ipady=8)

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keyboard)
        self.root.bind("<Return>", lambda _e: self._on_key("key:="))
        self.root.bind("<KP_Enter>", lambda _e: self._on_key("key:="))
        self.root.bind("<Escape>", lambda _e: self._on_key("clear"))

    def _on_keyboard(self, event):
        if event.char and event.char in self.KEYBOARD_CHARS:
            self._on_key(f"key:{event.char}")

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        if action == "clear":
            self.engine.clear()
        elif action == "off":
            self.root.destroy()
        elif action.startswith("key:"):
            self.engine.press_key(action[4:])

    # ── Toggles ──────────────────────────────────────────────────

    def _toggle_angle(self):
        if self.engine.angle_mode == "rad":
            self.engine.angle_mode = "deg"
        else:
            self.engine.angle_mode = "rad"
        self._refresh_angle_button()

    def _refresh_angle_button(self):
        if self.engine.angle_mode == "deg":
            self.angle_btn.config(text="DEG", bg=self.C["op"],
                                  fg=self.C["op_fg"])
        else:
            self.angle_btn.config(text="RAD", bg=self.C["toggle_on"],
                                  fg=self.C["bg"])
