"""
Motor de cálculo de la calculadora.

Este módulo provee la clase CalculatorEngine, una máquina de estados
de un solo acumulador: cada operador binario evalúa de inmediato la
operación pendiente, de izquierda a derecha y sin precedencia
(2 + 3 × 4 = 20).

El motor no conoce la interfaz gráfica. Recibe eventos (dígito,
punto decimal, operador, igual, función, borrar) y entrega el texto
a mostrar a un colaborador Display.

Contrato de interfaz:
    - handle(event) -> str
    - press_key(label: str) -> str
    - angle_mode: propiedad 'rad' | 'deg'
"""

from __future__ import annotations

import dataclasses
import enum
import math
from typing import Optional, Protocol, Union

from loguru import logger

from math_functions import MathFunctionProvider, UnaryFunction
from number_formatter import NumberFormatter


DIVIDE_BY_ZERO_TOKEN = "Error: división entre 0"


class Operator(enum.Enum):
    """Operadores binarios; el valor es el glifo que se muestra."""

    DIVIDE = "÷"
    MULTIPLY = "×"
    ADD = "+"
    SUBTRACT = "-"

    @property
    def glyph(self) -> str:
        return self.value

    def apply(self, a: float, b: float) -> float:
        if self is Operator.DIVIDE:
            return a / b
        if self is Operator.MULTIPLY:
            return a * b
        if self is Operator.ADD:
            return a + b
        return a - b

    @classmethod
    def from_label(cls, label: str) -> Optional["Operator"]:
        return _OPERATOR_LABELS.get(label)


_OPERATOR_LABELS = {
    "÷": Operator.DIVIDE,
    "/": Operator.DIVIDE,
    "×": Operator.MULTIPLY,
    "*": Operator.MULTIPLY,
    "x": Operator.MULTIPLY,
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "−": Operator.SUBTRACT,
}


class DisplayMode(enum.Enum):
    """Qué describe la pantalla en cada momento."""

    ENTRY = "entry"          # número que se está tecleando
    OPERATOR = "operator"    # glifo de un operador pendiente
    RESULT = "result"        # resultado calculado
    ERROR = "error"          # división entre 0, ∞ o NaN


@dataclasses.dataclass
class CalculatorState:
    accumulated_value: float = 0.0
    current_value: float = 0.0
    pending_operator: Optional[Operator] = None
    in_fraction_entry: bool = False
    fraction_digit_count: int = 0
    display_mode: DisplayMode = DisplayMode.ENTRY


# ── Eventos ──────────────────────────────────────────────────────

@dataclasses.dataclass(frozen=True)
class Digit:
    value: int


@dataclasses.dataclass(frozen=True)
class DecimalPoint:
    pass


@dataclasses.dataclass(frozen=True)
class BinaryOperator:
    operator: Operator


@dataclasses.dataclass(frozen=True)
class Equals:
    pass


@dataclasses.dataclass(frozen=True)
class ApplyFunction:
    function: UnaryFunction


@dataclasses.dataclass(frozen=True)
class Clear:
    pass


Event = Union[Digit, DecimalPoint, BinaryOperator, Equals, ApplyFunction, Clear]


# ── Pantalla ─────────────────────────────────────────────────────

class Display(Protocol):
    def render(self, text: str) -> None: ...

    def current_text(self) -> str: ...


class TextDisplay:
    """Pantalla en memoria; se usa cuando no hay interfaz gráfica."""

    def __init__(self):
        self._text = "0"

    def render(self, text: str) -> None:
        self._text = text

    def current_text(self) -> str:
        return self._text


# ── Motor ────────────────────────────────────────────────────────

class CalculatorEngine:
    """Procesa eventos de la calculadora y actualiza la pantalla."""

    def __init__(
        self,
        display: Display | None = None,
        provider: MathFunctionProvider | None = None,
        formatter: NumberFormatter | None = None,
    ):
        self._display = display if display is not None else TextDisplay()
        self._provider = provider if provider is not None else MathFunctionProvider()
        self._formatter = formatter if formatter is not None else NumberFormatter()
        self._state = CalculatorState()
        self._text = "0"
        self._render("0")

    # ── Propiedades ──────────────────────────────────────────────

    @property
    def state(self) -> CalculatorState:
        """Copia del estado actual."""
        return dataclasses.replace(self._state)

    @property
    def display_text(self) -> str:
        return self._text

    @property
    def angle_mode(self) -> str:
        return self._provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._provider.angle_mode = mode

    def attach_display(self, display: Display) -> None:
        """Cambia la pantalla y le muestra el texto actual."""
        self._display = display
        display.render(self._text)

    # ── Entrada ──────────────────────────────────────────────────

    def handle(self, event: Event) -> str:
        """Aplica ``event`` y devuelve el texto mostrado.

        Los eventos desconocidos se ignoran sin cambiar el estado.
        """
        handler = self._HANDLERS.get(type(event))
        if handler is None:
            logger.debug("Evento ignorado: {!r}", event)
            return self._text
        handler(self, event)
        logger.debug("{!r} -> {!r}", event, self._text)
        return self._text

    def press_key(self, label: str) -> str:
        event = self.event_for_label(label)
        if event is None:
            logger.debug("Tecla desconocida: {!r}", label)
            return self._text
        return self.handle(event)

    def press_digit(self, digit: int) -> str:
        return self.handle(Digit(digit))

    def press_decimal_point(self) -> str:
        return self.handle(DecimalPoint())

    def press_operator(self, operator: Operator) -> str:
        return self.handle(BinaryOperator(operator))

    def press_equals(self) -> str:
        return self.handle(Equals())

    def press_function(self, function: UnaryFunction) -> str:
        return self.handle(ApplyFunction(function))

    def clear(self) -> str:
        return self.handle(Clear())

    @staticmethod
    def event_for_label(label: str) -> Event | None:
        """Traduce la etiqueta de un botón o tecla a un evento."""
        label = label.strip()
        if len(label) == 1 and label.isdigit():
            return Digit(int(label))
        if label in (".", ","):
            return DecimalPoint()
        if label == "=":
            return Equals()
        if label.upper() in ("C", "AC"):
            return Clear()
        operator = Operator.from_label(label)
        if operator is not None:
            return BinaryOperator(operator)
        function = UnaryFunction.from_label(label)
        if function is not None:
            return ApplyFunction(function)
        return None

    # ── Manejadores ──────────────────────────────────────────────

    def _on_digit(self, event: Digit):
        digit = event.value
        if isinstance(digit, bool) or not isinstance(digit, int) or not 0 <= digit <= 9:
            logger.debug("Dígito fuera de rango: {!r}", digit)
            return

        s = self._state
        if s.display_mode is not DisplayMode.ENTRY:
            # Empieza un número nuevo tras un operador, resultado o error
            if s.display_mode is DisplayMode.ERROR:
                s.accumulated_value = 0.0
            s.current_value = float(digit)
            self._exit_fraction_entry()
        elif not s.in_fraction_entry and s.current_value == 0 and digit == 0:
            return
        elif s.in_fraction_entry:
            s.fraction_digit_count += 1
            step = digit / 10 ** s.fraction_digit_count
            if s.current_value < 0:
                s.current_value -= step
            else:
                s.current_value += step
        else:
            s.current_value = s.current_value * 10 + digit

        s.display_mode = DisplayMode.ENTRY
        self._render_entry()

    def _on_decimal_point(self, _event: DecimalPoint):
        s = self._state
        if s.in_fraction_entry or s.display_mode is DisplayMode.OPERATOR:
            return

        if s.display_mode is DisplayMode.ERROR:
            s.accumulated_value = 0.0
        if s.display_mode is not DisplayMode.ENTRY:
            s.current_value = 0.0

        s.in_fraction_entry = True
        s.fraction_digit_count = 0
        s.display_mode = DisplayMode.ENTRY
        self._render_entry()

    def _on_binary_operator(self, event: BinaryOperator):
        if not isinstance(event.operator, Operator):
            logger.debug("Operador desconocido: {!r}", event.operator)
            return
        self._apply_operator(event.operator)

    def _on_equals(self, _event: Equals):
        self._apply_operator(None)

    def _apply_operator(self, operator: Operator | None):
        s = self._state
        self._exit_fraction_entry()
        error_shown = s.display_mode is DisplayMode.ERROR

        if s.pending_operator is None:
            s.accumulated_value = s.current_value
        elif s.pending_operator is Operator.DIVIDE and s.current_value == 0:
            self._show_divide_by_zero()
            return
        else:
            s.accumulated_value = s.pending_operator.apply(
                s.accumulated_value, s.current_value
            )

        s.pending_operator = operator
        if operator is not None:
            s.display_mode = DisplayMode.OPERATOR
            self._render(operator.glyph)
            return

        s.current_value = s.accumulated_value
        s.accumulated_value = 0.0
        if error_shown:
            # La ficha de error sigue visible hasta el próximo dígito
            return
        self._show_value(s.current_value, DisplayMode.RESULT)

    def _on_function(self, event: ApplyFunction):
        if not isinstance(event.function, UnaryFunction):
            logger.debug("Función desconocida: {!r}", event.function)
            return

        s = self._state
        self._exit_fraction_entry()
        if s.display_mode is DisplayMode.OPERATOR:
            return

        # El resultado queda como número en edición
        s.current_value = self._provider.apply(event.function, s.current_value)
        self._show_value(s.current_value, DisplayMode.ENTRY)

    def _on_clear(self, _event: Clear):
        self._state = CalculatorState()
        self._render("0")

    _HANDLERS = {
        Digit: _on_digit,
        DecimalPoint: _on_decimal_point,
        BinaryOperator: _on_binary_operator,
        Equals: _on_equals,
        ApplyFunction: _on_function,
        Clear: _on_clear,
    }

    # ── Auxiliares ───────────────────────────────────────────────

    def _exit_fraction_entry(self):
        self._state.in_fraction_entry = False
        self._state.fraction_digit_count = 0

    def _show_divide_by_zero(self):
        s = self._state
        s.accumulated_value = 0.0
        s.pending_operator = None
        s.display_mode = DisplayMode.ERROR
        logger.info("División entre 0")
        self._render(DIVIDE_BY_ZERO_TOKEN)

    def _show_value(self, value: float, mode: DisplayMode):
        if math.isfinite(value):
            self._state.display_mode = mode
        else:
            self._state.display_mode = DisplayMode.ERROR
            logger.info("Resultado no finito: {}", value)
        self._render(self._formatter.format(value))

    def _render_entry(self):
        s = self._state
        self._render(self._formatter.format(
            s.current_value, s.in_fraction_entry, s.fraction_digit_count
        ))

    def _render(self, text: str):
        self._text = text
        self._display.render(text)
