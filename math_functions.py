"""Funciones de una variable (x!, √x, sin, ...) para la calculadora."""

import enum
import math
import sys

from mpmath import mp


_FLOAT_MAX = mp.mpf(sys.float_info.max)


class UnaryFunction(enum.Enum):
    """Funciones especiales; el valor es la etiqueta del botón."""

    FACTORIAL = "x!"
    SQUARE_ROOT = "√x"
    CUBE_ROOT = "∛x"
    NEGATE = "+/-"
    PERCENT = "%"
    SQUARE = "x²"
    CUBE = "x³"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str):
        """Devuelve la función de ``label`` o None si no existe."""
        try:
            return cls(label)
        except ValueError:
            return None


class MathFunctionProvider:
    """Evalúa funciones con mpmath y devuelve siempre un float.

    Los errores de dominio y los desbordamientos no se propagan: se
    representan como NaN o ±inf, que la pantalla muestra como fichas
    de error.
    """

    INTERNAL_DPS = 30

    def __init__(self, angle_mode: str = "rad"):
        self._angle_mode = "rad"
        self.angle_mode = angle_mode

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def _trig(self, fn):
        mode = self._angle_mode

        def wrapped(x):
            value = mp.radians(x) if mode == "deg" else x
            return fn(value)

        return wrapped

    @staticmethod
    def _factorial(x):
        # Γ(x+1): admite no enteros; los polos lanzan ValueError
        return mp.gamma(x + 1)

    @staticmethod
    def _square_root(x):
        if x < 0:
            return mp.nan
        return mp.sqrt(x)

    @staticmethod
    def _cube_root(x):
        # raíz real, no la principal compleja de mpmath
        if x < 0:
            return -mp.cbrt(-x)
        return mp.cbrt(x)

    def build_namespace(self) -> dict:
        return {
            UnaryFunction.FACTORIAL: self._factorial,
            UnaryFunction.SQUARE_ROOT: self._square_root,
            UnaryFunction.CUBE_ROOT: self._cube_root,
            UnaryFunction.NEGATE: lambda x: -x,
            UnaryFunction.PERCENT: lambda x: x / 100,
            UnaryFunction.SQUARE: lambda x: x * x,
            UnaryFunction.CUBE: lambda x: x * x * x,
            UnaryFunction.SIN: self._trig(mp.sin),
            UnaryFunction.COS: self._trig(mp.cos),
            UnaryFunction.TAN: self._trig(mp.tan),
        }

    def apply(self, function: UnaryFunction, x: float) -> float:
        if not math.isfinite(x):
            return self._apply_non_finite(function, x)

        fn = self.build_namespace()[function]
        with mp.workdps(self.INTERNAL_DPS):
            try:
                result = fn(mp.mpf(x))
            except (ValueError, ZeroDivisionError, OverflowError):
                return math.nan
            return self._to_float(result)

    @staticmethod
    def _apply_non_finite(function: UnaryFunction, x: float) -> float:
        if function is UnaryFunction.NEGATE:
            return -x
        if function is UnaryFunction.PERCENT:
            return x / 100
        if function is UnaryFunction.SQUARE:
            return x * x
        if function is UnaryFunction.CUBE:
            return x * x * x
        if function is UnaryFunction.CUBE_ROOT:
            return x
        if function in (UnaryFunction.SQUARE_ROOT, UnaryFunction.FACTORIAL):
            return x if x > 0 else math.nan
        return math.nan

    @staticmethod
    def _to_float(value) -> float:
        if isinstance(value, mp.mpc):
            return math.nan
        if mp.isnan(value):
            return math.nan
        if abs(value) > _FLOAT_MAX:
            return math.inf if value > 0 else -math.inf
        return float(value)
