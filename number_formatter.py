"""
Formato numérico para la pantalla de la calculadora.

Convierte un float en el texto que se muestra, buscando la
representación decimal más corta que reproduce el valor dentro de
una tolerancia, de modo que 0.1 + 0.2 se vea como "0.3" y no como
"0.30000000000000004".

Contrato de interfaz:
    - format_number(value, in_fraction_entry, fraction_digit_count) -> str
"""

import math


TOLERANCE = 1e-7        # diferencia máxima aceptada al redondear
MAX_PRECISION = 7       # decimales probados en la búsqueda corta
TOTAL_DIGITS = 12       # dígitos totales cuando no hay forma corta

NAN_TOKEN = "NaN"
INF_TOKEN = "∞"
NEG_INF_TOKEN = "-∞"

NON_FINITE_TOKENS = frozenset({NAN_TOKEN, INF_TOKEN, NEG_INF_TOKEN})


class NumberFormatter:
    """Decide cuántos decimales mostrar para un valor."""

    def __init__(
        self,
        tolerance: float = TOLERANCE,
        max_precision: int = MAX_PRECISION,
        total_digits: int = TOTAL_DIGITS,
    ):
        self.tolerance = tolerance
        self.max_precision = max_precision
        self.total_digits = total_digits

    def format(
        self,
        value: float,
        in_fraction_entry: bool = False,
        fraction_digit_count: int = 0,
    ) -> str:
        if math.isnan(value):
            return NAN_TOKEN
        if math.isinf(value):
            return INF_TOKEN if value > 0 else NEG_INF_TOKEN

        # Mientras se teclean decimales se respeta lo escrito,
        # incluidos los ceros finales ("2." → "2.0" → "2.05").
        if in_fraction_entry:
            if fraction_digit_count <= 0:
                return f"{value:.0f}."
            return f"{value:.{fraction_digit_count}f}"

        if value == 0:
            return "0"

        for precision in range(self.max_precision + 1):
            rounded = round(value, precision)
            if abs(value - rounded) < self.tolerance:
                if rounded == 0:
                    rounded = 0.0  # evita "-0"
                return f"{rounded:.{precision}f}"

        return f"{value:.{self._fallback_precision(value)}f}"

    def _fallback_precision(self, value: float) -> int:
        """Decimales restantes tras reservar los dígitos enteros."""
        int_part = abs(int(value))
        int_digits = 0 if int_part == 0 else math.ceil(math.log10(int_part))
        return max(0, self.total_digits - int_digits)


_DEFAULT_FORMATTER = NumberFormatter()


def format_number(
    value: float,
    in_fraction_entry: bool = False,
    fraction_digit_count: int = 0,
) -> str:
    """Formatea ``value`` con la configuración por defecto."""
    return _DEFAULT_FORMATTER.format(value, in_fraction_entry, fraction_digit_count)
