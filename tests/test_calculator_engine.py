"""
Unit tests for CalculatorEngine

Test Focus:
1. Digit entry, leading zeros and fraction entry
2. Left-to-right accumulator chain without precedence
3. Division by zero and non-finite results as display tokens
4. Unary functions and Clear
5. Label mapping and ignored events
"""

import math
import random

import pytest

from calculator_engine import (
    DIVIDE_BY_ZERO_TOKEN,
    ApplyFunction,
    BinaryOperator,
    CalculatorEngine,
    CalculatorState,
    Clear,
    DecimalPoint,
    Digit,
    DisplayMode,
    Equals,
    Operator,
)
from conftest import RecordingDisplay
from math_functions import UnaryFunction


class TestDigitEntry:
    @pytest.mark.parametrize("value", [0, 7, 10, 305, 987654321, 10**9])
    def test_typed_integer_is_shown(self, engine, value):
        for ch in str(value):
            engine.press_digit(int(ch))

        assert engine.display_text == str(value)
        assert engine.state.current_value == value

    def test_typed_integers_sweep(self):
        rng = random.Random(20261018)
        values = [rng.randint(0, 10**9) for _ in range(500)]

        for value in values:
            engine = CalculatorEngine()
            for ch in str(value):
                engine.press_digit(int(ch))

            assert engine.display_text == str(value)

    def test_negative_fraction_moves_away_from_zero(self, press, engine):
        assert press("5 +/- . 5") == "-5.5"
        assert press("2") == "-5.52"
        assert engine.state.current_value == pytest.approx(-5.52)

    def test_negative_integer_entry_appends_positive_digit(self, press):
        # current_value * 10 + d, también con números negativos
        assert press("5 +/- 3") == "-47"

    def test_leading_zeros_are_suppressed(self, engine, display):
        engine.press_digit(0)
        engine.press_digit(0)

        assert engine.display_text == "0"
        # Solo el render inicial del motor
        assert display.history == ["0"]

    def test_fraction_entry_keeps_trailing_zero(self, press):
        assert press("2 . 5 5") == "2.55"
        assert press("0") == "2.550"

    def test_decimal_point_shows_trailing_dot(self, engine):
        engine.press_digit(2)

        assert engine.press_decimal_point() == "2."
        state = engine.state
        assert state.in_fraction_entry is True
        assert state.fraction_digit_count == 0

    def test_zero_after_decimal_point_is_not_suppressed(self, press):
        assert press(". 0 5") == "0.05"

    def test_repeated_decimal_point_is_ignored(self, press):
        assert press("1 . . 5") == "1.5"

    def test_fraction_digit_count_tracks_typed_digits(self, press, engine):
        press("3 . 1 4")

        state = engine.state
        assert state.fraction_digit_count == 2
        assert state.current_value == pytest.approx(3.14)

    def test_out_of_range_digit_is_ignored(self, engine):
        engine.press_digit(4)
        engine.handle(Digit(12))
        engine.handle(Digit(-1))
        engine.handle(Digit(True))

        assert engine.display_text == "4"


class TestAccumulatorChain:
    def test_addition(self, press, engine):
        assert press("3 + 4 =") == "7"

        state = engine.state
        assert state.accumulated_value == 0
        assert state.current_value == 7
        assert state.pending_operator is None

    def test_digit_after_equals_starts_fresh(self, press):
        press("3 + 4 =")

        assert press("1") == "1"

    def test_no_operator_precedence(self, press):
        assert press("2 + 3 × 4 =") == "20"

    def test_operator_glyph_is_shown(self, engine):
        engine.press_digit(9)

        assert engine.press_operator(Operator.DIVIDE) == "÷"
        assert engine.state.display_mode is DisplayMode.OPERATOR
        assert engine.state.pending_operator is Operator.DIVIDE

    def test_operator_evaluates_pending_operation(self, press, engine):
        press("8 - 3 ×")

        assert engine.display_text == "×"
        assert engine.state.accumulated_value == 5

    def test_consecutive_operators_evaluate_with_shown_operand(self, press, engine):
        press("6 + ×")

        assert engine.state.pending_operator is Operator.MULTIPLY
        assert engine.state.accumulated_value == 12
        assert press("2 =") == "24"

    def test_equals_after_operator_reuses_operand(self, press):
        assert press("3 + =") == "6"

    def test_equals_without_operator_shows_number(self, press):
        assert press("4 2 =") == "42"

    def test_result_can_continue_chain(self, press):
        press("3 + 4 =")

        assert press("× 2 =") == "14"

    def test_fraction_entry_ends_on_operator(self, press, engine):
        press("1 . 5 +")

        assert engine.state.in_fraction_entry is False
        assert engine.state.fraction_digit_count == 0
        assert press("0 . 2 5 =") == "1.75"

    def test_float_noise_is_hidden(self, press):
        assert press("0 . 1 + 0 . 2 =") == "0.3"

    def test_decimal_point_ignored_while_operator_shown(self, press, engine):
        press("3 + .")

        assert engine.display_text == "+"
        assert engine.state.in_fraction_entry is False

    def test_decimal_point_after_result_starts_new_number(self, press):
        press("3 + 4 =")

        assert press(". 5") == "0.5"


class TestErrors:
    def test_divide_by_zero(self, press, engine):
        assert press("5 ÷ 0 =") == DIVIDE_BY_ZERO_TOKEN

        state = engine.state
        assert state.display_mode is DisplayMode.ERROR
        assert state.accumulated_value == 0
        assert state.pending_operator is None

    def test_digit_after_divide_by_zero_restarts(self, press, engine):
        press("5 ÷ 0 =")

        assert press("9") == "9"
        assert press("+ 1 =") == "10"

    def test_divide_by_zero_on_chained_operator(self, press):
        assert press("5 ÷ 0 +") == DIVIDE_BY_ZERO_TOKEN

    def test_overflow_result_is_infinity(self, engine):
        engine.press_digit(1)
        engine.press_digit(7)
        engine.press_digit(0)
        engine.press_function(UnaryFunction.FACTORIAL)  # 170! cabe en un float

        engine.press_operator(Operator.MULTIPLY)
        engine.press_digit(9)
        engine.press_digit(9)
        engine.press_digit(9)

        assert engine.press_equals() == "∞"
        assert engine.state.display_mode is DisplayMode.ERROR

    def test_digit_after_infinity_zeroes_accumulator(self, press, engine):
        press("2 + 2 0 0 x!")
        assert engine.display_text == "∞"

        assert press("3") == "3"
        assert engine.state.accumulated_value == 0
        assert engine.state.pending_operator is Operator.ADD
        assert press("=") == "3"

    def test_pending_operator_survives_error(self, press):
        assert press("3 × 2 0 0 x! 2 =") == "0"

    def test_equals_keeps_divide_by_zero_token(self, press, engine, display):
        press("5 ÷ 0 =")
        renders = len(display.history)

        assert press("=") == DIVIDE_BY_ZERO_TOKEN
        assert len(display.history) == renders
        state = engine.state
        assert state.accumulated_value == 0
        assert state.pending_operator is None
        assert state.display_mode is DisplayMode.ERROR

    def test_equals_keeps_infinity_token(self, press):
        press("2 0 0 x!")

        assert press("=") == "∞"
        assert press("4") == "4"

    def test_nan_from_pole(self, press, engine):
        assert press("1 +/- x!") == "NaN"
        assert engine.state.display_mode is DisplayMode.ERROR
        assert math.isnan(engine.state.current_value)

    def test_handle_never_raises_on_unknown_event(self, engine):
        engine.press_digit(4)

        assert engine.handle(object()) == "4"
        assert engine.handle(BinaryOperator("^")) == "4"
        assert engine.handle(ApplyFunction("log")) == "4"


class TestUnaryFunctions:
    def test_negate_is_self_inverse(self, press, engine):
        press("1 2 . 5")

        assert press("+/-") == "-12.5"
        assert press("+/-") == "12.5"
        assert engine.state.current_value == 12.5

    def test_function_exits_fraction_entry(self, press, engine):
        press("2 . 2 5 x²")

        assert engine.display_text == "5.0625"
        assert engine.state.in_fraction_entry is False

    def test_digit_after_function_continues_entry(self, press, engine):
        press("9 √x")

        assert engine.state.display_mode is DisplayMode.ENTRY
        assert press("4") == "34"

    def test_function_ignored_while_operator_shown(self, press, engine):
        press("9 + √x")

        assert engine.display_text == "+"
        assert engine.state.current_value == 9

    def test_function_after_divide_by_zero_uses_current_value(self, press, engine):
        press("5 ÷ 0 =")

        assert press("x²") == "0"
        assert engine.state.display_mode is DisplayMode.ENTRY

    def test_function_on_infinity_stays_error(self, press, engine):
        press("2 0 0 x!")

        assert press("+/-") == "-∞"
        assert engine.state.display_mode is DisplayMode.ERROR

    def test_function_applies_to_result(self, press):
        press("3 + 6 =")

        assert press("√x") == "3"

    @pytest.mark.parametrize(
        "keys, expected",
        [
            ("5 0 %", "0.5"),
            ("3 x³", "27"),
            ("2 7 ∛x", "3"),
            ("4 x!", "24"),
            ("0 cos", "1"),
        ],
    )
    def test_function_values(self, press, keys, expected):
        assert press(keys) == expected

    def test_degrees_mode(self, engine, press):
        engine.angle_mode = "deg"

        assert press("3 0 sin") == "0.5"

    def test_invalid_angle_mode(self, engine):
        with pytest.raises(ValueError):
            engine.angle_mode = "grad"


class TestClear:
    def test_clear_resets_state(self, press, engine):
        press("7 × 3 . 5")

        assert press("C") == "0"
        assert engine.state == CalculatorState()

    def test_clear_is_idempotent(self, engine):
        engine.press_digit(8)
        engine.press_operator(Operator.ADD)

        engine.clear()
        once = engine.state
        engine.clear()

        assert engine.state == once
        assert engine.display_text == "0"

    def test_clear_after_error(self, press):
        press("1 ÷ 0 =")

        assert press("AC") == "0"


class TestLabels:
    @pytest.mark.parametrize(
        "label, event",
        [
            ("7", Digit(7)),
            (".", DecimalPoint()),
            (",", DecimalPoint()),
            ("=", Equals()),
            ("C", Clear()),
            ("÷", BinaryOperator(Operator.DIVIDE)),
            ("/", BinaryOperator(Operator.DIVIDE)),
            ("*", BinaryOperator(Operator.MULTIPLY)),
            ("−", BinaryOperator(Operator.SUBTRACT)),
            ("x!", ApplyFunction(UnaryFunction.FACTORIAL)),
            ("%", ApplyFunction(UnaryFunction.PERCENT)),
        ],
    )
    def test_event_for_label(self, label, event):
        assert CalculatorEngine.event_for_label(label) == event

    @pytest.mark.parametrize("label", ["^", "log", "12", "", "Off"])
    def test_unknown_label(self, label):
        assert CalculatorEngine.event_for_label(label) is None

    def test_unknown_key_leaves_state_untouched(self, press, engine):
        press("4 +")
        before = engine.state

        press("^")

        assert engine.state == before
        assert engine.display_text == "+"


class TestDisplayCollaborator:
    def test_every_render_reaches_display(self, press, display):
        press("1 + 2 =")

        assert display.history == ["0", "1", "+", "2", "3"]
        assert display.current_text() == "3"

    def test_state_is_a_copy(self, engine):
        state = engine.state
        state.current_value = 99

        assert engine.state.current_value == 0

    def test_attach_display_shows_current_text(self, press, engine):
        press("4 2")
        other = RecordingDisplay()

        engine.attach_display(other)
        press("+")

        assert other.history == ["42", "+"]

    def test_works_without_display(self):
        engine = CalculatorEngine()
        engine.press_digit(5)

        assert engine.display_text == "5"
