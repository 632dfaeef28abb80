from calculator_engine import CalculatorEngine, DIVIDE_BY_ZERO_TOKEN
from number_formatter import format_number
import sys


class _FakeDisplay:
	def __init__(self):
		self.history = []

	def render(self, text):
		self.history.append(text)

	def current_text(self):
		return self.history[-1] if self.history else ""


def _walk(keys: str, *, angle_mode: str = "rad"):
	display = _FakeDisplay()
	engine = CalculatorEngine(display=display)
	engine.angle_mode = angle_mode
	states = []

	for key in keys.split():
		before = display.current_text()
		engine.press_key(key)
		states.append((key, display.current_text(), display.current_text() != before))

	return engine, display.current_text(), states


def inspect_key_states(keys: str, *, angle_mode: str = "rad") -> None:
	"""Imprime la pantalla después de cada tecla."""
	engine, end_text, states = _walk(keys, angle_mode=angle_mode)

	print("Key inspection")
	print(f"keys:           {keys}")
	print(f"angle mode:     {angle_mode}")
	print(f"total keys:     {len(states)}")
	for i, (key, text, changed) in enumerate(states, start=1):
		marker = "" if changed else "  (sin cambio)"
		print(f"  {i}. {key:>4} -> {text}{marker}")

	print(f"final text:     {end_text}")
	print(f"final state:    {engine.state}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	_, end_int, _ = _walk("1 2 3 4 5 6 7 8 9 0")
	checks.append(("typed integer is shown verbatim", end_int == "1234567890"))

	_, end_zeros, states_zeros = _walk("0 0")
	checks.append(("leading zeros stay a single 0", end_zeros == "0"))
	checks.append((
		"second leading zero does not re-render",
		not any(changed for _, _, changed in states_zeros),
	))

	_, end_frac, states_frac = _walk("2 . 5 5 0")
	expected_actual.append(("2 . 5 5", "2.55", states_frac[3][1]))
	expected_actual.append(("2 . 5 5 0", "2.550", end_frac))
	checks.append(("decimal point shows trailing dot", states_frac[1][1] == "2."))
	checks.append(("typed trailing zero is preserved", end_frac == "2.550"))

	_, end_two_points, _ = _walk("1 . . 5")
	checks.append(("repeated decimal point is ignored", end_two_points == "1.5"))

	_, _, states_fresh = _walk("3 + 4 = 1")
	checks.append(("3 + 4 = shows 7", states_fresh[3][1] == "7"))
	checks.append(("digit after = starts a new number", states_fresh[4][1] == "1"))

	_, end_chain, _ = _walk("2 + 3 × 4 =")
	expected_actual.append(("2 + 3 × 4 =", "20", end_chain))
	checks.append(("chain evaluates left to right", end_chain == "20"))

	_, _, states_div0 = _walk("5 ÷ 0 = 9")
	checks.append(("5 ÷ 0 = shows division error", states_div0[3][1] == DIVIDE_BY_ZERO_TOKEN))
	checks.append(("digit after division error restarts", states_div0[4][1] == "9"))

	_, end_div0_twice, _ = _walk("5 ÷ 0 = =")
	checks.append(("equals keeps the division error visible", end_div0_twice == DIVIDE_BY_ZERO_TOKEN))

	_, end_two_ops, _ = _walk("6 + × 2 =")
	expected_actual.append(("6 + × 2 =", "24", end_two_ops))

	_, end_neg_frac, _ = _walk("5 +/- . 5")
	expected_actual.append(("5 +/- . 5", "-5.5", end_neg_frac))

	_, end_error_chain, _ = _walk("3 × 2 0 0 x! 2 =")
	expected_actual.append(("3 × 2 0 0 x! 2 =", "0", end_error_chain))

	_, end_point_op, _ = _walk("3 + .")
	checks.append(("decimal point ignored while operator is shown", end_point_op == "+"))

	_, end_tenths, _ = _walk(". 1 + 0 . 2 =")
	expected_actual.append((". 1 + 0 . 2 =", "0.3", end_tenths))

	_, end_third, _ = _walk("1 ÷ 3 =")
	expected_actual.append(("1 ÷ 3 =", "0.3333333", end_third))

	_, end_fact, _ = _walk("5 x!")
	checks.append(("5! is 120", end_fact == "120"))

	_, end_big_fact, _ = _walk("2 0 0 x!")
	checks.append(("200! overflows to infinity", end_big_fact == "∞"))

	_, end_after_inf, _ = _walk("2 0 0 x! 7")
	checks.append(("digit after infinity restarts", end_after_inf == "7"))

	_, end_pole, _ = _walk("1 +/- x!")
	checks.append(("(-1)! is NaN", end_pole == "NaN"))

	_, end_sin_deg, _ = _walk("3 0 sin", angle_mode="deg")
	checks.append(("sin 30° is 0.5", end_sin_deg == "0.5"))

	_, end_negate, _ = _walk("7 +/- +/-")
	checks.append(("negate twice restores the value", end_negate == "7"))

	_, end_unknown, _ = _walk("4 ^ $ 2")
	checks.append(("unknown keys are ignored", end_unknown == "42"))

	engine_clear, _, _ = _walk("9 + 8 C")
	state_once = engine_clear.state
	engine_clear.press_key("C")
	checks.append(("clear is idempotent", engine_clear.state == state_once))

	checks.append(("formatter keeps short form stable", format_number(float("0.1")) == "0.1"))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	failed.extend(label for label, expected, actual in expected_actual if expected != actual)
	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "2 + 3 × 4 ="
	#   python regression_checks.py --inspect "3 0 sin" --deg
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing keys after --inspect")

		inspect_key_states(keys, angle_mode="deg" if "--deg" in sys.argv else "rad")
	else:
		run_regressions()
