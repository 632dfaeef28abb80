import pytest

from calculator_engine import CalculatorEngine


class RecordingDisplay:
    """Pantalla falsa que guarda todo lo que el motor muestra."""

    def __init__(self):
        self.history: list[str] = []

    def render(self, text: str) -> None:
        self.history.append(text)

    def current_text(self) -> str:
        return self.history[-1] if self.history else ""


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def engine(display):
    return CalculatorEngine(display=display)


@pytest.fixture
def press(engine):
    """Pulsa una secuencia de teclas separadas por espacios."""

    def _press(keys: str) -> str:
        for key in keys.split():
            engine.press_key(key)
        return engine.display_text

    return _press
