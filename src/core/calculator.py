"""
Motor de la calculadora de escritorio.

Este módulo contiene el estado inmutable CalculatorState, las transiciones
puras que lo transforman (una por acción del usuario) y la clase Calculator,
que guarda el último estado y avisa a los observadores de cada cambio.
"""

import math
import operator
from collections import deque
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .actions import (
    ADD, SUBTRACT, MULTIPLY, DIVIDE, OPERATORS, OPERATOR_ALIASES, DIGITS,
    AddDigit, DeleteDigit, ChooseOperation, Evaluate, Clear,
)


# Centinela mostrado tras una división por cero
ERROR = "Error"

# Operaciones binarias (incluye alias para estados construidos a mano)
BINARY_OPERATIONS = {
    ADD: operator.add,
    SUBTRACT: operator.sub,
    MULTIPLY: operator.mul,
    DIVIDE: operator.truediv,
}
for _alias, _canonical in OPERATOR_ALIASES.items():
    BINARY_OPERATIONS[_alias] = BINARY_OPERATIONS[_canonical]

# Rango en el que los resultados se escriben en notación posicional
POSITIONAL_MIN = 1e-6
POSITIONAL_MAX = 1e21


class DivisionByZero(ZeroDivisionError):
    """Divisor nulo en calculate(); nunca sale del motor."""


# ============================================================================
# CLASE: CalculatorState
# Propósito: Instantánea inmutable de la calculadora
# Responsabilidades:
#   - current_operand: Operando en edición o resultado ("0", "12.5", "Error")
#   - previous_operand: Operando capturado al elegir operador (o None)
#   - operation: Operador pendiente (o None)
#   - overwrite: El siguiente dígito reemplaza en vez de añadir
# ============================================================================
@dataclass(frozen=True)
class CalculatorState:
    current_operand: str = "0"
    previous_operand: Optional[str] = None
    operation: Optional[str] = None
    overwrite: bool = True

    @property
    def is_error(self):
        return self.current_operand == ERROR

    @property
    def has_pending_operation(self):
        return self.operation is not None and self.previous_operand is not None


INITIAL_STATE = CalculatorState()

ERROR_STATE = CalculatorState(current_operand=ERROR)


# ============================================================================
# ARITMÉTICA
# ============================================================================
def parse_operand(text):
    """
    Interpreta un operando como número decimal.

    Returns:
        float | None: None si el texto no es un número (".", "Error" o "NaN")
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return value


def format_number(value):
    """
    Forma canónica de un resultado.

    Reglas:
        - 9.0 → "9" (enteros sin decimales)
        - 0.1 + 0.2 → "0.30000000000000004" (representación más corta)
        - |x| >= 1e21 o |x| < 1e-6 → notación científica ("1e+21", "1.23e-7")
        - -0.0 → "0"
        - inf / nan → "Infinity", "-Infinity", "NaN"
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if POSITIONAL_MIN <= magnitude < POSITIONAL_MAX:
        return np.format_float_positional(value, trim="-")
    return np.format_float_scientific(value, trim="-", exp_digits=1)


def evaluate(left, op, right):
    """
    Aplica un operador binario a dos números.

    Args:
        left (float): Operando izquierdo
        op (str): Operador canónico o alias ("*", "/")
        right (float): Operando derecho

    Returns:
        float: Resultado en coma flotante de doble precisión

    Raises:
        DivisionByZero: Si op es división y right == 0 (no se llega a dividir)
        ValueError: Si op no es un operador conocido
    """
    if op not in BINARY_OPERATIONS:
        raise ValueError(f"Operador desconocido: {op!r}")
    if BINARY_OPERATIONS[op] is operator.truediv and right == 0:
        raise DivisionByZero(f"{left} {op} 0")
    return BINARY_OPERATIONS[op](left, right)


# ============================================================================
# TRANSICIONES
# Funciones totales: siempre devuelven un estado válido, nunca lanzan.
# Cualquier acción sobre el estado Error pasa antes por clear().
# ============================================================================
def clear(state=None):
    """Estado inicial, sea cual sea el estado de partida."""
    return INITIAL_STATE


def add_digit(state, digit):
    """
    Añade un dígito o el punto decimal al operando actual.

    Comportamiento:
        - En Error: se limpia y el dígito se toma como primero ("Error" + 7 → "7")
        - Segundo "." en el mismo operando: se ignora
        - Modo overwrite: el dígito reemplaza al operando
        - Operando "0": el dígito lo reemplaza (sin ceros a la izquierda)
        - Resto: se añade al final
    """
    if digit not in DIGITS:
        return state
    if state.is_error:
        state = clear(state)

    if digit == "." and "." in state.current_operand:
        return state

    if state.overwrite:
        return replace(state, current_operand=digit, overwrite=False)
    if state.current_operand == "0" and digit != ".":
        return replace(state, current_operand=digit)
    return replace(state, current_operand=state.current_operand + digit)


def delete_digit(state):
    """
    Borra el último carácter (DEL).

    En modo overwrite equivale a clear(); con un solo carácter vuelve a "0"
    y activa overwrite.
    """
    if state.overwrite:
        return clear(state)
    if len(state.current_operand) == 1:
        return replace(state, current_operand="0", overwrite=True)
    return replace(state, current_operand=state.current_operand[:-1])


def select_operation(state, op):
    """
    Selecciona un operador.

    Comportamiento:
        - En Error: se limpia (el operador no tiene nada sobre lo que actuar)
        - "0" sin operando previo: se ignora
        - Operación pendiente y operando nuevo tecleado: se pliega primero
          (2 + 3 + → 5 +)
        - Operación pendiente sin operando nuevo: se reemplaza el operador
          (5 + - → 5 -)
        - Si el plegado termina en Error, se devuelve el Error y se descarta op
    """
    if op not in OPERATORS:
        return state
    if state.is_error:
        state = clear(state)

    if state.current_operand == "0" and state.previous_operand is None:
        return state

    if state.previous_operand is not None and not state.overwrite:
        state = calculate(state)
        if state.is_error:
            return state

    return replace(
        state,
        operation=op,
        previous_operand=state.current_operand,
        overwrite=True,
    )


def calculate(state):
    """
    Resuelve la operación pendiente (=).

    No hace nada si no hay operación pendiente, si el estado es Error o si
    algún operando no se puede interpretar. Dividir por cero lleva a
    ERROR_STATE sin evaluar la división.
    """
    if state.operation is None or state.previous_operand is None or state.is_error:
        return state

    left = parse_operand(state.previous_operand)
    right = parse_operand(state.current_operand)
    if left is None or right is None:
        return state

    try:
        result = evaluate(left, state.operation, right)
    except DivisionByZero:
        return ERROR_STATE
    except ValueError:
        return state

    return CalculatorState(current_operand=format_number(result), overwrite=True)


def reduce(state, action):
    """
    Aplica una acción al estado y devuelve el siguiente.

    Raises:
        TypeError: Si action no es una de las acciones de core.actions
    """
    if isinstance(action, AddDigit):
        return add_digit(state, action.digit)
    if isinstance(action, DeleteDigit):
        return delete_digit(state)
    if isinstance(action, ChooseOperation):
        return select_operation(state, action.operation)
    if isinstance(action, Evaluate):
        return calculate(state)
    if isinstance(action, Clear):
        return clear(state)
    raise TypeError(f"Acción no soportada: {action!r}")


# ============================================================================
# CLASE: Calculator
# Propósito: Contenedor mutable del último estado
# Responsabilidades:
#   - Aplicar acciones en el orden en que llegan
#   - Avisar a los observadores (renderizador, consola) de cada cambio
#   - Guardar en memoria las últimas acciones despachadas
# ============================================================================
class Calculator:
    """
    Dueño único del estado de la calculadora.

    El estado se reemplaza entero en cada acción; los observadores reciben
    (estado_anterior, estado_nuevo) solo si la acción cambió algo.
    """

    def __init__(self, state=None, history_size=50):
        self.state = state if state else INITIAL_STATE
        self.history = deque(maxlen=history_size)
        self._subscribers = []

    def subscribe(self, callback):
        """Registra un observador; devuelve el propio callback."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def dispatch(self, action):
        """
        Aplica una acción y notifica el cambio.

        Returns:
            CalculatorState: Estado resultante
        """
        previous = self.state
        self.state = reduce(previous, action)
        self.history.append(action)

        if self.state != previous:
            for callback in list(self._subscribers):
                callback(previous, self.state)
        return self.state

    def add_digit(self, digit):
        return self.dispatch(AddDigit(digit))

    def delete_digit(self):
        return self.dispatch(DeleteDigit())

    def select_operation(self, op):
        return self.dispatch(ChooseOperation(op))

    def calculate(self):
        return self.dispatch(Evaluate())

    def clear_all(self):
        return self.dispatch(Clear())

    def get_display(self):
        """Operando actual tal cual (sin formato)."""
        return self.state.current_operand

    def get_expression(self):
        """Operación pendiente como texto ("12 ×"), o "" si no hay."""
        if not self.state.has_pending_operation:
            return ""
        return f"{self.state.previous_operand} {self.state.operation}"
