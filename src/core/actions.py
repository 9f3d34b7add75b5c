"""
Acciones discretas que alimentan al motor de la calculadora.

Cada pulsación (tecla o botón) se traduce en una de estas acciones antes de
llegar al motor. La canonicalización de operadores ocurre aquí, de modo que
el motor solo ve los cuatro símbolos canónicos.
"""

from dataclasses import dataclass


# Operadores canónicos que entiende el motor
ADD = "+"
SUBTRACT = "-"
MULTIPLY = "×"
DIVIDE = "÷"

OPERATORS = (ADD, SUBTRACT, MULTIPLY, DIVIDE)

# Alias de teclado → símbolo canónico
OPERATOR_ALIASES = {
    "*": MULTIPLY,
    "/": DIVIDE,
}

DIGITS = tuple("0123456789.")


def canonical_operation(symbol):
    """
    Convierte un símbolo de operador a su forma canónica.

    Args:
        symbol (str): "+", "-", "×", "÷" o los alias "*" y "/"

    Returns:
        str: Uno de OPERATORS

    Raises:
        ValueError: Si el símbolo no es un operador conocido
    """
    if symbol in OPERATORS:
        return symbol
    if symbol in OPERATOR_ALIASES:
        return OPERATOR_ALIASES[symbol]
    raise ValueError(f"Operador desconocido: {symbol!r}")


# ============================================================================
# ACCIONES
# Valores inmutables; dos acciones iguales describen la misma pulsación
# ============================================================================
@dataclass(frozen=True)
class AddDigit:
    """Añadir un dígito (0-9) o el punto decimal al operando actual."""

    digit: str

    def __post_init__(self):
        if self.digit not in DIGITS:
            raise ValueError(f"Dígito inválido: {self.digit!r}")


@dataclass(frozen=True)
class DeleteDigit:
    """Borrar el último carácter del operando actual."""


@dataclass(frozen=True)
class ChooseOperation:
    """Seleccionar operador; los alias se canonicalizan al construir."""

    operation: str

    def __post_init__(self):
        # frozen=True: hay que pasar por object.__setattr__
        object.__setattr__(self, "operation", canonical_operation(self.operation))


@dataclass(frozen=True)
class Evaluate:
    """Resolver la operación pendiente (tecla =)."""


@dataclass(frozen=True)
class Clear:
    """Volver al estado inicial (AC)."""
