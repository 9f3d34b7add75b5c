"""
Formato de operandos para el display.

Separadores de miles en la parte entera; la parte decimal se muestra tal
cual se tecleó (incluido un punto final, "12." mientras se escribe).
"""

from core.calculator import ERROR


def group_thousands(digits, separator=","):
    """'1234567' → '1,234,567'."""
    head = len(digits) % 3 or 3
    groups = [digits[:head]]
    groups.extend(digits[i:i + 3] for i in range(head, len(digits), 3))
    return separator.join(groups)


def format_operand(operand, separator=","):
    """
    Texto a mostrar para un operando.

    Args:
        operand (str | None): Operando del estado de la calculadora
        separator (str): Separador de miles

    Returns:
        str: "" para None, "Error" tal cual, "1,234.50" para "1234.50"

    Los valores que no son dígitos simples (notación científica, "Infinity",
    "NaN") se devuelven sin cambios.
    """
    if operand is None:
        return ""
    if operand == ERROR:
        return ERROR

    sign = ""
    body = operand
    if body.startswith("-"):
        sign, body = "-", body[1:]

    integer, dot, decimal = body.partition(".")
    if integer and not integer.isdecimal():
        return operand
    if decimal and not decimal.isdecimal():
        return operand

    # Sin ceros a la izquierda; "" (operando ".5") se muestra como 0
    integer = integer.lstrip("0") or "0"
    return sign + group_thousands(integer, separator) + dot + decimal


def format_pending(previous, operation, separator=","):
    """Línea secundaria: '1,200 ×' o '' si no hay operación pendiente."""
    if previous is None or operation is None:
        return ""
    return f"{format_operand(previous, separator)} {operation}"
