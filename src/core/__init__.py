"""
Módulo core con el motor de la calculadora.
Contiene el estado, las transiciones puras y las acciones del usuario.
"""

from .actions import AddDigit, DeleteDigit, ChooseOperation, Evaluate, Clear, canonical_operation
from .calculator import Calculator, CalculatorState, INITIAL_STATE, ERROR, reduce

__all__ = [
    'AddDigit', 'DeleteDigit', 'ChooseOperation', 'Evaluate', 'Clear', 'canonical_operation',
    'Calculator', 'CalculatorState', 'INITIAL_STATE', 'ERROR', 'reduce',
]
