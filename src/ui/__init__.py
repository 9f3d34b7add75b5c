"""
Módulo de interfaz de usuario.
Contiene el renderizador, el teclado en pantalla y el formato del display.
"""

from .renderer import UIRenderer
from .keypad import Keypad, action_for_key
from .formatting import format_operand, format_pending

__all__ = ['UIRenderer', 'Keypad', 'action_for_key', 'format_operand', 'format_pending']
