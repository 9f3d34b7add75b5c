"""
Módulo de la aplicación principal.
Contiene la clase que integra todos los componentes.
"""

from .calculator_app import DeskCalculatorApp

__all__ = ['DeskCalculatorApp']
