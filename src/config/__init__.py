"""
Módulo de configuración para la calculadora de escritorio.
Contiene la configuración de ventana, colores y comportamiento del display.
"""

from .display import DisplayConfig

__all__ = ['DisplayConfig']
