"""
Aplicación principal que integra todos los componentes.

Este módulo contiene la clase DeskCalculatorApp.
"""

from collections import deque

import cv2

from core.calculator import Calculator
from ui.formatting import format_pending
from ui.keypad import action_for_key
from ui.renderer import UIRenderer
from config.display import DisplayConfig


# Tecla para salir (Escape queda para AC)
QUIT_KEY = ord('q')

# cv2.waitKey(...) & 0xFF cuando no se pulsó nada
NO_KEY = 0xFF


# ============================================================================
class DeskCalculatorApp:
    """
    Aplicación principal de calculadora de escritorio.

    Arquitectura:
        - Calculator: Motor y dueño único del estado
        - UIRenderer: Renderizado de display y teclado (observador del estado)
        - Keypad / action_for_key: Traducción de clics y teclas a acciones
        - DeskCalculatorApp: Coordinador y loop principal

    Orden de eventos:
        - Clics (callback de ratón) y teclas se encolan al llegar
        - Cada frame se aplican todas las acciones pendientes en ese orden,
          una transición por acción
    """

    def __init__(self, config=None, calculator=None):
        """
        Inicializa la aplicación.

        Args:
            config (DisplayConfig): Configuración de presentación (opcional)
            calculator (Calculator): Motor a usar (opcional, uno nuevo si no)
        """
        self.config = config if config else DisplayConfig()
        self.calc = calculator if calculator else Calculator(history_size=self.config.history_size)
        self.ui = UIRenderer(self.config)
        self.keypad = self.ui.keypad

        self.pending = deque()          # Acciones en orden de llegada
        self.running = False

        self.calc.subscribe(self.ui.on_state_change)
        if self.config.verbose:
            self.calc.subscribe(self.log_transition)

    # ========================================================================
    # ENTRADA
    # ========================================================================
    def handle_mouse(self, event, x, y, flags=0, param=None):
        """
        Callback de ratón de OpenCV.

        - Clic izquierdo sobre un botón: encola su acción y lo resalta
        - Movimiento: actualiza el botón bajo el puntero
        """
        if event == cv2.EVENT_LBUTTONDOWN:
            button = self.keypad.hit_test(x, y)
            if button is not None:
                self.ui.press(button)
                self.pending.append(button.action)
        elif event == cv2.EVENT_MOUSEMOVE:
            self.ui.hover(self.keypad.hit_test(x, y))

    def handle_key(self, key):
        """
        Procesa una tecla de cv2.waitKey.

        Returns:
            bool: False si la tecla pide salir
        """
        if key == NO_KEY:
            return True
        if key == QUIT_KEY:
            self.running = False
            return False

        action = action_for_key(key)
        if action is not None:
            self.ui.press(self.keypad.find(action))
            self.pending.append(action)
        return True

    def process_pending(self):
        """Aplica las acciones encoladas; devuelve cuántas se aplicaron."""
        applied = 0
        while self.pending:
            self.calc.dispatch(self.pending.popleft())
            applied += 1
        return applied

    def log_transition(self, old_state, new_state):
        """Observador de depuración (config.verbose)."""
        action = self.calc.history[-1] if self.calc.history else None
        pending = format_pending(new_state.previous_operand, new_state.operation,
                                 self.config.thousands_separator)
        print(f"  {action!r}: {old_state.current_operand!r} → {new_state.current_operand!r}"
              f"{'  [' + pending + ']' if pending else ''}")

    # ========================================================================
    # VENTANA Y BUCLE PRINCIPAL
    # ========================================================================
    def open_window(self):
        """
        Crea la ventana y registra el callback de ratón.

        Raises:
            RuntimeError: Si OpenCV no tiene backend gráfico disponible
        """
        try:
            cv2.namedWindow(self.config.window_title, cv2.WINDOW_AUTOSIZE)
            cv2.setMouseCallback(self.config.window_title, self.handle_mouse)
        except cv2.error as e:
            raise RuntimeError(f"No se pudo abrir la ventana: {e}") from e
        print(f"OK Ventana: {self.config.width}x{self.config.height}")

    def window_closed(self):
        try:
            return cv2.getWindowProperty(self.config.window_title, cv2.WND_PROP_VISIBLE) < 1
        except cv2.error:
            return True

    def run(self):
        """
        Bucle principal de la aplicación.

        Ciclo de ejecución:
            1. Aplicar acciones pendientes (clics y teclas del frame anterior)
            2. Renderizar display y teclado
            3. Mostrar frame y leer teclado (los clics llegan durante waitKey)
            4. Repetir hasta 'q' o cerrar la ventana
        """
        print("\n" + "=" * 50)
        print("CALCULADORA")
        print("=" * 50)
        print("\nDigitos: 0-9 y '.'")
        print("Operaciones: + - * /")
        print("Calcular: Enter o =")
        print("Borrar digito: Retroceso")
        print("Borrar todo: Esc o c")
        if self.config.verbose:
            print("\n✓ Modo detallado ACTIVADO")
        print("\nPresiona 'q' o cierra la ventana para salir\n")
        print("=" * 50 + "\n")

        self.open_window()
        self.running = True
        try:
            while self.running:
                self.process_pending()

                frame = self.ui.render(self.calc.state)
                cv2.imshow(self.config.window_title, frame)

                key = cv2.waitKey(self.config.frame_delay) & 0xFF
                if not self.handle_key(key):
                    break
                if self.window_closed():
                    break
        finally:
            cv2.destroyAllWindows()
            self.running = False
        print("\nOK Aplicacion cerrada correctamente")
