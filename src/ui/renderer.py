"""
Interfaz de usuario y renderizado.

Este módulo contiene la clase UIRenderer que dibuja el display y el teclado
de la calculadora sobre un lienzo numpy con OpenCV.
"""

import cv2
import numpy as np

from config.display import DisplayConfig
from core.calculator import ERROR
from .formatting import format_operand
from .keypad import Keypad


# Símbolos sin glifo en las fuentes Hershey: se dibujan con primitivas
DRAWN_SYMBOLS = ("×", "÷")


# ============================================================================
class UIRenderer:
    """
    Renderizador de interfaz gráfica para la calculadora de escritorio.

    Componentes visuales:
        1. Display: operación pendiente (arriba) y valor actual (grande)
        2. Teclado: rejilla 4x5 con colores por tipo de botón
        3. Parpadeo del valor cuando cambia (observador del Calculator)
        4. Resaltado del botón pulsado o bajo el puntero
        5. Pie con atajos de teclado
    """

    def __init__(self, config=None, keypad=None):
        """
        Args:
            config (DisplayConfig): Configuración de presentación (opcional)
            keypad (Keypad): Teclado en pantalla (opcional)
        """
        self.config = config if config else DisplayConfig()
        self.width = self.config.width
        self.height = self.config.height

        self.keypad = keypad if keypad else Keypad()
        self.keypad.layout(*self.config.keypad_area(), gap=self.config.button_gap)

        self.flicker_timer = 0          # Frames restantes de parpadeo
        self.pressed_button = None      # Último botón pulsado
        self.press_timer = 0            # Frames restantes de resaltado
        self.hover_button = None        # Botón bajo el puntero

    # ========================================================================
    # OBSERVADORES Y EVENTOS
    # ========================================================================
    def on_state_change(self, old_state, new_state):
        """
        Observador del Calculator: inicia el parpadeo si cambia el valor
        mostrado (no basta con que cambie el estado interno).
        """
        sep = self.config.thousands_separator
        if format_operand(old_state.current_operand, sep) != format_operand(new_state.current_operand, sep):
            self.flicker_timer = self.config.flicker_frames

    def press(self, button):
        if button is None:
            return
        self.pressed_button = button
        self.press_timer = self.config.press_frames

    def hover(self, button):
        self.hover_button = button

    # ========================================================================
    # DIBUJO
    # ========================================================================
    def new_canvas(self):
        """Lienzo BGR vacío con el color de fondo."""
        return np.full((self.height, self.width, 3), self.config.background_color, dtype=np.uint8)

    def draw_display(self, img, state):
        """
        Dibuja el panel de display.

        Args:
            img (np.array): Imagen sobre la cual dibujar
            state (CalculatorState): Estado actual

        Colores del valor principal:
            - Blanco: Número normal
            - Rojo: Error
            - Atenuado durante el parpadeo tras un cambio de valor
        """
        cfg = self.config
        sep = cfg.thousands_separator
        x, y = cfg.margin, cfg.margin
        w, h = self.width - cfg.margin * 2, cfg.display_height
        right = x + w - 20

        cv2.rectangle(img, (x, y), (x + w, y + h), cfg.display_color, -1)
        cv2.rectangle(img, (x, y), (x + w, y + h), cfg.button_colors["operator"], 2)

        # Operación pendiente: "1,200 ×"
        if state.previous_operand is not None and state.operation is not None:
            symbol_size = 9
            symbol_x = right - symbol_size
            self._draw_symbol(img, state.operation, (symbol_x, y + 38), symbol_size,
                              cfg.secondary_text_color, 2)
            self._put_text_right(img, format_operand(state.previous_operand, sep),
                                 symbol_x - symbol_size - 14, y + 48, 0.9,
                                 cfg.secondary_text_color, 2)

        # Valor principal
        display = format_operand(state.current_operand, sep)
        color = cfg.error_color if display == ERROR else cfg.text_color

        if self.flicker_timer > 0:
            fade = 1.0 - 0.7 * (self.flicker_timer / max(cfg.flicker_frames, 1))
            color = tuple(int(c * fade) for c in color)
            self.flicker_timer -= 1

        scale = self.fit_font_scale(display, w - 40)
        self._put_text_right(img, display, right, y + h - 25, scale, color, 3)

    def draw_keypad(self, img):
        """Dibuja todos los botones; resalta el pulsado y el del puntero."""
        for button in self.keypad.buttons:
            x0, y0, x1, y1 = button.rect
            color = self.config.button_colors.get(button.kind, self.config.button_colors["digit"])
            if button is self.hover_button:
                color = tuple(min(c + 35, 255) for c in color)

            cv2.rectangle(img, (x0, y0), (x1, y1), color, -1)

            if button is self.pressed_button and self.press_timer > 0:
                # Destello semitransparente que se desvanece
                alpha = self.press_timer / max(self.config.press_frames, 1)
                overlay = img.copy()
                cv2.rectangle(overlay, (x0, y0), (x1, y1), self.config.highlight_color, -1)
                cv2.addWeighted(overlay, 0.35 * alpha, img, 1 - 0.35 * alpha, 0, img)

            center = ((x0 + x1) // 2, (y0 + y1) // 2)
            if button.label in DRAWN_SYMBOLS:
                self._draw_symbol(img, button.label, center, 12, self.config.text_color, 3)
            else:
                self._put_text_centered(img, button.label, center, 1.0, self.config.text_color, 2)

        if self.press_timer > 0:
            self.press_timer -= 1

    def draw_footer(self, img):
        cv2.putText(img, "q: salir | Esc/c: AC | Retroceso: DEL",
                    (self.config.margin, self.height - 14),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.45, self.config.secondary_text_color, 1)

    def render(self, state):
        """Frame completo para el estado dado."""
        img = self.new_canvas()
        self.draw_display(img, state)
        self.draw_keypad(img)
        self.draw_footer(img)
        return img

    # ========================================================================
    # UTILIDADES DE TEXTO
    # ========================================================================
    def fit_font_scale(self, text, max_width, thickness=3):
        """
        Escala de fuente más grande (hasta display_font_scale) con la que el
        texto cabe en max_width píxeles.
        """
        scale = self.config.display_font_scale
        while scale > self.config.min_font_scale:
            text_w = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, scale, thickness)[0][0]
            if text_w <= max_width:
                break
            scale -= 0.1
        return max(scale, self.config.min_font_scale)

    def _put_text_right(self, img, text, right, baseline, scale, color, thickness):
        text_w = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, scale, thickness)[0][0]
        cv2.putText(img, text, (int(right - text_w), int(baseline)),
                    cv2.FONT_HERSHEY_DUPLEX, scale, color, thickness)

    def _put_text_centered(self, img, text, center, scale, color, thickness):
        (text_w, text_h), _ = cv2.getTextSize(text, cv2.FONT_HERSHEY_DUPLEX, scale, thickness)
        cx, cy = center
        cv2.putText(img, text, (int(cx - text_w / 2), int(cy + text_h / 2)),
                    cv2.FONT_HERSHEY_DUPLEX, scale, color, thickness)

    def _draw_symbol(self, img, symbol, center, size, color, thickness):
        """Dibuja ×, ÷, + o - centrado en center con semiancho size."""
        cx, cy = int(center[0]), int(center[1])
        if symbol == "×":
            cv2.line(img, (cx - size, cy - size), (cx + size, cy + size), color, thickness)
            cv2.line(img, (cx - size, cy + size), (cx + size, cy - size), color, thickness)
        elif symbol == "÷":
            dot = int(size * 0.7)
            cv2.line(img, (cx - size, cy), (cx + size, cy), color, thickness)
            cv2.circle(img, (cx, cy - dot), max(thickness - 1, 2), color, -1)
            cv2.circle(img, (cx, cy + dot), max(thickness - 1, 2), color, -1)
        elif symbol == "+":
            cv2.line(img, (cx - size, cy), (cx + size, cy), color, thickness)
            cv2.line(img, (cx, cy - size), (cx, cy + size), color, thickness)
        else:
            cv2.line(img, (cx - size, cy), (cx + size, cy), color, thickness)
