"""
Configuración de la ventana y del display de la calculadora.

Este módulo contiene la configuración centralizada de la capa de
presentación: tamaño de ventana, colores, animación de cambio de valor y
formato de números.
"""

# ============================================================================
# CLASE: DisplayConfig
# Propósito: Configuración de la capa de presentación
# Responsabilidades:
#   - Dimensiones y título de la ventana OpenCV
#   - Colores (BGR) del display y de cada tipo de botón
#   - Duración del parpadeo al cambiar el valor mostrado
#   - Separador de miles y tamaño del historial en memoria
# ============================================================================
class DisplayConfig:
    """
    Configuración de la calculadora de escritorio.

    Cualquier atributo puede sobrescribirse al construir:
        DisplayConfig(width=480, verbose=True)

    Raises:
        AttributeError: Si se pasa una opción que no existe
    """

    def __init__(self, **overrides):
        """Inicializa configuración con valores por defecto."""
        # ====================================================================
        # VENTANA
        # ====================================================================
        self.window_title = "Calculadora"
        self.width = 400                    # Ancho de la ventana en píxeles
        self.height = 640                   # Alto de la ventana en píxeles
        self.frame_delay = 15               # ms de espera en cv2.waitKey por frame
        self.margin = 20                    # Margen exterior
        self.button_gap = 12                # Separación entre botones
        self.display_height = 150           # Alto del panel de display

        # ====================================================================
        # COLORES (BGR)
        # ====================================================================
        self.background_color = (20, 14, 10)
        self.display_color = (60, 50, 40)
        self.text_color = (255, 255, 255)
        self.secondary_text_color = (175, 165, 155)
        self.error_color = (80, 80, 240)
        self.button_colors = {
            "digit": (80, 70, 60),
            "operator": (209, 124, 46),     # Azul #2e7cd1
            "function": (209, 124, 46),
            "clear": (68, 68, 239),         # Rojo
        }
        self.highlight_color = (255, 255, 255)

        # ====================================================================
        # DISPLAY
        # ====================================================================
        self.display_font_scale = 2.2       # Escala máxima del valor principal
        self.min_font_scale = 0.6           # Escala mínima al encoger valores largos
        self.flicker_frames = 8             # Frames de parpadeo tras cambiar el valor
        self.press_frames = 6               # Frames de resaltado del botón pulsado
        self.thousands_separator = ","

        # ====================================================================
        # DEPURACIÓN
        # ====================================================================
        self.history_size = 50              # Acciones recientes guardadas en memoria
        self.verbose = False                # Imprimir cada acción y estado

        for name, value in overrides.items():
            if not hasattr(self, name):
                raise AttributeError(f"Opción de configuración desconocida: {name}")
            setattr(self, name, value)

    def keypad_area(self):
        """
        Rectángulo disponible para el teclado.

        Returns:
            tuple: (x, y, w, h) en píxeles, bajo el panel de display
        """
        x = self.margin
        y = self.margin * 2 + self.display_height
        w = self.width - self.margin * 2
        h = self.height - y - self.margin * 2
        return x, y, w, h
