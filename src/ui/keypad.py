"""
Teclado en pantalla y mapeo de teclas físicas a acciones.

Este módulo contiene la rejilla de botones (posiciones, colores por tipo,
detección de clics) y la traducción de códigos de tecla de OpenCV a las
acciones del motor.
"""

from core.actions import AddDigit, DeleteDigit, ChooseOperation, Evaluate, Clear, DIGITS


# Códigos de tecla devueltos por cv2.waitKey (tras & 0xFF)
KEY_BACKSPACE = (8, 127)
KEY_ENTER = (10, 13)
KEY_ESCAPE = 27

# Nombres de tecla aceptados además de los caracteres
KEY_NAMES = {
    "Enter": Evaluate(),
    "Backspace": DeleteDigit(),
    "Escape": Clear(),
}


# ============================================================================
# CLASE: Button
# Propósito: Un botón del teclado en pantalla
# ============================================================================
class Button:
    """
    Botón de la rejilla.

    Atributos:
        - label: Texto del botón ("7", "AC", "÷")
        - action: Acción que se despacha al pulsarlo
        - kind: "digit", "operator", "function" o "clear" (define el color)
        - row, col, span: Posición en la rejilla
        - rect: (x0, y0, x1, y1) en píxeles tras Keypad.layout()
    """

    def __init__(self, label, action, kind, row, col, span=1):
        self.label = label
        self.action = action
        self.kind = kind
        self.row = row
        self.col = col
        self.span = span
        self.rect = None

    def contains(self, px, py):
        if self.rect is None:
            return False
        x0, y0, x1, y1 = self.rect
        return x0 <= px <= x1 and y0 <= py <= y1

    def __repr__(self):
        return f"Button({self.label!r}, row={self.row}, col={self.col})"


# Rejilla 4x5: (etiqueta, acción, tipo, columnas que ocupa)
BUTTON_ROWS = [
    [("AC", Clear(), "clear", 2), ("DEL", DeleteDigit(), "function", 1),
     ("÷", ChooseOperation("÷"), "operator", 1)],
    [("7", AddDigit("7"), "digit", 1), ("8", AddDigit("8"), "digit", 1),
     ("9", AddDigit("9"), "digit", 1), ("×", ChooseOperation("×"), "operator", 1)],
    [("4", AddDigit("4"), "digit", 1), ("5", AddDigit("5"), "digit", 1),
     ("6", AddDigit("6"), "digit", 1), ("-", ChooseOperation("-"), "operator", 1)],
    [("1", AddDigit("1"), "digit", 1), ("2", AddDigit("2"), "digit", 1),
     ("3", AddDigit("3"), "digit", 1), ("+", ChooseOperation("+"), "operator", 1)],
    [("0", AddDigit("0"), "digit", 2), (".", AddDigit("."), "digit", 1),
     ("=", Evaluate(), "function", 1)],
]


# ============================================================================
# CLASE: Keypad
# Propósito: Rejilla de botones en pantalla
# Responsabilidades:
#   - Calcular el rectángulo de cada botón para un área dada
#   - Encontrar el botón bajo el puntero
#   - Encontrar el botón asociado a una acción (para resaltarlo al teclear)
# ============================================================================
class Keypad:
    COLUMNS = 4

    def __init__(self, rows=None):
        self.buttons = []
        rows = rows if rows else BUTTON_ROWS
        for r, row in enumerate(rows):
            col = 0
            for label, action, kind, span in row:
                self.buttons.append(Button(label, action, kind, r, col, span))
                col += span
        self.rows = len(rows)

    def layout(self, x, y, w, h, gap=12):
        """
        Asigna a cada botón su rectángulo dentro del área (x, y, w, h).

        Un botón que ocupa varias columnas absorbe también los huecos entre
        ellas.
        """
        cell_w = (w - gap * (self.COLUMNS - 1)) / self.COLUMNS
        cell_h = (h - gap * (self.rows - 1)) / self.rows
        for button in self.buttons:
            x0 = x + button.col * (cell_w + gap)
            y0 = y + button.row * (cell_h + gap)
            x1 = x0 + button.span * cell_w + (button.span - 1) * gap
            y1 = y0 + cell_h
            button.rect = (int(x0), int(y0), int(x1), int(y1))

    def hit_test(self, px, py):
        """Botón bajo el punto (px, py), o None."""
        for button in self.buttons:
            if button.contains(px, py):
                return button
        return None

    def find(self, action):
        """Botón que despacha la acción dada, o None."""
        for button in self.buttons:
            if button.action == action:
                return button
        return None


def action_for_key(key):
    """
    Traduce una tecla a una acción del motor.

    Args:
        key (int | str): Código de cv2.waitKey (& 0xFF), un carácter o un
            nombre de tecla ("Enter", "Backspace", "Escape")

    Returns:
        Acción o None si la tecla no tiene función

    Mapeo:
        - 0-9 y "." → AddDigit
        - + - * / → ChooseOperation (* → ×, / → ÷)
        - Enter o = → Evaluate
        - Backspace → DeleteDigit
        - Escape, c o C → Clear
    """
    if isinstance(key, int):
        if key in KEY_BACKSPACE:
            return DeleteDigit()
        if key in KEY_ENTER:
            return Evaluate()
        if key == KEY_ESCAPE:
            return Clear()
        if not 0 <= key < 128:
            return None
        key = chr(key)

    if key in KEY_NAMES:
        return KEY_NAMES[key]
    if key in DIGITS:
        return AddDigit(key)
    if key in ("+", "-", "*", "/"):
        return ChooseOperation(key)
    if key == "=":
        return Evaluate()
    if key in ("c", "C"):
        return Clear()
    return None
