# ============================================================================
# PUNTO DE ENTRADA - Calculadora de escritorio
# ============================================================================
import sys
import traceback

from app.calculator_app import DeskCalculatorApp
from config.display import DisplayConfig


def main(argv=None):
    """
    Punto de entrada de la aplicación.

    Manejo de errores:
        - KeyboardInterrupt (Ctrl+C): Cierre graceful por usuario
        - Exception general: Muestra el error y el traceback, devuelve 1

    Ejecución:
        python3 src/main.py [-v]
        calculadora [-v]

    Opciones:
        -v, --verbose: Imprime cada acción y el estado resultante
    """
    argv = sys.argv[1:] if argv is None else argv
    config = DisplayConfig(verbose=("-v" in argv or "--verbose" in argv))

    try:
        app = DeskCalculatorApp(config)
        app.run()
    except KeyboardInterrupt:
        print("\nInterrumpido por el usuario")
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
