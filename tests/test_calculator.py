"""Tests del motor de la calculadora: transiciones puras y aritmética."""

import random

import pytest

from core.actions import AddDigit, DeleteDigit, ChooseOperation, Evaluate, Clear
from core.calculator import (
    CalculatorState, INITIAL_STATE, ERROR, ERROR_STATE, DivisionByZero,
    add_digit, delete_digit, select_operation, calculate, clear,
    evaluate, format_number, parse_operand, reduce,
)


def run(*steps, state=INITIAL_STATE):
    """Aplica una secuencia de acciones partiendo de `state`."""
    for action in steps:
        state = reduce(state, action)
    return state


def check_invariants(state):
    assert state.current_operand.count(".") <= 1
    if state.current_operand == ERROR:
        assert state.previous_operand is None
        assert state.operation is None
    if state.operation is not None:
        assert state.previous_operand is not None


# --- Estado inicial y clear ---

def test_initial_state():
    assert INITIAL_STATE == CalculatorState("0", None, None, True)


@pytest.mark.parametrize("state", [
    INITIAL_STATE,
    ERROR_STATE,
    CalculatorState("12.5", "3", "×", False),
    CalculatorState("7", None, None, False),
])
def test_clear_is_idempotent_and_returns_initial_state(state):
    assert clear(state) == INITIAL_STATE
    assert clear(clear(state)) == clear(state)


# --- add_digit ---

def test_leading_zero_is_suppressed():
    state = run(AddDigit("0"), AddDigit("5"))
    assert state.current_operand == "5"


def test_digits_append_after_first():
    state = run(AddDigit("1"), AddDigit("2"), AddDigit("3"))
    assert state.current_operand == "123"
    assert state.overwrite is False


def test_second_decimal_point_is_ignored():
    state = run(AddDigit("1"), AddDigit("."), AddDigit("."), AddDigit("5"), AddDigit("."))
    assert state.current_operand == "1.5"
    assert state.current_operand.count(".") == 1


def test_decimal_point_first_in_overwrite_mode():
    state = run(AddDigit("."), AddDigit("5"))
    assert state.current_operand == ".5"


def test_zero_then_decimal_point_keeps_zero():
    state = run(AddDigit("0"), AddDigit("."), AddDigit("2"))
    assert state.current_operand == "0.2"


def test_invalid_digit_is_ignored():
    state = CalculatorState("12", None, None, False)
    assert add_digit(state, "x") is state
    assert add_digit(state, "12") is state


def test_digit_after_result_starts_new_operand():
    state = run(AddDigit("2"), ChooseOperation("+"), AddDigit("3"), Evaluate(), AddDigit("7"))
    assert state == CalculatorState("7", None, None, False)


# --- delete_digit ---

def test_delete_drops_last_character():
    state = run(AddDigit("1"), AddDigit("2"), AddDigit("3"), DeleteDigit())
    assert state.current_operand == "12"
    assert state.overwrite is False


@pytest.mark.parametrize("digits", ["7", "42", "1.05", "98765"])
def test_delete_n_times_returns_to_zero(digits):
    state = run(*[AddDigit(d) for d in digits])
    for _ in digits:
        state = delete_digit(state)
    assert state.current_operand == "0"
    assert state.overwrite is True

    again = delete_digit(state)
    assert again.current_operand == "0"
    assert again.overwrite is True


def test_delete_in_overwrite_mode_clears_everything():
    state = run(AddDigit("5"), ChooseOperation("+"))
    assert state.overwrite is True
    assert delete_digit(state) == INITIAL_STATE


def test_delete_after_result_clears():
    state = run(AddDigit("6"), ChooseOperation("×"), AddDigit("7"), Evaluate())
    assert state.current_operand == "42"
    assert delete_digit(state) == INITIAL_STATE


def test_delete_single_digit_keeps_pending_operation():
    state = run(AddDigit("5"), ChooseOperation("+"), AddDigit("3"), DeleteDigit())
    assert state == CalculatorState("0", "5", "+", True)


# --- select_operation ---

def test_operator_on_initial_zero_is_ignored():
    assert select_operation(INITIAL_STATE, "+") is INITIAL_STATE


def test_operator_captures_current_operand():
    state = run(AddDigit("1"), AddDigit("2"), ChooseOperation("÷"))
    assert state == CalculatorState("12", "12", "÷", True)


def test_operator_chaining_folds_pending_operation():
    state = run(
        AddDigit("2"), ChooseOperation("+"),
        AddDigit("3"), ChooseOperation("+"),
    )
    assert state.previous_operand == "5"
    assert state.operation == "+"

    state = run(AddDigit("4"), Evaluate(), state=state)
    assert state.current_operand == "9"


def test_operator_replacement_does_not_fold():
    state = run(AddDigit("5"), ChooseOperation("+"), ChooseOperation("-"))
    assert state == CalculatorState("5", "5", "-", True)

    state = run(AddDigit("2"), Evaluate(), state=state)
    assert state.current_operand == "3"


def test_mixed_chain_is_evaluated_left_to_right():
    # Sin precedencia: (2 + 3) × 4
    state = run(
        AddDigit("2"), ChooseOperation("+"),
        AddDigit("3"), ChooseOperation("×"),
        AddDigit("4"), Evaluate(),
    )
    assert state.current_operand == "20"


def test_operator_after_result_continues_from_result():
    state = run(AddDigit("9"), ChooseOperation("-"), AddDigit("4"), Evaluate(), ChooseOperation("×"))
    assert state == CalculatorState("5", "5", "×", True)


def test_unknown_operator_is_ignored():
    state = CalculatorState("5", None, None, False)
    assert select_operation(state, "%") is state


def test_fold_ending_in_division_by_zero_discards_new_operator():
    state = run(AddDigit("8"), ChooseOperation("÷"), AddDigit("0"), ChooseOperation("+"))
    assert state == ERROR_STATE


# --- calculate ---

@pytest.mark.parametrize("left, op, right, expected", [
    ("2", "+", "3", "5"),
    ("10", "-", "4", "6"),
    ("3", "-", "5", "-2"),
    ("2.5", "×", "4", "10"),
    ("15", "÷", "4", "3.75"),
    ("1", "÷", "3", "0.3333333333333333"),
    ("0.1", "+", "0.2", "0.30000000000000004"),
    ("7", "*", "6", "42"),
    ("9", "/", "2", "4.5"),
])
def test_calculate(left, op, right, expected):
    state = CalculatorState(right, left, op, False)
    assert calculate(state) == CalculatorState(expected, None, None, True)


def test_division_by_zero_yields_error_state():
    state = CalculatorState("0", "10", "÷", False)
    assert calculate(state) == CalculatorState(ERROR, None, None, True)


def test_division_by_zero_with_decimal_divisor():
    state = run(AddDigit("3"), ChooseOperation("÷"), AddDigit("0"), AddDigit("."), Evaluate())
    assert state == ERROR_STATE


def test_calculate_without_pending_operation_is_noop():
    state = CalculatorState("12", None, None, False)
    assert calculate(state) is state


def test_calculate_on_error_is_noop():
    assert calculate(ERROR_STATE) is ERROR_STATE


def test_calculate_with_unparseable_operand_is_noop():
    state = CalculatorState(".", "4", "+", False)
    assert calculate(state) is state


def test_repeated_equals_is_noop():
    state = run(AddDigit("2"), ChooseOperation("+"), AddDigit("2"), Evaluate())
    assert calculate(state) is state


def test_small_results_switch_to_scientific_notation():
    state = run(AddDigit("1"), ChooseOperation("÷"), *[AddDigit(d) for d in "10000000"], Evaluate())
    assert state.current_operand == "1e-7"

    state = run(AddDigit("1"), ChooseOperation("÷"), *[AddDigit(d) for d in "1000000"], Evaluate())
    assert state.current_operand == "0.000001"


@pytest.mark.parametrize("state", [
    CalculatorState("2", "NaN", "+", False),
    CalculatorState("0", "NaN", "÷", False),
    CalculatorState("NaN", "5", "×", False),
])
def test_calculate_with_nan_operand_is_noop(state):
    # NaN no es un número válido: ni se pliega ni lleva a Error
    assert calculate(state) is state


# --- Estado Error: toda acción pasa antes por un clear implícito ---

def test_digit_in_error_state_starts_fresh_entry():
    state = add_digit(ERROR_STATE, "7")
    assert state == CalculatorState("7", None, None, False)


def test_decimal_point_in_error_state_starts_fresh_entry():
    assert add_digit(ERROR_STATE, ".") == CalculatorState(".", None, None, False)


def test_operator_in_error_state_clears():
    assert select_operation(ERROR_STATE, "+") == INITIAL_STATE


def test_delete_in_error_state_clears():
    assert delete_digit(ERROR_STATE) == INITIAL_STATE


# --- Utilidades aritméticas ---

def test_evaluate_refuses_division_by_zero():
    with pytest.raises(DivisionByZero):
        evaluate(1.0, "÷", 0.0)
    with pytest.raises(ZeroDivisionError):
        evaluate(1.0, "/", -0.0)


def test_evaluate_rejects_unknown_operator():
    with pytest.raises(ValueError):
        evaluate(1.0, "%", 2.0)


@pytest.mark.parametrize("value, expected", [
    (9.0, "9"),
    (-2.0, "-2"),
    (3.75, "3.75"),
    (-0.0, "0"),
    (1e20, "100000000000000000000"),
    (1e21, "1e+21"),
    (1.5e-8, "1.5e-8"),
    (1e-6, "0.000001"),
    (1e-7, "1e-7"),
    (1.23e-7, "1.23e-7"),
    (float("inf"), "Infinity"),
    (float("-inf"), "-Infinity"),
    (float("nan"), "NaN"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("text, expected", [
    ("12", 12.0),
    ("0.", 0.0),
    (".5", 0.5),
    ("-3", -3.0),
    ("1e+21", 1e21),
    ("Infinity", float("inf")),
    (".", None),
    (ERROR, None),
    ("NaN", None),
])
def test_parse_operand(text, expected):
    assert parse_operand(text) == expected


def test_reduce_rejects_unknown_action():
    with pytest.raises(TypeError):
        reduce(INITIAL_STATE, "7")


# --- Invariantes en todos los estados alcanzables ---

ALL_ACTIONS = (
    [AddDigit(d) for d in "0123456789."]
    + [ChooseOperation(op) for op in "+-×÷"]
    + [DeleteDigit(), Evaluate(), Clear()]
)


def test_invariants_hold_for_every_action_from_every_visited_state():
    rng = random.Random(1234)
    visited = {INITIAL_STATE}
    for _ in range(300):
        state = INITIAL_STATE
        for _ in range(25):
            # Más peso a ceros y divisiones para que aparezcan divisiones por cero
            action = rng.choice(ALL_ACTIONS + [AddDigit("0"), ChooseOperation("÷")] * 3)
            state = reduce(state, action)
            check_invariants(state)
            visited.add(state)

    for state in visited:
        for action in ALL_ACTIONS:
            check_invariants(reduce(state, action))

    assert ERROR_STATE in visited
