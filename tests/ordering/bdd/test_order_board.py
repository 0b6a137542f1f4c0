"""BDD tests for the staff order board."""

import pytest
from ordering.dashboard.board import BOARD_COLUMNS, OrderBoard
from ordering.errors import AccessDenied
from ordering.staff.static_gate import StaticTokenGate
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/order_board.feature")


@pytest.fixture()
def opened():
    """Boards opened during a scenario, closed afterwards."""
    boards = []
    yield boards
    for board in boards:
        board.close()


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('staff signed in as "{name}" with an open board'), target_fixture="board")
def staff_with_open_board(name, opened):
    gate = StaticTokenGate({"board-token": name})
    board = OrderBoard(gate, "board-token").open()
    opened.append(board)
    return board


@given("an unknown staff token", target_fixture="board")
def board_with_unknown_token():
    return OrderBoard(StaticTokenGate({"board-token": "Bruno"}), "stolen-token")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the board accepts the order")
def board_accepts_order(board, order_id):
    board.transition(order_id, "preparing")


@when("the board is opened")
def board_is_opened(board, error):
    try:
        board.open()
    except AccessDenied as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the "{status}" column shows "{customer}"'))
def column_shows_customer(board, status, customer):
    assert [card.customer_name for card in board.column(status)] == [customer]


@then(parsers.cfparse('the "{status}" column is empty'))
def column_is_empty(board, status):
    assert board.column(status) == ()


@then("every board column is empty")
def every_column_is_empty(board):
    assert all(board.column(status) == () for status in BOARD_COLUMNS)


@then("access is denied")
def access_is_denied(board, error):
    assert isinstance(error["exc"], AccessDenied)
    assert not board.is_open
