"""Tests for system instructions (0xxx)."""

import jax.numpy as jnp
from chip8 import execute


def test_execute_clear_screen(fresh_state):
    """Test 00E0 - Clear display."""
    state = fresh_state.replace(display=fresh_state.display.at[0, 0].set(True))

    state = execute(state, 0x00E0)

    assert jnp.sum(state.display) == 0
    assert state.update_gui


def test_clear_screen_matches_on_low_byte(fresh_state):
    """0?E0 clears the screen whatever the middle nibble."""
    state = fresh_state.replace(display=fresh_state.display.at[5, 5].set(True))

    state = execute(state, 0x03E0)

    assert jnp.sum(state.display) == 0


def test_machine_call_is_ignored(fresh_state):
    """0NNN leaves the machine untouched."""
    state = fresh_state.replace(display=fresh_state.display.at[1, 1].set(True))

    new_state = execute(state, 0x0123)

    assert new_state.pc == state.pc
    assert jnp.array_equal(new_state.display, state.display)
    assert jnp.array_equal(new_state.V, state.V)
    assert not new_state.update_gui


def test_execute_call_and_return(fresh_state):
    """Test 2NNN (call) and 00EE (return) together."""
    state = fresh_state
    initial_pc = state.pc

    # Call subroutine
    state = execute(state, 0x2300)  # Call 0x300
    assert state.pc == 0x300
    assert state.stack.data[state.stack.pointer - 1] == initial_pc

    # Return from subroutine
    state = execute(state, 0x00EE)  # Return
    assert state.pc == initial_pc
    assert state.stack.pointer == 0


def test_nested_calls_unwind_in_order(fresh_state):
    state = execute(fresh_state, 0x2300)
    state = execute(state, 0x2400)
    assert state.stack.pointer == 2

    state = execute(state, 0x00EE)
    assert state.pc == 0x300
    state = execute(state, 0x00EE)
    assert state.pc == 0x200
