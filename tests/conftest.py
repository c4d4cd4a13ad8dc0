"""Test configuration and fixtures for CHIP-8 emulator tests."""

import jax
import pytest
import jax.numpy as jnp
from chip8 import CPU, assemble, create_state


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def modern_state():
    """Provide a fresh state in modern mode."""
    return create_state().replace(modern_mode=True)


@pytest.fixture
def legacy_state():
    """Provide a fresh state in legacy mode."""
    return create_state().replace(modern_mode=False)


@pytest.fixture
def cpu():
    """Provide a freshly reset CPU."""
    return CPU()


@pytest.fixture
def rom_file(tmp_path):
    """Write instruction words to a ROM file and return its path."""
    def _write(*instructions, name="test.ch8"):
        path = tmp_path / name
        path.write_bytes(assemble(*instructions))
        return path
    return _write


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def load_cpu(*instructions, **kwargs):
    """CPU with the given words loaded at 0x200."""
    cpu = CPU(**kwargs)
    cpu.load_bytes(assemble(*instructions))
    return cpu


def assert_same_state(actual, expected):
    """Both states have the same static fields and identical leaves."""
    assert jax.tree_util.tree_structure(actual) == jax.tree_util.tree_structure(expected)
    for a, b in zip(jax.tree_util.tree_leaves(actual), jax.tree_util.tree_leaves(expected)):
        assert a.dtype == b.dtype
        assert jnp.array_equal(a, b)
