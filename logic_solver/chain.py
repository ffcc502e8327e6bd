"""Chains of bi-value linked cells used as evidence by the chain techniques."""

# chain.py
# A chain is a plain list of cells; consecutive cells share a region and a
# linking candidate. Searches extend a chain by copying it (copy-on-branch),
# so a chain handed to a caller is never mutated afterwards.

from __future__ import annotations

from .solver_core import Cell

Chain = list  # list[Cell]


def extend(chain: Chain, cell: Cell) -> Chain:
    return chain + [cell]


def identical_chain(chain0: Chain, chain1: Chain) -> bool:
    """Same cells, in any order. Two such chains describe a closed loop (a locked tuple), not evidence."""
    if len(chain0) != len(chain1):
        return False
    return sorted(c.index for c in chain0) == sorted(c.index for c in chain1)


def is_circular(chain: Chain) -> bool:
    """True when the chain comes back to a cell it already passed through."""
    return len({c.index for c in chain}) != len(chain)


def format_chain(chain: Chain, with_values: bool = False) -> str:
    if with_values:
        return " ".join(c.describe() for c in chain)
    return " ".join(c.key for c in chain)
