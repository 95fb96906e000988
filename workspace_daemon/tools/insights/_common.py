"""Helpers shared by the insight tools."""

from __future__ import annotations

import random

from ..base import ExecutionContext


def rng_for(context: ExecutionContext) -> random.Random:
    """
    Random source for simulated metrics.

    Seeded from `context.metadata["seed"]` when present so results are
    reproducible; otherwise seeded from system entropy.
    """
    return random.Random(context.metadata.get("seed"))
