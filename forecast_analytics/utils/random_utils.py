"""Pseudo-random source shared by the simulated data generators"""

import random

# Process-wide source used when a caller does not inject one
_process_rng = random.Random()


def resolve_rng(rng: random.Random | None = None) -> random.Random:
    """Return the injected source, or the process-wide one"""
    return rng if rng is not None else _process_rng


def seeded_rng(seed: int | None) -> random.Random:
    """Deterministic source for a seed; process-wide source when seed is None"""
    return random.Random(seed) if seed is not None else _process_rng
