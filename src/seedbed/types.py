from collections.abc import Callable
from typing import Any, TypeVar

import numpy as np

T = TypeVar("T")

Sampler = Callable[[np.random.Generator], T]
"""Turns a derived generator into a value of some type."""

GeneratorState = dict[str, Any]
"""The ``state`` dictionary of a numpy bit generator."""

MAX_SEED = 2**128
MAX_KEY = 2**64
