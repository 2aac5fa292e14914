from __future__ import annotations

from dataclasses import dataclass

from seedbed import samplers
from seedbed.capability import KeyCapability


@dataclass(frozen=True)
class ValueKey:
    index: int

    def key(self) -> int:
        return self.index


VALUE_1 = KeyCapability(ValueKey, "value_1", constant=1, sampler=samplers.uniform())
VALUE_2 = KeyCapability(ValueKey, "value_2", constant=2, sampler=samplers.uniform())
