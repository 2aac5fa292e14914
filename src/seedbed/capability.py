"""
================
Key Capabilities
================

A :class:`KeyCapability` says "keys of type ``K`` may be used to generate
values of type ``T``". It carries the two numbers derivation needs:

``constant``
    A 128-bit value XOR'ed into the session seed. It **must** be unique to
    the ``(K, T)`` pair across the whole program. Two pairs that share a
    constant produce correlated streams, and nothing at runtime will notice.
    Pick a fresh random constant for every declaration, e.g. with
    ``int(Seed.random())``, and keep :func:`check_unique_constants` over the
    program's capabilities in the test suite.

``advance_exponent``
    The number of bits the key projection is shifted by before advancing the
    generator. Each key gets ``2 ** advance_exponent`` outputs ("slots")
    before its stream runs into the next key's. The default of 8 gives 256
    slots per key. An exponent of 0 gives every key a single slot, so
    adjacent keys see each other's outputs. That is allowed, but only
    sensible for tests.

Capabilities are plain immutable metadata. The usual way to declare one is at
the definition of the value type::

    @key_for(TileKey, constant=0x5D3A_0F11_9C2B_77E4_21A0_6B3D_88C1_E905)
    class Elevation:
        ...

    capability = capability_for(Elevation, TileKey)

"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from seedbed.exceptions import CapabilityError
from seedbed.types import MAX_SEED, Sampler

K = TypeVar("K")
T = TypeVar("T")

DEFAULT_ADVANCE_EXPONENT = 8
MAX_ADVANCE_EXPONENT = 64

CAPABILITIES_ATTRIBUTE = "__key_capabilities__"


@dataclass(frozen=True)
class KeyCapability(Generic[K, T]):
    """Static binding of a key type to a value type.

    Attributes
    ----------
    key_type
        The type of key this capability accepts.
    value_type
        The type (or a descriptive name for the kind) of value it generates.
    constant
        The 128-bit XOR constant unique to this ``(key_type, value_type)``
        pair.
    advance_exponent
        How many bits each key projection is shifted by before the generator
        is advanced.
    sampler
        An optional default sampling function for ``value_type``.
    """

    key_type: type[K]
    value_type: type[T] | str
    constant: int
    advance_exponent: int = DEFAULT_ADVANCE_EXPONENT
    sampler: Sampler[T] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.constant, bool) or not isinstance(self.constant, int):
            raise CapabilityError(
                f"Capability constants must be integers. Got {self.constant!r} "
                f"for {self.describe()}."
            )
        if not 0 <= self.constant < MAX_SEED:
            raise CapabilityError(
                f"Capability constants must be in the range [0, 2**128). "
                f"Got {self.constant} for {self.describe()}."
            )
        if isinstance(self.advance_exponent, bool) or not isinstance(
            self.advance_exponent, int
        ):
            raise CapabilityError(
                f"Advance exponents must be integers. Got {self.advance_exponent!r} "
                f"for {self.describe()}."
            )
        if not 0 <= self.advance_exponent <= MAX_ADVANCE_EXPONENT:
            raise CapabilityError(
                f"Advance exponents must be between 0 and {MAX_ADVANCE_EXPONENT}. "
                f"Got {self.advance_exponent} for {self.describe()}."
            )

    @property
    def slots_per_key(self) -> int:
        """The number of outputs reserved for each key before streams overlap."""
        return 2**self.advance_exponent

    def describe(self) -> str:
        value_name = (
            self.value_type if isinstance(self.value_type, str) else self.value_type.__name__
        )
        return f"{self.key_type.__name__} -> {value_name}"

    def __repr__(self) -> str:
        return (
            f"KeyCapability({self.describe()}, constant={self.constant:#x}, "
            f"advance_exponent={self.advance_exponent})"
        )


def key_for(
    key_type: type[K],
    constant: int,
    advance_exponent: int = DEFAULT_ADVANCE_EXPONENT,
    sampler: Sampler[Any] | None = None,
) -> Callable[[type[T]], type[T]]:
    """Class decorator declaring that ``key_type`` keys may generate the class.

    Parameters
    ----------
    key_type
        The key type being granted the capability.
    constant
        The XOR constant for this pair. It must not be reused by any other
        ``(key type, value type)`` pair in the program.
    advance_exponent
        Bits of slot space reserved per key.
    sampler
        Default sampling function used when callers do not pass one.

    Returns
    -------
        A decorator that records the capability on the decorated class and
        returns the class unchanged otherwise.

    Raises
    ------
    CapabilityError
        If the class already declares a capability for ``key_type``.
    """

    def decorator(value_type: type[T]) -> type[T]:
        capability = KeyCapability(
            key_type=key_type,
            value_type=value_type,
            constant=constant,
            advance_exponent=advance_exponent,
            sampler=sampler,
        )
        # Only look at the class's own declarations; subclasses start fresh.
        declared = dict(value_type.__dict__.get(CAPABILITIES_ATTRIBUTE, {}))
        if key_type in declared:
            raise CapabilityError(
                f"{value_type.__name__} already declares a capability for "
                f"{key_type.__name__} keys."
            )
        declared[key_type] = capability
        setattr(value_type, CAPABILITIES_ATTRIBUTE, declared)
        return value_type

    return decorator


def capability_for(value_type: type[T], key_type: type[K]) -> KeyCapability[K, T]:
    """Looks up the capability declared with :func:`key_for`.

    Raises
    ------
    CapabilityError
        If ``value_type`` declares no capability for ``key_type``.
    """
    declared = value_type.__dict__.get(CAPABILITIES_ATTRIBUTE, {})
    try:
        return declared[key_type]  # type: ignore [no-any-return]
    except KeyError:
        raise CapabilityError(
            f"{key_type.__name__} keys cannot generate {value_type.__name__} values. "
            f"Declare the pair with @key_for({key_type.__name__}, constant=...)."
        ) from None


def check_unique_constants(capabilities: Iterable[KeyCapability[Any, Any]]) -> None:
    """Asserts that no two capabilities in an explicit table share a constant.

    This is meant to be called once, from a test suite, over every capability
    a program declares. It keeps no state between calls.

    Raises
    ------
    CapabilityError
        If two or more distinct capabilities share a constant.
    """
    by_constant: dict[int, list[KeyCapability[Any, Any]]] = defaultdict(list)
    for capability in capabilities:
        if capability not in by_constant[capability.constant]:
            by_constant[capability.constant].append(capability)

    collisions = {
        constant: shared for constant, shared in by_constant.items() if len(shared) > 1
    }
    if collisions:
        details = "; ".join(
            f"{constant:#x}: " + ", ".join(c.describe() for c in shared)
            for constant, shared in collisions.items()
        )
        raise CapabilityError(f"Capability constants are reused: {details}.")
