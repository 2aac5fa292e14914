from seedbed.__about__ import (
    __author__,
    __copyright__,
    __email__,
    __license__,
    __summary__,
    __title__,
    __uri__,
    __version__,
)
from seedbed.capability import (
    DEFAULT_ADVANCE_EXPONENT,
    KeyCapability,
    capability_for,
    check_unique_constants,
    key_for,
)
from seedbed.configuration import build_configuration
from seedbed.derivation import derive_bit_generator, derive_generator, derive_state
from seedbed.exceptions import (
    CapabilityError,
    GenerationError,
    KeyProjectionError,
    SamplerError,
    SeedbedError,
    SeedError,
)
from seedbed.generation import KeyedStream, generate
from seedbed.keys import UNIT_KEY, CoordinateKey, IntegerKey, PrngKey, UnitKey
from seedbed.seed import Seed
from seedbed.session import GenerationSession
