"""
==========
Exceptions
==========

Module containing package-wide exception definitions.

Derivation itself never fails for well-formed inputs. These errors mark
malformed seeds, keys and capability declarations, or a generation request
with nothing to sample with.

"""


class SeedbedError(Exception):
    """Generic exception raised for errors in ``seedbed``."""

    pass


class SeedError(SeedbedError):
    """Raised when a raw seed value does not fit in 128 unsigned bits."""

    pass


class KeyProjectionError(SeedbedError):
    """Raised when a key cannot be projected onto 64 unsigned bits."""

    pass


class CapabilityError(SeedbedError):
    """Raised for malformed, missing or misapplied key capabilities."""

    pass


class GenerationError(SeedbedError):
    """Raised when a value is requested without any way to sample it."""

    pass


class SamplerError(SeedbedError):
    """Raised when a stock sampler is built from invalid parameters."""

    pass
