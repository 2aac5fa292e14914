__all__ = [
    "__title__",
    "__summary__",
    "__uri__",
    "__version__",
    "__author__",
    "__email__",
    "__license__",
    "__copyright__",
]

__title__ = "seedbed"
__summary__ = "seedbed derives reproducible, independent pseudorandom streams for procedural generation."
__uri__ = "https://github.com/seedbed-dev/seedbed"

__version__ = "0.3.0"

__author__ = "The seedbed developers"
__email__ = "seedbed.dev@gmail.com"

__license__ = "BSD-3-Clause"
__copyright__ = f"Copyright 2024 {__author__}"
