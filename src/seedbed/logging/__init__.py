"""
=======
Logging
=======

"""

from seedbed.logging.utilities import (
    configure_logging,
    configure_logging_to_file,
    configure_logging_to_terminal,
    get_logger,
)
