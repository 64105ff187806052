"""Type-directed synthesis of binary decoding plans."""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
