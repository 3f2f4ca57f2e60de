import logging

# Library logger; applications decide where records go.
logger = logging.getLogger("ghpager")
logger.addHandler(logging.NullHandler())
