"""
common.logging_setup

Set up standard logging for the build tooling.
"""
import logging

def setup_logging(level: int = logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    # py-solc-x is chatty about downloads at INFO
    logging.getLogger("solcx").setLevel(max(level, logging.WARNING))
