"""Root pytest configuration for all tests."""

import logging

# Keep urllib3 connection chatter out of captured test logs.
logging.getLogger("urllib3").setLevel(logging.WARNING)
