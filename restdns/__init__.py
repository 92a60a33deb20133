"""restdns module.
"""

import os


def __root_join(*path):
    """Joins path with location of the current file."""
    mydir = os.path.dirname(os.path.abspath(__file__))
    return os.path.abspath(os.path.join(mydir, *path))


# Directory holding the shipped configuration files.
RESTDNS_ETC = __root_join('etc')
