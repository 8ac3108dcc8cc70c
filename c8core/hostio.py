#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host for later writing into RAM.  The
system font is built in, so it is never loaded from here.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class LoaderError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        try:
            with open(filename, "rb") as f:
                return f.read()
        except OSError as error:
            raise LoaderError("Unable to read '{}': {}".format(filename, error.strerror or error)) from error
