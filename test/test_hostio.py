#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from c8core.hostio import Loader, LoaderError


class TestLoader(unittest.TestCase):
    def setUp(self):
        self.loader = Loader()

    def test_loader_load_file_present(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            filename = os.path.join(temp_dir, "test.ch8")

            with open(filename, "wb") as f:
                f.write(b"\x00\xE0\x12\x00")

            self.assertEqual(b"\x00\xE0\x12\x00", self.loader.load_binary(filename))

    def test_loader_load_file_missing(self):
        self.assertRaises(LoaderError, self.loader.load_binary, "NoFile.ch8")

    def test_loader_error_chained(self):
        with self.assertRaises(LoaderError) as context:
            self.loader.load_binary("NoFile.ch8")

        self.assertIsInstance(context.exception.__cause__, FileNotFoundError)
