#!/usr/bin/env python3
# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import warnings

import tagpeek

import test_conversion
import test_cursor
import test_frames
import test_tag
import test_commandline

suite = unittest.TestSuite()
suite.addTest(test_conversion.suite)
suite.addTest(test_cursor.suite)
suite.addTest(test_frames.suite)
suite.addTest(test_tag.suite)
suite.addTest(test_commandline.suite)

if __name__ == "__main__":
    warnings.simplefilter("always", tagpeek.Warning)
    unittest.main(defaultTest="suite")
