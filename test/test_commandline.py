# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import io
import os
import tempfile

from contextlib import redirect_stdout, redirect_stderr

from tagpeek.conversion import Syncsafe, Int8
from tagpeek.commandline import main

def text_frame_data(frameid, body):
    return frameid.encode("ascii") + Int8.encode(len(body), width=4) + b"\x00\x00" + body

def tag_data(*frames):
    body = b"".join(frames) + b"\x00" * 20
    return b"ID3\x03\x00\x00" + Syncsafe.encode(len(body)) + body

class CommandLineTestCase(unittest.TestCase):
    def setUp(self):
        self.files = []

    def tearDown(self):
        for filename in self.files:
            os.unlink(filename)

    def make_file(self, data):
        file = tempfile.NamedTemporaryFile(prefix="tagpeektest-", suffix=".mp3", delete=False)
        file.write(data)
        file.close()
        self.files.append(file.name)
        return file.name

    def run_main(self, *args):
        out = io.StringIO()
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(list(args))
        return status, out.getvalue(), err.getvalue()

    def testUsage(self):
        status, out, err = self.run_main()
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith("usage:"))

    def testTitleAndAlbum(self):
        filename = self.make_file(tag_data(text_frame_data("TIT2", b"\x00Hello\x00"),
                                           text_frame_data("TALB", b"\x03Abbey Road\x00")))
        status, out, err = self.run_main(filename)
        self.assertEqual(status, 0)
        self.assertEqual(out.splitlines(),
                         ["ID3v2.3.0(flags={} size=59)",
                          "Title: Hello",
                          "Album: Abbey Road"])
        self.assertEqual(err, "")

    def testMissingFrame(self):
        filename = self.make_file(tag_data(text_frame_data("TIT2", b"\x00Hello\x00")))
        status, out, err = self.run_main(filename)
        self.assertEqual(status, 0)
        self.assertTrue("Title: Hello" in out.splitlines())
        self.assertTrue("Album: " in out.splitlines())

    def testAllFrames(self):
        filename = self.make_file(tag_data(text_frame_data("TIT2", b"\x00Hello\x00"),
                                           text_frame_data("PRIV", b"abc")))
        status, out, err = self.run_main("-a", filename)
        self.assertEqual(status, 0)
        self.assertTrue("     TIT2(iso-8859-1 'Hello')" in out.splitlines())
        self.assertTrue("    ?PRIV(data=b'abc')" in out.splitlines())

    def testWarnings(self):
        filename = self.make_file(tag_data(text_frame_data("TIT2", b"\x01\xff\xfeH\x00\x00\x00")))
        status, out, err = self.run_main(filename)
        self.assertEqual(status, 0)
        self.assertTrue(err.startswith(filename + ":warning: "))
        status, out, err = self.run_main("--quiet", filename)
        self.assertEqual(status, 0)
        self.assertEqual(err, "")

    def testErrors(self):
        filename = self.make_file(b"no tag here")
        status, out, err = self.run_main(filename)
        self.assertEqual(status, 1)
        self.assertEqual(out, "")
        self.assertTrue(err.startswith(filename + ": error: "))

        status, out, err = self.run_main(filename + ".missing")
        self.assertEqual(status, 1)
        self.assertTrue(": error: " in err)

suite = unittest.TestLoader().loadTestsFromTestCase(CommandLineTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
