# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Byte-level access to the source a tag is decoded from."""

import io

from contextlib import contextmanager

from tagpeek.errors import *
from tagpeek.conversion import Syncsafe, Int8

@contextmanager
def opened(filename, mode="rb"):
    "Open filename, or do nothing if filename is already an open file object"
    if isinstance(filename, str) or hasattr(filename, "__fspath__"):
        with open(filename, mode) as file:
            yield file
    else:
        yield filename

class Cursor:
    """Big-endian reader over a seekable binary file.

    Positions are absolute offsets in the underlying file. The cursor
    never opens or closes the file; that is left to whoever created it.
    """
    def __init__(self, file):
        self.file = file

    @classmethod
    def from_bytes(cls, data):
        return cls(io.BytesIO(data))

    def tell(self):
        return self.file.tell()

    def remaining(self):
        "Return the number of bytes between the current position and the end."
        pos = self.file.tell()
        end = self.file.seek(0, io.SEEK_END)
        self.file.seek(pos)
        return max(end - pos, 0)

    def seek(self, offset, whence=io.SEEK_SET):
        """Move to offset relative to whence and return the new position.

        Targets before the start of the file raise SeekOutOfRangeError
        and leave the position unchanged.
        """
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self.file.tell() + offset
        elif whence == io.SEEK_END:
            pos = self.file.tell()
            target = self.file.seek(0, io.SEEK_END) + offset
            self.file.seek(pos)
        else:
            raise ValueError("Invalid whence: {0!r}".format(whence))
        if target < 0:
            raise SeekOutOfRangeError(
                "Cannot seek to offset {0}, before start of input".format(target))
        return self.file.seek(target)

    def skip(self, length):
        return self.seek(length, io.SEEK_CUR)

    def read_bytes(self, length):
        "Read exactly length bytes; raise TruncatedInputError if input ends sooner."
        data = self.file.read(length)
        if len(data) != length:
            raise TruncatedInputError(
                "Needed {0} bytes at offset {1}, only {2} available"
                .format(length, self.file.tell() - len(data), len(data)))
        return bytes(data)

    def peek(self, length):
        "Return the next length bytes without consuming them."
        pos = self.file.tell()
        try:
            return self.read_bytes(length)
        finally:
            self.file.seek(pos)

    def read_int(self, width):
        return Int8.decode(self.read_bytes(width))

    def read_u8(self):
        return self.read_int(1)

    def read_u16(self):
        return self.read_int(2)

    def read_u32(self):
        return self.read_int(4)

    def read_syncsafe_u32(self):
        return Syncsafe.decode(self.read_bytes(4))

    def __repr__(self):
        return "<Cursor at offset {0} of {1!r}>".format(self.tell(), self.file)
