# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc

from abc import abstractmethod
from warnings import warn

from tagpeek.errors import *

# A frame's fields are described by a tuple of specs. Each spec reads
# its own field from the front of the frame body and hands the rest
# of the body to the next one.

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    @abstractmethod
    def read(self, frame, data):
        "Return (value, rest of data)."

    @abstractmethod
    def to_str(self, value):
        "Render value for str(frame)."

class EncodingSpec(Spec):
    "EncodingSpec must be the first spec."
    def read(self, frame, data):
        if len(data) < 1:
            warn("Empty {0} frame".format(frame.frameid), EmptyFrameWarning)
            return None, bytes()
        return data[0], data[1:]

    def to_str(self, value):
        return EncodedStringSpec.encoding_name(value)

class EncodedStringSpec(Spec):
    # UTF-16 strings are recognized but not decoded.
    _encodings = (('iso-8859-1', b"\x00"),
                  ('utf-16', None),
                  ('utf-16-be', None),
                  ('utf-8', b"\x00"))

    @classmethod
    def encoding_name(cls, encoding):
        if encoding is None:
            return "<undef>"
        if 0 <= encoding < len(cls._encodings):
            return cls._encodings[encoding][0]
        return "<0x{0:02X}>".format(encoding)

    def read(self, frame, data):
        if frame.encoding is None:
            return "", bytes()
        if not 0 <= frame.encoding < len(self._encodings):
            warn("Invalid text encoding 0x{0:02X} in {1} frame"
                 .format(frame.encoding, frame.frameid), FrameWarning)
            return "", bytes()
        enc, term = self._encodings[frame.encoding]
        if term is None:
            warn("{0} text in {1} frame is not decoded"
                 .format(enc.upper(), frame.frameid), FrameWarning)
            return "", bytes()
        # Some taggers leave the string unterminated; take all of it then.
        rawstr, sep, data = data.partition(term)
        return rawstr.decode(enc, errors="replace"), data

    def to_str(self, value):
        return repr(value)

class BinaryDataSpec(Spec):
    def read(self, frame, data):
        return bytes(data), bytes()

    def to_str(self, value):
        return '{0}={1}{2}'.format(self.name, value[0:16], "..." if len(value) > 16 else "")
