# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for ID3v2 frames."""

import abc
import collections

from tagpeek.errors import *
from tagpeek.specs import *

class FrameHeader(collections.namedtuple(
        "FrameHeader", "frameid size flags header_size group data_length")):
    """Decoded frame header.

    size is the declared body size, header_size the number of bytes
    in front of the body (10, plus 1 for a group id, plus 4 for a data
    length indicator). flags is a frozenset of version-independent flag
    names; group and data_length are None unless flagged.
    """
    __slots__ = ()

    def __new__(cls, frameid, size, flags=frozenset(), header_size=10,
                group=None, data_length=None):
        return super().__new__(cls, frameid, size, frozenset(flags),
                               header_size, group, data_length)

class Frame(metaclass=abc.ABCMeta):
    _framespec = tuple()

    def __init__(self, header, **kwargs):
        super().__setattr__("header", header)
        for spec in self._framespec:
            super().__setattr__(spec.name, kwargs.get(spec.name, None))

    def __setattr__(self, name, value):
        raise AttributeError("{0} frames are read-only".format(type(self).__name__))

    @property
    def frameid(self):
        return self.header.frameid

    @property
    def flags(self):
        return self.header.flags

    def __eq__(self, other):
        return (type(self) is type(other)
                and self.header == other.header
                and all(getattr(self, spec.name) == getattr(other, spec.name)
                        for spec in self._framespec))

    __hash__ = None

    @classmethod
    def _from_data(cls, header, data):
        frame = cls(header)
        for spec in frame._framespec:
            val, data = spec.read(frame, data)
            object.__setattr__(frame, spec.name, val)
        return frame

    def __repr__(self):
        args = ["frameid={0!r}".format(self.frameid)]
        if self.flags:
            args.append("flags={0!r}".format(set(self.flags)))
        for spec in self._framespec:
            if isinstance(spec, BinaryDataSpec):
                data = getattr(self, spec.name)
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(data),
                        data[:20], "..." if len(data) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, getattr(self, spec.name)))
        return "{0}({1})".format(type(self).__name__, ", ".join(args))

    def _str_fields(self):
        return " ".join(spec.to_str(getattr(self, spec.name, None))
                        for spec in self._framespec)

    def __str__(self):
        flag = "?" if isinstance(self, OpaqueFrame) else " "
        return "{0}{1}({2})".format(flag, self.frameid, self._str_fields())

class TextFrame(Frame):
    _framespec = (EncodingSpec("encoding"), EncodedStringSpec("text"))

class OpaqueFrame(Frame):
    "A frame whose body is kept as raw bytes."
    _framespec = (BinaryDataSpec("data"),)

def is_text_frame_id(frameid):
    # TXXX starts with a description string, not a plain value.
    return frameid.startswith("T") and frameid != "TXXX"

def decode_frame(header, data):
    "Build a TextFrame or an OpaqueFrame from a frame header and its body."
    if is_text_frame_id(header.frameid):
        return TextFrame._from_data(header, data)
    else:
        return OpaqueFrame._from_data(header, data)
