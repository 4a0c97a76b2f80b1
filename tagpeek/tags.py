# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import io
import re
import abc
import collections

from abc import abstractmethod
from warnings import warn

from tagpeek.errors import *
from tagpeek.conversion import Syncsafe, Int8
from tagpeek.cursor import Cursor, opened

import tagpeek.frames as Frames

_TAG_UNSYNCHRONISED = 0x80
_TAG_EXTENDED_HEADER = 0x40
_TAG_EXPERIMENTAL = 0x20

_EXT23_CRC_PRESENT = 0x8000

_EXT24_UPDATE = 0x40
_EXT24_CRC_PRESENT = 0x20
_EXT24_RESTRICTIONS = 0x10

# Allow a single space at end of four-character ids
# Some programs (e.g. iTunes 8.2) generate such frames when converting
# from 2.2 to 2.3/2.4 tags.
_FRAME_ID_PATTERN = re.compile(b"^[A-Z][A-Z0-9]{2}[A-Z0-9 ]$")

def read_tag(filename):
    "Read the ID3v2 tag at the start of filename (a path or a binary file)."
    return Tag.read(filename)

def decode_tag(data):
    "Decode an ID3v2 tag from a bytes-like object."
    return Tag.decode(data)

class TagHeader(collections.namedtuple("TagHeader", "version flags size offset")):
    """The 10-byte header in front of every ID3v2 tag.

    version is the (major, minor) pair, flags a frozenset of flag
    names, size the syncsafe tag size excluding the header itself, and
    offset the position of the "ID3" marker in the source.
    """
    __slots__ = ()

    @property
    def frames_end(self):
        "Offset just past the last byte covered by the declared tag size."
        return self.offset + 10 + self.size

class ExtendedHeader(collections.namedtuple(
        "ExtendedHeader", "size flags crc32 padding_size restrictions")):
    __slots__ = ()

    def __new__(cls, size, flags=frozenset(), crc32=None,
                padding_size=None, restrictions=None):
        return super().__new__(cls, size, frozenset(flags), crc32,
                               padding_size, restrictions)

def decode_header(cursor):
    """Decode the tag header at the current position of cursor.

    Raises NoTagError if the data does not start with an ID3 marker.
    """
    offset = cursor.tell()
    if cursor.read_bytes(3) != b"ID3":
        raise NoTagError("ID3v2 tag not found at offset {0}".format(offset))
    version = (cursor.read_u8(), cursor.read_u8())
    bflags = cursor.read_u8()
    flags = set()
    if bflags & _TAG_UNSYNCHRONISED:
        flags.add("unsynchronisation")
    if bflags & _TAG_EXTENDED_HEADER:
        flags.add("extended_header")
    if bflags & _TAG_EXPERIMENTAL:
        flags.add("experimental")
    size = cursor.read_syncsafe_u32()
    return TagHeader(version, frozenset(flags), size, offset)


class Layout(metaclass=abc.ABCMeta):
    """Version-dependent parts of the frame format.

    A layout is picked once per tag, from the major version in the tag
    header (see layout_for); the frame size encoding, the meaning of
    the frame flag bits and the structure of the extended header all
    go through it.
    """
    version = None

    # (mask, flag name) pairs for the 16-bit frame flags word
    _frame_flags = ()
    _frame_flags_unknown_mask = 0

    def __init__(self, header):
        self.header = header

    @abstractmethod
    def _read_frame_size(self, cursor): pass

    @abstractmethod
    def _extended_body_size(self, size): pass

    @abstractmethod
    def _parse_extended_header(self, size, body): pass

    def decode_extended_header(self, cursor):
        """Consume the extended header following the tag header.

        Returns an ExtendedHeader; the cursor is left on the first byte
        after the extended header.
        """
        size = cursor.read_syncsafe_u32()
        body = cursor.read_bytes(self._extended_body_size(size))
        return self._parse_extended_header(size, body)

    def decode_frame_flags(self, frameid, bflags):
        "Translate a frame flags word into a frozenset of flag names."
        if bflags & self._frame_flags_unknown_mask:
            warn("Unexpected ID3v2.{0} flags on {1} frame: 0x{2:04X}"
                 .format(self.version, frameid, bflags), FrameWarning)
        return frozenset(name for (mask, name) in self._frame_flags
                         if bflags & mask)

    def decode_frame_header(self, cursor):
        """Decode the frame header at the current position of cursor.

        Returns None if the padding after the last frame has been
        reached; the cursor then stays on the first padding byte.
        """
        if cursor.peek(1)[0] == 0:
            return None
        rawid = cursor.read_bytes(4)
        if not _FRAME_ID_PATTERN.match(rawid):
            warn("Invalid frame id {0!r}".format(rawid), FrameWarning)
        frameid = rawid.decode("iso-8859-1")
        size = self._read_frame_size(cursor)
        flags = self.decode_frame_flags(frameid, cursor.read_u16())
        if "compressed" in flags:
            raise UnsupportedFeatureError(
                "Can't read compressed {0} frame".format(frameid))
        if "encrypted" in flags:
            raise UnsupportedFeatureError(
                "Can't read encrypted {0} frame".format(frameid))
        header_size = 10
        group = None
        data_length = None
        if "group" in flags:
            group = cursor.read_u8()
            header_size += 1
        if "data_length_indicator" in flags:
            data_length = cursor.read_syncsafe_u32()
            header_size += 4
        if "unsynchronised" in flags:
            warn("Unsynchronised {0} frame is read as stored".format(frameid),
                 FrameWarning)
        return Frames.FrameHeader(frameid, size, flags, header_size,
                                  group, data_length)

    def decode_frames(self, cursor):
        "Generate frames until the padding or the end of the tag is reached."
        end = self.header.frames_end
        while cursor.tell() < end:
            header = self.decode_frame_header(cursor)
            if header is None:
                break
            data = cursor.read_bytes(header.size)
            if cursor.tell() > end:
                warn("{0} frame extends {1} bytes past the end of the tag"
                     .format(header.frameid, cursor.tell() - end), TagWarning)
            yield Frames.decode_frame(header, data)

class Layout23(Layout):
    version = 3

    _frame_flags = (
        (0x8000, "discard_on_tag_alter"),
        (0x4000, "discard_on_file_alter"),
        (0x2000, "read_only"),
        (0x0080, "compressed"),
        (0x0040, "encrypted"),
        (0x0020, "group"),
        )
    _frame_flags_unknown_mask = 0x1F1F

    def _read_frame_size(self, cursor):
        return cursor.read_u32()

    def _extended_body_size(self, size):
        # The size field doesn't count itself in v2.3.
        return size

    def _parse_extended_header(self, size, body):
        if size != 6 and size != 10:
            warn("Unexpected size of ID3v2.3 extended header: {0}".format(size),
                 TagWarning)
        flags = set()
        crc32 = None
        padding_size = None
        if len(body) < 6:
            return ExtendedHeader(size)
        ext_flags = Int8.decode(body[0:2])
        padding_size = Int8.decode(body[2:6])
        if ext_flags & _EXT23_CRC_PRESENT:
            flags.add("ext:crc_present")
            if len(body) >= 10:
                crc32 = Int8.decode(body[6:10])
            else:
                warn("Missing CRC in ID3v2.3 extended header", TagWarning)
        return ExtendedHeader(size, flags, crc32=crc32, padding_size=padding_size)

class Layout24(Layout):
    # Older versions of iTunes stored v2.4 frame sizes as straight
    # 8-bit integers, not syncsafe. (Fixed in iTunes 8.2.)
    ITUNES_WORKAROUND = False

    version = 4

    _frame_flags = (
        (0x4000, "discard_on_tag_alter"),
        (0x2000, "discard_on_file_alter"),
        (0x1000, "read_only"),
        (0x0040, "group"),
        (0x0008, "compressed"),
        (0x0004, "encrypted"),
        (0x0002, "unsynchronised"),
        (0x0001, "data_length_indicator"),
        )
    _frame_flags_unknown_mask = 0x8FB0

    def _read_frame_size(self, cursor):
        if type(self).ITUNES_WORKAROUND:
            return cursor.read_u32()
        return cursor.read_syncsafe_u32()

    def _extended_body_size(self, size):
        return max(size - 4, 0)

    def _split_flag_data(self, data):
        # 1-byte length + data
        if len(data) < 1 or data[0] & 128 or len(data) < 1 + data[0]:
            raise TagError("Invalid size of extended header field")
        length = data[0]
        return data[1:1 + length], data[1 + length:]

    def _parse_extended_header(self, size, body):
        if size < 6:
            warn("Unexpected size of ID3v2.4 extended header: {0}".format(size),
                 TagWarning)
        if len(body) < 2:
            return ExtendedHeader(size)
        numflags = body[0]
        if numflags != 1:
            warn("Unexpected number of ID3v2.4 extended flag bytes: {0}"
                 .format(numflags), TagWarning)
        ext_flags = body[1]
        data = body[1 + numflags:]
        flags = set()
        crc32 = None
        restrictions = None
        try:
            if ext_flags & _EXT24_UPDATE:
                flags.add("ext:update")
                (dummy, data) = self._split_flag_data(data)
            if ext_flags & _EXT24_CRC_PRESENT:
                flags.add("ext:crc_present")
                (crc, data) = self._split_flag_data(data)
                crc32 = Syncsafe.decode(crc)
            if ext_flags & _EXT24_RESTRICTIONS:
                flags.add("ext:restrictions")
                (value, data) = self._split_flag_data(data)
                restrictions = value[0] if value else None
        except TagError as e:
            warn("Error while reading ID3v2.4 extended header: {0}".format(e),
                 TagWarning)
        return ExtendedHeader(size, flags, crc32=crc32, restrictions=restrictions)

_layouts = {
    3: Layout23,
    4: Layout24,
    }

def layout_for(header):
    "Return the frame layout matching the version in header."
    major = header.version[0]
    if major not in _layouts:
        warn("Unsupported ID3v2.{0} tag, reading frames as ID3v2.3".format(major),
             TagWarning)
    return _layouts.get(major, Layout23)(header)


def _friendly_text_frame(*frameids):
    def getter(self):
        return self._text(*frameids)
    getter.__doc__ = "Text of the first {0} frame, or an empty string.".format(
        " or ".join(frameids))
    return property(getter)

class Tag:
    """A decoded ID3v2 tag.

    Frames are kept in the order they appear in the source, duplicates
    included. A Tag is not modified after it has been decoded.
    """
    def __init__(self, header, frames=(), extended_header=None):
        self._header = header
        self._extended_header = extended_header
        self._frames = tuple(frames)

    @property
    def header(self):
        return self._header

    @property
    def extended_header(self):
        return self._extended_header

    @property
    def version(self):
        return self._header.version[0]

    @property
    def flags(self):
        return self._header.flags

    @property
    def size(self):
        return self._header.size

    def frames(self):
        return list(self._frames)

    def __iter__(self):
        return iter(self._frames)

    def __len__(self):
        return len(self._frames)

    def __contains__(self, frameid):
        return self.find_frame(frameid) is not None

    def find_frame(self, frameid):
        "Return the first frame with the given id, or None."
        for frame in self._frames:
            if frame.frameid == frameid:
                return frame
        return None

    def find_frames(self, frameid):
        "Return a list of all frames with the given id, in tag order."
        return [frame for frame in self._frames if frame.frameid == frameid]

    def _text(self, *frameids):
        for frameid in frameids:
            frame = self.find_frame(frameid)
            if isinstance(frame, Frames.TextFrame) and frame.text:
                return frame.text
        return ""

    title = _friendly_text_frame("TIT2")
    artist = _friendly_text_frame("TPE1")
    album_artist = _friendly_text_frame("TPE2")
    album = _friendly_text_frame("TALB")
    composer = _friendly_text_frame("TCOM")
    genre = _friendly_text_frame("TCON")
    grouping = _friendly_text_frame("TIT1")
    track = _friendly_text_frame("TRCK")
    date = _friendly_text_frame("TDRC", "TYER")

    def __repr__(self):
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(sorted(self.flags)))
             if len(self.flags) > 0 else ""),
            len(self._frames))

    def __str__(self):
        return "ID3v2.{0}.{1}(flags={{{2}}} size={3})".format(
            self._header.version[0],
            self._header.version[1],
            " ".join(sorted(self.flags)),
            self.size)

    @classmethod
    def read(cls, filename):
        """Read a tag from a file name or a binary file object.

        The tag must start at the current position of the file; open
        files are left open.
        """
        if isinstance(filename, (bytes, bytearray, memoryview)):
            raise TypeError("Tag.read expects a file name or a binary file; "
                            "use decode_tag for raw tag data")
        with opened(filename, "rb") as file:
            cursor = Cursor(file)
            header = decode_header(cursor)
            layout = layout_for(header)
            extended_header = None
            if "extended_header" in header.flags:
                extended_header = layout.decode_extended_header(cursor)
            if "unsynchronisation" in header.flags:
                warn("Unsynchronisation is not supported; frames are read as stored",
                     TagWarning)
            return cls(header, layout.decode_frames(cursor), extended_header)

    @classmethod
    def decode(cls, data):
        return cls.read(io.BytesIO(data))
