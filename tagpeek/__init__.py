# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import tagpeek.frames
import tagpeek.tags

from tagpeek.errors import *
from tagpeek.cursor import Cursor
from tagpeek.frames import Frame, FrameHeader, TextFrame, OpaqueFrame
from tagpeek.tags import read_tag, decode_tag, Tag, TagHeader, ExtendedHeader

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
