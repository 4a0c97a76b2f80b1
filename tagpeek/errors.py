# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

class Error(Exception): pass

class Warning(Error, UserWarning): pass

class FrameWarning(Warning): pass
class EmptyFrameWarning(FrameWarning): pass

class TagWarning(Warning): pass

class TagError(Error, ValueError): pass
class NoTagError(TagError): pass
class FrameError(Error): pass
class UnsupportedFeatureError(FrameError): pass

class TruncatedInputError(Error, EOFError): pass
class SeekOutOfRangeError(Error, ValueError): pass
