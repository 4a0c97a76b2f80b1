# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Integer fields of the ID3v2 format."""

class Syncsafe:
    """Conversion to/from syncsafe integers.

    Syncsafe integers are big-endian sequences of 7-bit bytes; the top
    bit of every byte is zero so that the value can never look like an
    MPEG sync pattern.
    """
    @staticmethod
    def decode(data):
        "Decodes a syncsafe integer. The top bit of each byte is masked off."
        value = 0
        for b in data:
            value = (value << 7) | (b & 0x7F)
        return value

    @staticmethod
    def encode(i, *, width=4):
        """Encodes a nonnegative integer into syncsafe format.

        The result is exactly width bytes long; ValueError is raised
        when the value does not fit.
        """
        if i < 0:
            raise ValueError("value is negative")
        if i >> (7 * width):
            raise ValueError("Integer too large for {0} syncsafe bytes".format(width))
        return bytes((i >> (7 * shift)) & 0x7F
                     for shift in reversed(range(width)))

class Int8:
    """Conversion to/from big-endian binary integers of any width."""

    @staticmethod
    def decode(data):
        "Decodes an 8-bit big-endian integer of any length"
        return int.from_bytes(data, "big")

    @staticmethod
    def encode(i, *, width):
        "Encodes a nonnegative integer into big-endian bytes of the given width"
        if i < 0:
            raise ValueError("Nonnegative integer expected")
        try:
            return i.to_bytes(width, "big")
        except OverflowError:
            raise ValueError("Integer too large for {0} bytes".format(width))
