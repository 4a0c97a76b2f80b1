# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Print the title and album stored in the ID3v2 tag of a file."""

import argparse
import sys
import warnings

from contextlib import contextmanager

import tagpeek

@contextmanager
def print_warnings(filename, quiet=False):
    with warnings.catch_warnings(record=True) as ws:
        warnings.simplefilter("always", tagpeek.Warning)
        try:
            yield None
        finally:
            if not quiet:
                for w in ws:
                    print(filename + ":warning: " + str(w.message),
                          file=sys.stderr)
            sys.stderr.flush()

def make_parser():
    parser = argparse.ArgumentParser(
        prog="tagpeek",
        description="Show the ID3v2 tag at the start of an audio file.")
    parser.add_argument("file", nargs="?", help="audio file to inspect")
    parser.add_argument("-q", "--quiet", action="store_true",
                        help="don't print decoding warnings")
    parser.add_argument("-a", "--all", action="store_true",
                        help="list every frame in the tag")
    parser.add_argument("--version", action="version",
                        version="%(prog)s " + tagpeek.versionstr)
    return parser

def main(argv=None):
    parser = make_parser()
    options = parser.parse_args(argv)
    if options.file is None:
        parser.print_usage(sys.stderr)
        return 1

    with print_warnings(options.file, options.quiet):
        try:
            tag = tagpeek.read_tag(options.file)
        except (tagpeek.Error, OSError) as e:
            print("{0}: error: {1}".format(options.file, e), file=sys.stderr)
            return 1

    print(tag)
    if options.all:
        for frame in tag:
            print("    " + str(frame))
    print("Title: " + tag.title)
    print("Album: " + tag.album)
    return 0

if __name__ == "__main__":
    sys.exit(main())
