#!/usr/bin/env python3

from setuptools import setup

setup(
    name="tagpeek",
    version="0.1.0",
    packages=["tagpeek"],
    entry_points = {
        'console_scripts': ['tagpeek = tagpeek.commandline:main']
    },
    test_suite = "test.alltests.suite",
    python_requires=">=3.6",
    license="BSD",
    description="Read-only ID3v2.3/ID3v2.4 tag decoder in pure Python 3",
    long_description="""
tagpeek decodes the ID3v2 tag at the start of an audio file: the tag
header, the optional extended header and the sequence of frames, with
text frames decoded and every other frame kept as raw bytes. It never
modifies files. Compressed and encrypted frames, unsynchronisation and
UTF-16 text are not supported.
""",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
