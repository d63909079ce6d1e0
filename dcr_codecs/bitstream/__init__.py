r"""
The :py:mod:`dcr_codecs.bitstream` module implements the low-level facilities
used to read and write decoder configuration records: a bit-granular cursor
over a file-like object and a framework for turning a single syntax
description into both a serialiser and a deserialiser.

The record formats themselves are defined in :py:mod:`dcr_codecs.records`
using these facilities.


Bitwise I/O
-----------

.. automodule:: dcr_codecs.bitstream.io


Serialiser/deserialiser framework
---------------------------------

.. automodule:: dcr_codecs.bitstream.serdes

"""

# Low-level bitwise file reading/writing
from dcr_codecs.bitstream.io import *

# Generic record serialisation/deserialisation framework
from dcr_codecs.bitstream.serdes import *
