"""
The :py:mod:`dcr_codecs` package reads and writes the decoder configuration
records which ISO base media (MP4) files carry in their sample entries:

* ``AVCDecoderConfigurationRecord`` (``avcC`` boxes)
* ``HEVCDecoderConfigurationRecord`` (``hvcC`` boxes)
* The Dolby Vision configuration record (``dvcC``, ``dvvC`` and ``dvwC``
  boxes)

These records are bit-packed structures with irregular field widths, reserved
bit regions, sections whose presence depends on earlier fields and nested
length-prefixed arrays of NAL units. Each record layout is described exactly
once, as a syntax function (see :py:mod:`dcr_codecs.bitstream.serdes`), and
this single description drives both decoding and encoding.


Main components
---------------

:py:mod:`dcr_codecs.records`
    The record codecs: ``decode_*_record``, ``encode_*_record`` and
    ``*_record_size`` for each record kind, plus
    :py:func:`~dcr_codecs.records.autofill.build_hevc_record` which builds an
    HEVC record from a stream's parameter sets.

:py:mod:`dcr_codecs.bitstream`
    Bitwise I/O and the serialiser/deserialiser framework used to implement
    the records.

:py:mod:`dcr_codecs.parameter_sets`
    A minimal HEVC sequence parameter set parser.

:py:mod:`dcr_codecs.exceptions`
    The errors raised by the above.

:ref:`dcr-record-viewer`
    A command line utility which displays records in a human readable form.


Error handling
--------------

Errors are always raised as exceptions (see :py:mod:`dcr_codecs.exceptions`)
and never logged. Decoding either produces a complete record or fails: no
partial record is returned.
"""

from dcr_codecs.version import __version__
