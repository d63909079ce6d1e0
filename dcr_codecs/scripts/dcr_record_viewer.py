r"""
.. _dcr-record-viewer:

``dcr-record-viewer``
=====================

A command-line utility for displaying decoder configuration records in a human
readable form.

Basic usage
-----------

The file to read must contain the payload of an ``avcC``, ``hvcC`` or
``dvcC``/``dvvC``/``dvwC`` box (i.e. the box contents, without the box
header). The record type is given using ``--type``::

    $ dcr-record-viewer hvcC.bin --type hevc
    HEVCDecoderConfigurationRecord:
      configuration_version: 1
      general_profile_space: 0
      general_tier_flag: False
      general_profile_idc: main (1)
      ...

If the record is embedded in a larger file, ``--offset`` gives the byte offset
at which it begins.

Records whose ``configuration_version`` is not 1 are rejected unless
``--no-version-check`` is given.

Exit status
-----------

0
    The record was decoded and displayed.
1
    The file could not be read.
2
    The record could not be decoded (e.g. because it is truncated or has an
    unsupported version).

Using ``--verbose`` once shows a Python traceback when an error occurs. Using
it twice also logs every field as it is read.
"""

import os
import sys
import logging
import traceback

from argparse import ArgumentParser

from dcr_codecs import __version__

from dcr_codecs.exceptions import RecordError, Truncated

from dcr_codecs.bitstream import (
    BitstreamReader,
    MonitoredDeserialiser,
    to_bit_offset,
)

from dcr_codecs.records import (
    avc_decoder_configuration_record,
    hevc_decoder_configuration_record,
    dovi_decoder_configuration_record,
    avc_record_size,
    hevc_record_size,
    dovi_record_size,
)


RECORD_TYPES = {
    "avc": (avc_decoder_configuration_record, avc_record_size),
    "hevc": (hevc_decoder_configuration_record, hevc_record_size),
    "dovi": (dovi_decoder_configuration_record, dovi_record_size),
}
"""
Lookup from ``--type`` argument to (syntax function, size function) pair.
"""

VERSIONED_RECORD_TYPES = ("avc", "hevc")
"""Record types which carry a ``configuration_version`` field."""


class RecordViewer(object):
    def __init__(self, filename, record_type, offset=0, check_version=True, verbose=0):
        """
        Parameters
        ==========
        filename : str
            The file to read the record from.
        record_type : str
            One of the keys of :py:data:`RECORD_TYPES`.
        offset : int
            The byte offset of the record within the file.
        check_version : bool
            If True, refuse to decode records with an unsupported
            ``configuration_version``.
        verbose : int
            If greater than zero, print Python tracebacks for errors.
        """
        self._filename = filename
        self._record_type = record_type
        self._offset = offset
        self._check_version = check_version
        self._verbose = verbose

    def _print_error(self, message):
        """
        Print an error message to stderr.
        """
        # Avoid interleaving with stdout
        sys.stdout.flush()

        if self._verbose >= 1:
            if sys.exc_info()[0] is not None:
                traceback.print_exc()

        prog = os.path.basename(sys.argv[0])
        sys.stderr.write("{}: error: {}\n".format(prog, message))

    def _log_value(self, des, target, value):
        """
        Monitor function for :py:class:`~dcr_codecs.bitstream.MonitoredDeserialiser`.
        """
        logging.debug(
            "%s = %r (next bit offset %d)",
            des.describe_path(target),
            value,
            to_bit_offset(*des.io.tell()),
        )

    def run(self):
        """
        Decode and print the record. Returns the exit status.
        """
        syntax_function, size_function = RECORD_TYPES[self._record_type]
        args = ()
        if self._record_type in VERSIONED_RECORD_TYPES:
            args = (self._check_version,)

        try:
            with open(self._filename, "rb") as f:
                f.seek(self._offset)
                try:
                    with MonitoredDeserialiser(
                        self._log_value, BitstreamReader(f)
                    ) as des:
                        syntax_function(des, *args)
                except Truncated as e:
                    self._print_error("record is truncated ({})".format(e))
                    return 2
                except RecordError as e:
                    self._print_error(str(e))
                    return 2
        except (IOError, OSError) as e:
            self._print_error(str(e))
            return 1

        record = des.context
        logging.info("decoded a %d byte record", size_function(record))
        print(record)

        return 0


def parse_args(*args, **kwargs):
    """
    Parse a set of command line arguments. Returns a :py:mod:`argparse`
    ``args`` object with the following fields:

    * filename (str): The file containing the record.
    * type (str): The record type ('avc', 'hevc' or 'dovi').
    * offset (int): Byte offset of the record within the file.
    * no_version_check (bool): True if unsupported versions should be decoded
      anyway.
    * verbose (int): The verbosity level.
    """
    parser = ArgumentParser(
        description="""
        Display an AVC, HEVC or Dolby Vision decoder configuration record in a
        human-readable form.
    """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    parser.add_argument(
        "filename",
        help="""
            The file containing the record (the payload of an avcC, hvcC or
            dvcC box).
        """,
    )

    parser.add_argument(
        "--type",
        "-t",
        choices=sorted(RECORD_TYPES),
        required=True,
        help="""
            The type of record to decode.
        """,
    )

    parser.add_argument(
        "--offset",
        "-o",
        type=int,
        default=0,
        help="""
            The byte offset within the file at which the record starts.
            Defaults to 0.
        """,
    )

    parser.add_argument(
        "--no-version-check",
        action="store_true",
        default=False,
        help="""
            Decode AVC and HEVC records even if their configuration_version is
            not 1.
        """,
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="""
            Increase the verbosity of output. Used once: show Python
            tracebacks for errors. Used twice: also log every field as it is
            read.
        """,
    )

    args = parser.parse_args(*args, **kwargs)

    if args.offset < 0:
        parser.error("--offset must not be negative")

    return args


def main(*args, **kwargs):
    args = parse_args(*args, **kwargs)

    log_level = logging.WARNING
    if args.verbose >= 2:
        log_level = logging.DEBUG
    elif args.verbose >= 1:
        log_level = logging.INFO
    logging.basicConfig(level=log_level)

    viewer = RecordViewer(
        filename=args.filename,
        record_type=args.type,
        offset=args.offset,
        check_version=not args.no_version_check,
        verbose=args.verbose,
    )
    return viewer.run()


if __name__ == "__main__":
    sys.exit(main())
