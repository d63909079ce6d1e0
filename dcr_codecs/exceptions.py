"""
The :py:mod:`dcr_codecs.exceptions` module defines the exceptions raised when
decoding, encoding or building decoder configuration records.

All record-level failures derive from :py:exc:`RecordError`. Errors are raised
to the immediate caller; no partial record is ever returned and nothing is
retried.

.. autoexception:: RecordError

.. autoexception:: Truncated

.. autoexception:: FieldOverflow

.. autoexception:: UnsupportedVersion

.. autoexception:: MalformedParameterSet

.. autoexception:: MissingParameterSet

The following exceptions are raised by the
:py:mod:`~dcr_codecs.bitstream.serdes` framework when a record value does not
have the shape its syntax function expects (e.g. a required field is missing
or an unexpected one is present).

.. autoexception:: UnusedTargetError

.. autoexception:: ReusedTargetError

.. autoexception:: ListTargetExhaustedError

.. autoexception:: ListTargetContainsNonListError

.. autoexception:: UnclosedNestedContextError
"""

__all__ = [
    "RecordError",
    "Truncated",
    "FieldOverflow",
    "UnsupportedVersion",
    "MalformedParameterSet",
    "MissingParameterSet",
    "UnusedTargetError",
    "ReusedTargetError",
    "ListTargetExhaustedError",
    "ListTargetContainsNonListError",
    "UnclosedNestedContextError",
]


class RecordError(Exception):
    """
    Base class for all decoder configuration record errors.
    """


class Truncated(RecordError, EOFError):
    """
    Thrown when the byte source ends before the number of bytes promised by
    the record (e.g. by a length field) have been read.
    """


class FieldOverflow(RecordError, ValueError):
    """
    Thrown whenever a value to be encoded does not fit in the bit width of its
    field (e.g. a NAL unit longer than 65535 bytes).
    """


class UnsupportedVersion(RecordError):
    """
    Thrown when a record's ``configuration_version`` is not one this library
    can decode.

    Attributes
    ==========
    configuration_version : int
        The version number read from the record.
    """

    def __init__(self, configuration_version):
        super(UnsupportedVersion, self).__init__(configuration_version)
        self.configuration_version = configuration_version

    def __str__(self):
        return "configuration_version {} is not supported".format(
            self.configuration_version
        )


class MalformedParameterSet(RecordError, ValueError):
    """
    Thrown by the parameter set parser when a NAL unit cannot be parsed.
    """


class MissingParameterSet(RecordError, ValueError):
    """
    Thrown when a record is built without a required parameter set (i.e. no
    SPS NAL units were supplied).
    """


class UnusedTargetError(ValueError):
    """
    Thrown by functions in :py:mod:`dcr_codecs.bitstream` when a value in a
    context dictionary was left unused.
    """


class ReusedTargetError(ValueError):
    """
    Thrown by functions in :py:mod:`dcr_codecs.bitstream` when a target in a
    context dictionary is used more than once.
    """


class ListTargetExhaustedError(IndexError):
    """
    Thrown by functions in :py:mod:`dcr_codecs.bitstream` when a value beyond
    the end of a list target in a context dictionary is requested.
    """


class ListTargetContainsNonListError(ValueError):
    """
    Thrown by functions in :py:mod:`dcr_codecs.bitstream` when a target in a
    context dictionary has been declared to be a list but does not contain a
    value of the :py:class:`list` type.
    """


class UnclosedNestedContextError(ValueError):
    """
    Thrown by functions in :py:mod:`dcr_codecs.bitstream` when some
    :py:meth:`SerDes.subcontext_enter` does not have corresponding
    :py:meth:`SerDes.subcontext_leave`.
    """
