"""
Helpers shared by the record syntax modules: the length-prefixed NAL unit list
syntax used by both the AVC and HEVC records and the glue which runs a syntax
function against a byte string or file.
"""

from copy import deepcopy

from io import BytesIO

from dcr_codecs.bitstream import (
    BitstreamReader,
    BitstreamWriter,
    Serialiser,
    Deserialiser,
)

from dcr_codecs.records.constants import NAL_UNIT_LENGTH_BYTES

from dcr_codecs.records.fixeddicts import dcr_default_values

__all__ = [
    "nal_unit_list",
    "deserialise",
    "serialise",
    "nal_unit_list_size",
]


def nal_unit_list(serdes, target, num_count_bits):
    """
    A count followed by that many NAL units, each preceded by a 16-bit length.
    The NAL units are stored as a list of :py:class:`bytes` in ``target``.
    """
    serdes.declare_list(target)
    for _ in range(serdes.list_length(target, num_count_bits)):
        serdes.length_prefixed_bytes(target, NAL_UNIT_LENGTH_BYTES * 8)


def nal_unit_list_size(nal_units):
    """
    Return the number of bytes occupied by the NAL units (and their length
    prefixes) in a list read or written by :py:func:`nal_unit_list`. The count
    field is not included.
    """
    return sum(NAL_UNIT_LENGTH_BYTES + len(nal_unit) for nal_unit in nal_units)


def deserialise(syntax_function, data_or_file, *args):
    """
    Deserialise a record using the provided syntax function.

    Parameters
    ==========
    syntax_function : function(serdes, *args)
    data_or_file : :py:class:`bytes`, :py:class:`bytearray` or file-like
        The record payload. A file is read from its current position. Any
        bytes following the record are ignored.
    *args
        Additional arguments for the syntax function.

    Returns
    =======
    record : fixeddict
    """
    if isinstance(data_or_file, (bytes, bytearray, memoryview)):
        data_or_file = BytesIO(data_or_file)

    reader = BitstreamReader(data_or_file)
    with Deserialiser(reader) as des:
        syntax_function(des, *args)

    return des.context


def serialise(syntax_function, record, file=None, default_values=dcr_default_values):
    """
    Serialise a record using the provided syntax function.

    The record passed in is not modified.

    Parameters
    ==========
    syntax_function : function(serdes)
    record : dict or fixeddict
    file : file-like or None
        If given, the encoded record is also written to this file.
    default_values : {fixeddict_type: {target: value, ...}, ...}
        Values to use for any fields missing from the record.

    Returns
    =======
    data : :py:class:`bytes`
    """
    f = BytesIO()
    writer = BitstreamWriter(f)
    with Serialiser(writer, deepcopy(record), default_values) as ser:
        syntax_function(ser)
    writer.flush()

    data = f.getvalue()
    if file is not None:
        file.write(data)

    return data
