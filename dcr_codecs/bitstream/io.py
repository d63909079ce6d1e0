"""
The :py:mod:`dcr_codecs.bitstream.io` module reads and writes bit fields on
binary file-like objects. Decoder configuration records pack several fields
into a byte (e.g. ``bit(6) reserved`` followed by ``unsigned int(2)
chromaFormat``), so reads and writes are made one bit field at a time, most
significant bit first.

Both directions fail loudly rather than producing a wrong record:

* reading beyond the end of the file raises
  :py:exc:`~dcr_codecs.exceptions.Truncated`
* writing a value which does not fit its field raises
  :py:exc:`~dcr_codecs.exceptions.FieldOverflow`

.. autoclass:: BitstreamReader
    :members:

.. autoclass:: BitstreamWriter
    :members:

Positions are reported as ``(bytes, bits)`` tuples. These helpers convert to
and from plain bit counts (as printed by the record viewer):

.. autofunction:: to_bit_offset

.. autofunction:: from_bit_offset

"""

from bitarray import bitarray
from bitarray.util import ba2int, int2ba, zeros

from dcr_codecs.string_formatters import Bytes

from dcr_codecs.exceptions import Truncated, FieldOverflow


__all__ = [
    "to_bit_offset",
    "from_bit_offset",
    "BitstreamReader",
    "BitstreamWriter",
]


def to_bit_offset(bytes, bits=7):
    """
    Convert a ``(bytes, bits)`` position, as returned by the ``tell()``
    methods below, into a number of bits from the start of the file.
    """
    return bytes * 8 + (7 - bits)


def from_bit_offset(total_bits):
    """
    The inverse of :py:func:`to_bit_offset`.
    """
    bytes, bit_index = divmod(total_bits, 8)
    return (bytes, 7 - bit_index)


class BitstreamReader(object):
    """
    Reads bits (most significant first) from a binary file-like object,
    starting from the file's current position.

    Bytes are fetched from the file only when a bit from them is needed, so
    after reading a whole number of bytes the file is left positioned just
    after them. Short reads from raw (unbuffered) files are retried until the
    requested bytes arrive or the file ends.

    Any attempt to read beyond the end of the file raises
    :py:exc:`~dcr_codecs.exceptions.Truncated`.

    Parameters
    ==========
    file : file-like object opened for binary reading
    """

    def __init__(self, file):
        self._file = file

        # File offset of the next byte to fetch. Unseekable files (pipes, raw
        # sockets) are counted from zero.
        try:
            self._offset = file.tell()
        except (OSError, AttributeError):
            self._offset = 0

        # The partially consumed byte (None when the next bit belongs to a
        # byte not yet fetched) and the index of its next unread bit (7 = MSB).
        self._byte = None
        self._bit = 7

    def _read_up_to(self, num_bytes):
        """
        Read 'num_bytes' from the file, returning fewer only at end of file.
        """
        chunks = []
        remaining = num_bytes
        while remaining > 0:
            chunk = self._file.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)

        data = b"".join(chunks)
        self._offset += len(data)
        return data

    def _fetch_byte(self):
        """
        Make sure a partially consumed byte is available, fetching one if
        necessary. Returns False at end of file.
        """
        if self._byte is None:
            data = self._read_up_to(1)
            if not data:
                return False
            self._byte = data[0]
            self._bit = 7
        return True

    def _truncated(self, missing_bits):
        return Truncated(
            "expected {} more bit{} at byte offset {}".format(
                missing_bits,
                "" if missing_bits == 1 else "s",
                self.tell()[0],
            )
        )

    def is_end_of_stream(self):
        """
        True once every bit of the file has been read. When at a byte
        boundary this fetches the next byte (if any) to find out.
        """
        return not self._fetch_byte()

    def tell(self):
        """
        The position of the next bit to be read as a ``(bytes, bits)`` tuple:
        the byte offset within the file and the bit index within that byte,
        from 7 (MSB) down to 0 (LSB).
        """
        if self._byte is None:
            return (self._offset, 7)
        else:
            return (self._offset - 1, self._bit)

    def read_bit(self):
        """Read a single bit, returned as 0 or 1."""
        if not self._fetch_byte():
            raise self._truncated(1)

        value = (self._byte >> self._bit) & 1
        if self._bit == 0:
            self._byte = None
        else:
            self._bit -= 1

        return value

    def read_bitarray(self, bits):
        """
        Read 'bits' bits into a :py:class:`bitarray.bitarray`.
        """
        out = bitarray()
        for missing in range(bits, 0, -1):
            if not self._fetch_byte():
                raise self._truncated(missing)
            out.append(self.read_bit())
        return out

    def read_nbits(self, bits):
        """
        Read a 'bits'-bit unsigned integer (``unsigned int(bits)``).
        """
        if bits == 0:
            return 0
        return ba2int(self.read_bitarray(bits))

    def read_uint_lit(self, num_bytes):
        """
        Read an unsigned integer 'num_bytes' bytes wide.
        """
        return self.read_nbits(8 * num_bytes)

    def read_bytes(self, num_bytes):
        """
        Read 'num_bytes' bytes, returned as :py:class:`bytes`.

        Byte-aligned reads are passed straight through to the underlying file.
        """
        if num_bytes == 0:
            return b""

        if self._byte is not None and self._bit != 7:
            return self.read_bitarray(8 * num_bytes).tobytes()

        # A whole byte may already have been fetched by is_end_of_stream()
        data = b""
        if self._byte is not None:
            data = bytes([self._byte])
            self._byte = None

        data += self._read_up_to(num_bytes - len(data))
        if len(data) < num_bytes:
            raise self._truncated(8 * (num_bytes - len(data)))

        return data


class BitstreamWriter(object):
    """
    Writes bits (most significant first) to a binary file-like object,
    starting from the file's current position.

    Complete bytes are written to the file as soon as they are finished. Call
    :py:meth:`flush` to also write out a trailing partial byte.

    Out of range values raise :py:exc:`~dcr_codecs.exceptions.FieldOverflow`
    and nothing is written.

    Parameters
    ==========
    file : file-like object opened for binary writing
    """

    def __init__(self, file):
        self._file = file

        # File offset of the byte being assembled in self._pending
        self._offset = file.tell()

        # Fewer than eight bits not yet written to the file
        self._pending = bitarray()

    def _extend(self, bits):
        self._pending.extend(bits)

        whole_bytes = len(self._pending) // 8
        if whole_bytes:
            self._file.write(self._pending[: 8 * whole_bytes].tobytes())
            del self._pending[: 8 * whole_bytes]
            self._offset += whole_bytes

    def tell(self):
        """
        The position of the next bit to be written, in the same form as
        :py:meth:`BitstreamReader.tell`.
        """
        return (self._offset, 7 - len(self._pending))

    def flush(self):
        """
        Write out any partial byte (zero padded) and flush the file.

        The partial byte remains pending: further writes complete it and
        overwrite the padded copy.
        """
        if self._pending:
            self._file.write(self._pending.tobytes())
            self._file.seek(-1, 1)

        self._file.flush()

    def write_bit(self, value):
        """
        Write a single bit given as 0, 1, False or True. Any other value
        raises :py:exc:`~dcr_codecs.exceptions.FieldOverflow`.
        """
        if isinstance(value, (str, bytes)) or value not in (0, 1):
            raise FieldOverflow("{!r} is not a single bit".format(value))
        self._extend(bitarray([bool(value)]))

    def write_nbits(self, bits, value):
        """
        Write a 'bits'-bit unsigned integer (``unsigned int(bits)``).

        Raises :py:exc:`~dcr_codecs.exceptions.FieldOverflow` for negative
        values and values wider than 'bits'.
        """
        if value < 0:
            raise FieldOverflow(
                "{} is negative, expected an unsigned value".format(value)
            )
        if value.bit_length() > bits:
            raise FieldOverflow(
                "0b{:b} is {} bits, not {}".format(value, value.bit_length(), bits)
            )

        if bits:
            self._extend(int2ba(value, length=bits))

    def write_uint_lit(self, num_bytes, value):
        """
        Write an unsigned integer 'num_bytes' bytes wide.
        """
        self.write_nbits(8 * num_bytes, value)

    def write_bitarray(self, bits, value):
        """
        Write the :py:class:`bitarray.bitarray` 'value' into a 'bits'-bit
        field, zero padding on the right if it is shorter.
        """
        if len(value) > bits:
            raise FieldOverflow(
                "0b{} is {} bits, not {}".format(value.to01(), len(value), bits)
            )

        self._extend(value)
        self._extend(zeros(bits - len(value)))

    def write_bytes(self, num_bytes, value):
        """
        Write the :py:class:`bytes` (or :py:class:`bytearray`) 'value' into a
        'num_bytes' byte field, zero padding on the right if it is shorter.
        """
        if len(value) > num_bytes:
            raise FieldOverflow(
                "{} is {} bytes, not {}".format(Bytes()(value), len(value), num_bytes)
            )

        bits = bitarray()
        bits.frombytes(bytes(value) + b"\x00" * (num_bytes - len(value)))
        self._extend(bits)
