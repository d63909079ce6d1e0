r"""
The :py:mod:`dcr_codecs.bitstream.serdes` module provides a framework for
transforming a function which describes the syntax of a record (written in the
style of the ISO/IEC 14496-15 syntax tables) into both a serialiser and a
deserialiser. Because a single function drives both directions, the encoder
and decoder for a record cannot disagree about field widths, field order or
which sections are present.

A basic example
```````````````

ISO/IEC 14496-15 describes records using syntax tables such as the following
(slightly simplified)::

    aligned(8) class Example {
        unsigned int(8) configurationVersion = 1;
        bit(6) reserved = '111111'b;
        unsigned int(2) lengthSizeMinusOne;
        unsigned int(8) numOfParameterSets;
        for (i=0; i < numOfParameterSets; i++) {
            unsigned int(16) parameterSetLength;
            bit(8*parameterSetLength) parameterSetNALUnit;
        }
    }

This is translated into a Python function taking a :py:class:`SerDes` as its
first argument::

    @context_type(Example)
    def example(serdes):
        serdes.uint_lit("configuration_version", 1)
        serdes.reserved(RESERVED_6_ONES)
        serdes.nbits("length_size_minus_one", 2)

        serdes.declare_list("parameter_sets")
        for _ in range(serdes.list_length("parameter_sets", 8)):
            serdes.length_prefixed_bytes("parameter_sets", 16)

To deserialise (read) a record we use the :py:class:`Deserialiser`
implementation of :py:class:`SerDes` like so::

    >>> from dcr_codecs.bitstream import BitstreamReader, Deserialiser
    >>> reader = BitstreamReader(BytesIO(b"\x01\xFF\x01\x00\x02\x67\x42"))

    >>> with Deserialiser(reader) as des:
    ...     example(des)
    >>> des.context
    Example({'configuration_version': 1, 'length_size_minus_one': 3, 'parameter_sets': [b'gB']})

The :py:attr:`SerDes.context` property is a dictionary which contains each of
the values read (named as per the calls to the various :py:class:`SerDes`
methods). In the nomenclature of this module, this *context* dictionary holds
values for each of the *target names* used.

Values to be serialised should be structured into a context dictionary of
similar shape and passed to a :py:class:`Serialiser`::

    >>> from dcr_codecs.bitstream import BitstreamWriter, Serialiser
    >>> f = BytesIO()
    >>> context = Example(
    ...     configuration_version=1,
    ...     length_size_minus_one=3,
    ...     parameter_sets=[b"\x67\x42"],
    ... )
    >>> with Serialiser(BitstreamWriter(f), context) as ser:
    ...     example(ser)
    >>> f.getvalue()
    b'\x01\xff\x01\x00\x02gB'


Verification
````````````

The :py:class:`SerDes` implementations perform various 'sanity checks' to
ensure that values have a 1:1 correspondence with the bytes on the wire.

* When values are read, :py:class:`Deserialiser` checks that names are not
  re-used.
* When values are written, :py:class:`Serialiser` checks that every value in
  the context dictionary is used exactly once. For example, supplying
  ``chroma_format`` for an AVC record whose profile has no extension section
  fails with :py:exc:`~dcr_codecs.exceptions.UnusedTargetError` rather than
  silently dropping the value.
* During serialisation, values are also checked to ensure they fit in their
  fields. Out-of-range values raise
  :py:exc:`~dcr_codecs.exceptions.FieldOverflow`.


Reserved bits
`````````````

Reserved bit regions are not stored in the context dictionary. They are
described by :py:class:`bitarray.bitarray` constants (see
:py:mod:`dcr_codecs.records.constants`) passed to :py:meth:`SerDes.reserved`.
The deserialiser reads and discards them, whatever their value, and the
serialiser always writes the constant. Re-encoding a decoded record therefore
normalises the reserved bits.


Hierarchy and arrays
````````````````````

Nested structures are represented by nested context dictionaries created with
:py:meth:`SerDes.subcontext`. Array-like fields are declared with
:py:meth:`SerDes.declare_list`, after which each use of the target reads or
writes the next list entry. The number of entries is carried on the wire by
:py:meth:`SerDes.list_length`.


Default values during serialisation
```````````````````````````````````

The :py:class:`Serialiser` may be passed a default value lookup,
``{context_type: {target: value, ...}, ...}``, which is consulted when a
target is missing from the context dictionary. See
:py:data:`dcr_codecs.records.autofill.dcr_default_values`.


API
---

.. autoclass:: SerDes
    :members:

.. autoclass:: Serialiser
    :show-inheritance:

.. autoclass:: Deserialiser
    :show-inheritance:

.. autoclass:: MonitoredDeserialiser
    :show-inheritance:

.. autofunction:: context_type
"""

from functools import wraps

from contextlib import contextmanager

from dcr_codecs.exceptions import (
    FieldOverflow,
    UnusedTargetError,
    ReusedTargetError,
    ListTargetExhaustedError,
    ListTargetContainsNonListError,
    UnclosedNestedContextError,
)


__all__ = [
    "SerDes",
    "Serialiser",
    "Deserialiser",
    "MonitoredDeserialiser",
    "context_type",
]


class _Frame(object):
    """
    Bookkeeping for one (possibly nested) context dictionary.

    Attributes
    ==========
    context : dict
        The context dictionary itself.
    target : str or None
        The target in the enclosing frame's context which holds this
        dictionary. None for the top-level frame.
    cursors : {target: True or int, ...}
        Records which targets have been used. Plain targets map to True once
        read or written. Targets passed to :py:meth:`SerDes.declare_list` map
        to the index of the next list entry to be used.
    """

    def __init__(self, context, target=None):
        self.context = context
        self.target = target
        self.cursors = {}


def _is_list_cursor(cursor):
    return cursor is not None and cursor is not True


class SerDes(object):
    """
    Common base of :py:class:`Serialiser` and :py:class:`Deserialiser`.

    Handles everything except the actual reading and writing of values: target
    bookkeeping, nested contexts and the completeness checks.

    Parameters
    ==========
    io : :py:class:`~.io.BitstreamReader` or :py:class:`~.io.BitstreamWriter`
    context : dict or None
        The top-level context dictionary. A new empty :py:class:`dict` is used
        if not given.

    Attributes
    ==========
    io
        The I/O interface passed to the constructor.
    """

    def __init__(self, io, context=None):
        self.io = io
        if context is None:
            context = {}
        self._frames = [_Frame(context)]

    @property
    def context(self):
        """The top-level context dictionary."""
        return self._frames[0].context

    @property
    def cur_context(self):
        """The context dictionary currently being read or written."""
        return self._frames[-1].context

    @property
    def _cursors(self):
        return self._frames[-1].cursors

    def _claim(self, target):
        """
        Mark a target in the current context as used.

        Returns None for a plain target or, for a declared list, the index of
        the list entry to use (advancing the cursor past it).
        """
        cursor = self._cursors.get(target)
        if cursor is True:
            raise ReusedTargetError(self.describe_path(target))
        elif cursor is None:
            self._cursors[target] = True
            return None
        else:
            self._cursors[target] = cursor + 1
            return cursor

    def _store(self, target, value):
        """
        Record a value for a target, overwriting (then extending) declared
        lists one entry at a time.
        """
        index = self._claim(target)
        if index is None:
            self.cur_context[target] = value
            return

        values = self.cur_context[target]
        if index < len(values):
            values[index] = value
        else:
            values.append(value)

    def _fetch(self, target):
        """
        Return the value of a target, or the next entry of a declared list.

        Raises :py:exc:`KeyError` for a missing plain target and
        :py:exc:`~dcr_codecs.exceptions.ListTargetExhaustedError` when a list
        has no entries left. An exhausted list's cursor is not advanced.
        """
        cursor = self._cursors.get(target)
        if _is_list_cursor(cursor) and cursor >= len(self.cur_context[target]):
            raise ListTargetExhaustedError(self.describe_path(target))

        index = self._claim(target)
        if index is None:
            return self.cur_context[target]
        return self.cur_context[target][index]

    def _fetch_or_create(self, target, default):
        index = self._claim(target)
        if index is None:
            return self.cur_context.setdefault(target, default)

        values = self.cur_context[target]
        if index == len(values):
            values.append(default)
        return values[index]

    def bool(self, target):
        """
        Reads or writes a single-bit flag.

        Parameters
        ==========
        target : str
            The target for the bit (as a :py:class:`bool`).

        Returns
        =======
        value : bool
        """
        raise NotImplementedError()

    def nbits(self, target, num_bits):
        """
        Reads or writes a fixed-width unsigned integer (``unsigned
        int(num_bits)``).

        Parameters
        ==========
        target : str
            The target for the value (as an :py:class:`int`).
        num_bits : int
            The number of bits in the value.

        Returns
        =======
        value : int
        """
        raise NotImplementedError()

    def uint_lit(self, target, num_bytes):
        """
        Reads or writes a fixed-width unsigned integer whose width is a whole
        number of bytes.

        Parameters
        ==========
        target : str
            The target for the value (as an :py:class:`int`).
        num_bytes : int
            The number of bytes in the value.

        Returns
        =======
        value : int
        """
        raise NotImplementedError()

    def length_prefixed_bytes(self, target, num_length_bits):
        """
        Reads or writes a :py:class:`bytes` string preceded by an unsigned
        integer length field (e.g. a NAL unit preceded by its 16-bit
        ``nalUnitLength``).

        Parameters
        ==========
        target : str
            The target for the value (as a :py:class:`bytes`).
        num_length_bits : int
            The width of the length field in bits.

        Returns
        =======
        value : :py:class:`bytes`
        """
        raise NotImplementedError()

    def list_length(self, target, num_bits):
        """
        Reads or writes the number of entries in a list target as a
        ``num_bits`` unsigned integer. The list itself is not read or written.

        When serialising, the length of the (declared) list in the context
        dictionary is written. When deserialising, the count read is returned
        and the caller is expected to read that many entries.

        Parameters
        ==========
        target : str
            The name of a target declared with :py:meth:`declare_list`.
        num_bits : int
            The width of the count field.

        Returns
        =======
        length : int
        """
        raise NotImplementedError()

    def reserved(self, reserved_bits):
        """
        Reads or writes a reserved bit region. Nothing is stored in the context
        dictionary.

        Parameters
        ==========
        reserved_bits : :py:class:`bitarray.bitarray`
            The mandated value of the reserved bits. Its length gives the
            number of bits in the region.

        Returns
        =======
        value : :py:class:`bitarray.bitarray`
            The bits actually read (when deserialising) or written.
        """
        raise NotImplementedError()

    def declare_list(self, target):
        """
        Make 'target' a list target: from now on each read or write of the
        target uses the next entry of a :py:class:`list`, starting from the
        first. Reads and writes nothing.

        A missing target is created as an empty list. Raises
        :py:exc:`~dcr_codecs.exceptions.ReusedTargetError` if the target has
        already been used and
        :py:exc:`~dcr_codecs.exceptions.ListTargetContainsNonListError` if it
        holds something other than a list.
        """
        if target in self._cursors:
            raise ReusedTargetError(self.describe_path(target))

        values = self.cur_context.setdefault(target, [])
        if not isinstance(values, list):
            raise ListTargetContainsNonListError(
                "{} contains {!r} (which is not a list)".format(
                    self.describe_path(target), values
                )
            )

        self._cursors[target] = 0

    def set_context_type(self, context_type):
        """
        Convert the current context dictionary to 'context_type' (e.g. one of
        the :py:mod:`~dcr_codecs.records.fixeddicts` types), unless it already
        is one. The enclosing context is updated to refer to the converted
        dictionary. Reads and writes nothing.
        """
        frame = self._frames[-1]
        if type(frame.context) is context_type:
            return

        frame.context = context_type(frame.context)

        if len(self._frames) > 1:
            parent = self._frames[-2]
            cursor = parent.cursors[frame.target]
            if cursor is True:
                parent.context[frame.target] = frame.context
            else:
                # The cursor already points past the entry being converted
                parent.context[frame.target][cursor - 1] = frame.context

    def subcontext_enter(self, target):
        """
        Descend into the dictionary held by 'target' (or the next entry of a
        declared list target), creating an empty one if absent. Every call
        must be matched by :py:meth:`subcontext_leave`.
        """
        child = self._fetch_or_create(target, {})
        self._frames.append(_Frame(child, target))

    def subcontext_leave(self):
        """
        Return to the enclosing context, first checking that every value in
        the nested one was used.
        """
        self._verify_frame()
        self._frames.pop()

    @contextmanager
    def subcontext(self, target):
        """
        Context manager form of :py:meth:`subcontext_enter` and
        :py:meth:`subcontext_leave`::

            >>> with serdes.subcontext("nal_arrays"):
            ...     nal_array(serdes)
        """
        self.subcontext_enter(target)
        yield
        self.subcontext_leave()

    def _verify_frame(self):
        for target, value in self.cur_context.items():
            cursor = self._cursors.get(target)
            if cursor is None:
                raise UnusedTargetError(self.describe_path(target))
            elif cursor is not True and cursor != len(value):
                raise UnusedTargetError(
                    "{}[{!r}][{}:{}]".format(
                        self.describe_path(), target, cursor, len(value)
                    )
                )

    def verify_complete(self):
        """
        Check that the current context has been fully used and that no nested
        context remains open.

        Raises
        ======
        :py:exc:`~dcr_codecs.exceptions.UnusedTargetError`
        :py:exc:`~dcr_codecs.exceptions.UnclosedNestedContextError`
        """
        self._verify_frame()

        if len(self._frames) > 1:
            raise UnclosedNestedContextError(self.describe_path())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        # Completeness is meaningless after a failure part way through
        if exc_type is None:
            self.verify_complete()

    def path(self, target=None):
        """
        List the targets (and list indices) leading from the top-level context
        to the current one, optionally followed by 'target'. For example::

            ['nal_arrays', 2, 'nal_units']
        """
        steps = [
            (parent.cursors, child.target)
            for parent, child in zip(self._frames, self._frames[1:])
        ]
        if target is not None:
            steps.append((self._cursors, target))

        out = []
        for cursors, name in steps:
            out.append(name)
            cursor = cursors.get(name)
            if _is_list_cursor(cursor) and cursor > 0:
                out.append(cursor - 1)

        return out

    def describe_path(self, target=None):
        """
        Like :py:meth:`path` but rendered as a string rooted at the top-level
        context's type name::

            HEVCDecoderConfigurationRecord['nal_arrays'][1]['nal_units'][0]
        """
        return type(self.context).__name__ + "".join(
            "[{!r}]".format(step) for step in self.path(target)
        )


class Deserialiser(SerDes):
    """
    Reads values from a :py:class:`~.io.BitstreamReader`, building up the
    context dictionary as it goes.
    """

    def _record(self, target, value):
        self._store(target, value)
        return value

    def bool(self, target):
        return self._record(target, bool(self.io.read_bit()))

    def nbits(self, target, num_bits):
        return self._record(target, self.io.read_nbits(num_bits))

    def uint_lit(self, target, num_bytes):
        return self._record(target, self.io.read_uint_lit(num_bytes))

    def length_prefixed_bytes(self, target, num_length_bits):
        length = self.io.read_nbits(num_length_bits)
        return self._record(target, self.io.read_bytes(length))

    def list_length(self, target, num_bits):
        return self.io.read_nbits(num_bits)

    def reserved(self, reserved_bits):
        return self.io.read_bitarray(len(reserved_bits))


class Serialiser(SerDes):
    """
    Writes the values held in a context dictionary to a
    :py:class:`~.io.BitstreamWriter`.

    Parameters
    ==========
    io : :py:class:`~.io.BitstreamWriter`
    context : dict
    default_values : {context_type: {target: value, ...}, ...} or None
        Fallback values for targets (or list entries) missing from the context
        dictionary. Defaults are written but never copied into the context.
    """

    def __init__(self, io, context=None, default_values=None):
        super(Serialiser, self).__init__(io, context)
        self.default_values = default_values if default_values is not None else {}

    def _fetch(self, target):
        try:
            return super(Serialiser, self)._fetch(target)
        except (KeyError, ListTargetExhaustedError):
            defaults = self.default_values.get(type(self.cur_context), {})
            if target not in defaults:
                raise
            return defaults[target]

    @contextmanager
    def _field(self, target):
        # Say which field overflowed
        try:
            yield
        except FieldOverflow as e:
            raise FieldOverflow("{}: {}".format(self.describe_path(target), e))

    def _emit(self, target, write, width, value):
        with self._field(target):
            write(width, value)
        return value

    def bool(self, target):
        value = self._fetch(target)
        with self._field(target):
            self.io.write_bit(value)
        return bool(value)

    def nbits(self, target, num_bits):
        return self._emit(target, self.io.write_nbits, num_bits, self._fetch(target))

    def uint_lit(self, target, num_bytes):
        return self._emit(
            target, self.io.write_uint_lit, num_bytes, self._fetch(target)
        )

    def length_prefixed_bytes(self, target, num_length_bits):
        value = self._fetch(target)
        self._emit(target, self.io.write_nbits, num_length_bits, len(value))
        self.io.write_bytes(len(value), value)
        return value

    def list_length(self, target, num_bits):
        return self._emit(
            target, self.io.write_nbits, num_bits, len(self.cur_context[target])
        )

    def reserved(self, reserved_bits):
        self.io.write_bitarray(len(reserved_bits), reserved_bits)
        return reserved_bits


def _monitored(name):
    def method(self, target, *args):
        value = getattr(super(MonitoredMixin, self), name)(target, *args)
        self.monitor(self, target, value)
        return value

    method.__name__ = name
    return method


class MonitoredMixin(object):
    """
    Mixin for :py:class:`SerDes` subclasses which calls
    ``monitor(serdes, target, value)`` after every value is read or written.
    """

    def __init__(self, monitor, *args, **kwargs):
        super(MonitoredMixin, self).__init__(*args, **kwargs)
        self.monitor = monitor

    bool = _monitored("bool")
    nbits = _monitored("nbits")
    uint_lit = _monitored("uint_lit")
    length_prefixed_bytes = _monitored("length_prefixed_bytes")


class MonitoredDeserialiser(MonitoredMixin, Deserialiser):
    """
    A :py:class:`Deserialiser` taking a ``monitor(des, target, value)``
    callable as its first argument, called after each value is read. Used by
    :py:mod:`dcr_codecs.scripts.dcr_record_viewer` to log fields as they are
    decoded.
    """


def context_type(dict_type):
    """
    Decorator for syntax functions which converts the current context
    dictionary to 'dict_type' (see :py:meth:`SerDes.set_context_type`) before
    the function body runs::

        @context_type(NALArray)
        def nal_array(serdes):
            serdes.bool("array_completeness")
            # ...

    The decorated function has a ``context_type`` attribute holding
    'dict_type'.
    """

    def decorator(syntax_function):
        @wraps(syntax_function)
        def with_context_type(serdes, *args, **kwargs):
            serdes.set_context_type(dict_type)
            return syntax_function(serdes, *args, **kwargs)

        with_context_type.context_type = dict_type
        return with_context_type

    return decorator
