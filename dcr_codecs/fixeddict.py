r"""
The :py:mod:`dcr_codecs.fixeddict` module provides :py:func:`fixeddict`, which
creates :py:class:`dict` subclasses restricted to a fixed set of keys. Every
record type in :py:mod:`dcr_codecs.records` is built this way, giving:

* a named type for each syntax structure of ISO/IEC 14496-15 (so a decoded
  record says what it is when printed)
* a :py:exc:`FixedDictKeyError` for misspelt field names, rather than a
  silently ignored entry
* a readable, indented ``str()`` suitable for the record viewer


Tutorial
--------

A type is declared by listing its keys::

    >>> from dcr_codecs.fixeddict import fixeddict

    >>> NALArray = fixeddict(
    ...     "NALArray",
    ...     "array_completeness",
    ...     "nal_unit_type",
    ...     "nal_units",
    ... )

Instances behave as normal dictionaries, except that unknown keys are
refused::

    >>> a = NALArray(array_completeness=True)
    >>> a["nal_unit_type"] = 33
    >>> a["nal_unit_type"]
    33

    >>> a["nal_unit_typ"] = 33
    Traceback (most recent call last):
      ...
    FixedDictKeyError: 'nal_unit_typ' not allowed in NALArray

Printing shows one field per line::

    >>> print(a)
    NALArray:
      array_completeness: True
      nal_unit_type: 33

Passing :py:class:`Entry` objects instead of plain names controls how each
value is shown. Here an enum supplies a friendly name alongside the
hexadecimal value::

    >>> from dcr_codecs.string_formatters import Hex
    >>> from dcr_codecs.records.constants import HEVCNALUnitTypes
    >>> NALArray = fixeddict(
    ...     "NALArray",
    ...     Entry("array_completeness"),
    ...     Entry("nal_unit_type", enum=HEVCNALUnitTypes, formatter=Hex(2)),
    ...     Entry("nal_units"),
    ... )
    >>> print(NALArray(nal_unit_type=33))
    NALArray:
      nal_unit_type: sps (0x21)

The ``help`` arguments of :py:func:`fixeddict` and :py:class:`Entry` (and
``help_type`` of :py:class:`Entry`) end up in the generated class's
docstring.


API
---

.. autofunction:: fixeddict

.. autoclass:: Entry

.. autoclass:: FixedDict

.. autoexception:: FixedDictKeyError
"""

import sys

from collections import OrderedDict

from textwrap import dedent

from dcr_codecs.string_formatters import indent


__all__ = [
    "fixeddict",
    "Entry",
    "FixedDict",
    "FixedDictKeyError",
]


def _dedent_or_none(text):
    return dedent(text).strip() if text is not None else None


class Entry(object):
    """
    Describes one allowed key of a :py:func:`fixeddict` type and how its
    value is printed.

    Parameters
    ==========
    name : str
        The key name.
    formatter : function(value) -> string
        Produces the string shown for a value. Defaults to 'str'.
    friendly_formatter : function(value) -> string or None
        If given, produces a 'friendly' name shown before the formatted value
        (which then appears in brackets). Values for which it returns None are
        shown without a friendly name.
    enum : :py:class:`~enum.Enum`
        Shows values as the enum member name followed by the value in
        brackets. Values not in the enum are shown as plain numbers. An explicit
        ``formatter`` or ``friendly_formatter`` takes priority.
    help : str
        Optional documentation string.
    help_type : str
        Optional string describing the type of the entry.
    """

    def __init__(
        self,
        name,
        formatter=None,
        friendly_formatter=None,
        enum=None,
        help=None,
        help_type=None,
        **kwargs
    ):
        if kwargs:
            raise TypeError(
                "unexpected keyword arguments: {} for {}".format(
                    ", ".join(kwargs), self.__class__.__name__
                )
            )

        self.name = name
        self.formatter = formatter
        self.friendly_formatter = friendly_formatter
        if enum is not None:
            if formatter is None:
                self.formatter = self._enum_value_formatter(enum)
            if friendly_formatter is None:
                self.friendly_formatter = self._enum_name_formatter(enum)
        if self.formatter is None:
            self.formatter = str

        self.help = _dedent_or_none(help)
        self.help_type = _dedent_or_none(help_type)

    @staticmethod
    def _enum_value_formatter(enum_type):
        def enum_value(value):
            try:
                return str(enum_type(value).value)
            except ValueError:
                return str(value)

        return enum_value

    @staticmethod
    def _enum_name_formatter(enum_type):
        def enum_name(value):
            try:
                return enum_type(value).name
            except ValueError:
                return None

        return enum_name

    def to_string(self, value):
        """
        Produce the string shown for 'value' when the containing dictionary
        is printed.
        """
        value_string = self.formatter(value)

        if self.friendly_formatter is not None:
            friendly_string = self.friendly_formatter(value)
            if friendly_string is not None:
                return "{} ({})".format(friendly_string, value_string)

        return value_string


class FixedDictKeyError(KeyError):
    """
    A :py:exc:`KeyError` raised when a key not permitted by a
    :py:func:`fixeddict` type is used.

    Attributes
    ==========
    key
        The key which was used.
    fixeddict_class
        The :py:func:`fixeddict` type of the dictionary.
    """

    def __init__(self, key, fixeddict_class):
        super(FixedDictKeyError, self).__init__(key)
        self.key = key
        self.fixeddict_class = fixeddict_class

    def __str__(self):
        return "{!r} not allowed in {}".format(self.key, self.fixeddict_class.__name__)


class FixedDict(dict):
    """
    Base class of all :py:func:`fixeddict` types. Subclasses set
    ``entry_objs``, a :py:class:`collections.OrderedDict` mapping each
    permitted key to its :py:class:`Entry`.
    """

    entry_objs = OrderedDict()

    help = None

    def __init__(self, *args, **kwargs):
        super(FixedDict, self).__init__(*args, **kwargs)
        for key in self:
            self._check_key(key)

    def _check_key(self, key):
        if key not in self.entry_objs:
            raise FixedDictKeyError(key, type(self))

    def __setitem__(self, key, value):
        self._check_key(key)
        super(FixedDict, self).__setitem__(key, value)

    def setdefault(self, key, default=None):
        self._check_key(key)
        return super(FixedDict, self).setdefault(key, default)

    def update(self, *args, **kwargs):
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def copy(self):
        return type(self)(self)

    def __reduce__(self):
        return (type(self), (dict(self),))

    def __repr__(self):
        return "{}({{{}}})".format(
            type(self).__name__,
            ", ".join(
                "{!r}: {!r}".format(key, self[key])
                for key in self.entry_objs
                if key in self
            ),
        )

    def __str__(self):
        lines = [
            indent("{}: {}".format(key, entry.to_string(self[key])))
            for key, entry in self.entry_objs.items()
            if key in self and not key.startswith("_")
        ]
        if not lines:
            return type(self).__name__
        return "{}:\n{}".format(type(self).__name__, "\n".join(lines))


def _make_docstring(help, entry_objs):
    parameters = []
    for entry in entry_objs.values():
        parameter = entry.name
        if entry.help_type is not None:
            parameter += " : " + entry.help_type
        if entry.help is not None:
            parameter += "\n" + indent(entry.help, "    ")
        parameters.append(parameter)

    return "{}\n\nParameters\n==========\n{}\n".format(
        help if help is not None else "A :py:mod:`~dcr_codecs.fixeddict`.",
        "\n".join(parameters),
    )


def fixeddict(name, *entries, **kwargs):
    """
    Create a new :py:class:`FixedDict` subclass called 'name' which permits
    only the listed keys.

    Each of 'entries' may be a key name or an :py:class:`Entry`. Keys whose
    names start with an underscore are omitted when the dictionary is printed.

    The keyword-only argument 'help' sets the docstring of the new type (which
    is extended with the help for each entry). The keyword-only argument
    'module' sets its ``__module__``, which must be correct for pickling. By
    default the module of the caller is used.
    """
    module = kwargs.pop("module", None)
    help = _dedent_or_none(kwargs.pop("help", None))
    if kwargs:
        raise TypeError("unexpected keyword arguments: {}".format(", ".join(kwargs)))

    entry_objs = OrderedDict()
    for entry in entries:
        if not isinstance(entry, Entry):
            entry = Entry(entry)
        entry_objs[entry.name] = entry

    if module is None:
        try:
            module = sys._getframe(1).f_globals["__name__"]
        except (AttributeError, ValueError, KeyError):
            pass

    namespace = {
        "entry_objs": entry_objs,
        "help": help,
        "__doc__": _make_docstring(help, entry_objs),
    }
    if module is not None:
        namespace["__module__"] = module

    return type(name, (FixedDict,), namespace)
