r"""
The :py:mod:`dcr_codecs.records` module implements codecs for the decoder
configuration records carried in the sample entries of ISO base media files:

* :py:mod:`~dcr_codecs.records.avc`: ``AVCDecoderConfigurationRecord``
  (``avcC``)
* :py:mod:`~dcr_codecs.records.hevc`: ``HEVCDecoderConfigurationRecord``
  (``hvcC``)
* :py:mod:`~dcr_codecs.records.dovi`: the Dolby Vision configuration record
  (``dvcC``, ``dvvC`` and ``dvwC``)

Each module provides a :py:mod:`~dcr_codecs.bitstream.serdes` syntax function
describing the record layout along with the following functions (where ``K``
is ``avc``, ``hevc`` or ``dovi``):

``K_record_size(record)``
    The number of bytes the encoded record will occupy. Always equal to
    ``len(encode_K_record(record))``.
``decode_K_record(data_or_file)``
    Decode a record from a :py:class:`bytes` string or file. The AVC and HEVC
    decoders refuse records whose ``configuration_version`` is not 1 unless
    passed ``check_version=False``.
``encode_K_record(record, file=None)``
    Encode a record, returning the encoded :py:class:`bytes`.

Records are represented by the :py:mod:`~dcr_codecs.fixeddict` types in
:py:mod:`~dcr_codecs.records.fixeddicts`. For example::

    >>> from dcr_codecs.records import (
    ...     DoviDecoderConfigurationRecord,
    ...     encode_dovi_record,
    ...     decode_dovi_record,
    ... )
    >>> data = encode_dovi_record(DoviDecoderConfigurationRecord(
    ...     dv_version_major=1,
    ...     dv_version_minor=0,
    ...     dv_profile=5,
    ...     dv_level=3,
    ...     rpu_present_flag=True,
    ...     el_present_flag=False,
    ...     bl_present_flag=True,
    ...     dv_bl_signal_compatibility_id=2,
    ... ))
    >>> len(data)
    24
    >>> print(decode_dovi_record(data))
    DoviDecoderConfigurationRecord:
      dv_version_major: 1
      dv_version_minor: 0
      dv_profile: 5
      dv_level: 3
      rpu_present_flag: True
      el_present_flag: False
      bl_present_flag: True
      dv_bl_signal_compatibility_id: 2

HEVC records may also be built from a stream's parameter sets using
:py:func:`~dcr_codecs.records.autofill.build_hevc_record`.


Constants
---------

.. automodule:: dcr_codecs.records.constants
    :members:


Record types
------------

.. automodule:: dcr_codecs.records.fixeddicts


Codecs
------

.. automodule:: dcr_codecs.records.avc

.. automodule:: dcr_codecs.records.hevc

.. automodule:: dcr_codecs.records.dovi


Building HEVC records
---------------------

.. automodule:: dcr_codecs.records.autofill

"""

from dcr_codecs.records.constants import *

from dcr_codecs.records.fixeddicts import *

from dcr_codecs.records.common import *

from dcr_codecs.records.avc import *
from dcr_codecs.records.hevc import *
from dcr_codecs.records.dovi import *

from dcr_codecs.records.autofill import *
