"""
The :py:mod:`dcr_codecs.parameter_sets` module contains a minimal HEVC
parameter set parser. It reads just enough of a sequence parameter set to
fill in the profile, tier, level, chroma format and bit depth fields of an
HEVC decoder configuration record.

.. automodule:: dcr_codecs.parameter_sets.constants
    :members:
    :undoc-members:

.. automodule:: dcr_codecs.parameter_sets.nal
    :members:

.. automodule:: dcr_codecs.parameter_sets.exp_golomb
    :members:

.. automodule:: dcr_codecs.parameter_sets.hevc_sps
"""

from dcr_codecs.parameter_sets.constants import *
from dcr_codecs.parameter_sets.nal import *
from dcr_codecs.parameter_sets.exp_golomb import *
from dcr_codecs.parameter_sets.hevc_sps import *
