# -*- coding: utf-8 -*-
"""
``ClearThresh`` is a toolbox for clipping N-dimensional numerical data to
one or two threshold values.

*ClearThresh* includes
* floor and ceiling clipping to a single threshold,
* two sided clamping to a band,
* sign symmetric clipping using absolute thresholds (dead bands and
  magnitude clamps),
* banded absolute clipping to two mirrored magnitude ranges,
* block parallel processing of large arrays,
* plotting routines to inspect the clipping policies.

``ClearThresh`` is written in `Python 3 <https://docs.python.org/3/>`_ and
builds on `numpy <https://numpy.org>`_.

The main entry point is :func:`ClearThresh.ImageProcessing.Thresholding.threshold`.
"""
from importlib.metadata import version, PackageNotFoundError

__title__ = 'ClearThresh'
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

try:
    __version__ = version("ClearThresh")
except PackageNotFoundError:
    __version__ = '1.0.0'
