# -*- coding: utf-8 -*-
"""
Module to clip data arrays to one or two thresholds.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

from .Thresholding import threshold, apply_threshold, resolve_configuration, ThresholdConfiguration

__all__ = ['threshold', 'apply_threshold', 'resolve_configuration', 'ThresholdConfiguration']
