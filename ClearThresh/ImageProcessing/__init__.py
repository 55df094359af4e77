# -*- coding: utf-8 -*-
"""
ImageProcessing
===============

This sub-package provides elementwise routines for N-dimensional image and
array data.

The routines work on numpy arrays of any dimension. Large arrays are split
into blocks and processed in parallel via the
:mod:`~ClearThresh.ParallelProcessing` module.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'
