# -*- coding: utf-8 -*-
"""
Thresholding
============

Module to clip N-dimensional data to one or two threshold values.

The data is bounded according to the thresholds and the optional modes
``'max'`` / ``'maximum'`` and ``'abs'`` / ``'absolute'``:

=========== ======== ======= =================================================
thresholds  absolute maximum result
=========== ======== ======= =================================================
t           no       no      ``x < t -> t`` (floor)
t           no       yes     ``x > t -> t`` (ceiling)
lo, hi      no       \\-      ``x < lo -> lo``, ``x > hi -> hi`` (clamp)
t           yes      no      values in ``[-|t|, |t|]`` pushed to ``±|t|``
t           yes      yes     values beyond ``±|t|`` pulled in to ``±|t|``
lo, hi      yes      \\-      ``x >= 0`` bounded to ``[a, b]``,
                             ``x < 0`` bounded to ``[-b, -a]`` with
                             ``a = min(|lo|, |hi|)``, ``b = max(|lo|, |hi|)``
=========== ======== ======= =================================================

Zeros are treated as positive values in the absolute modes and NaN values are
left unchanged.

Two thresholds of opposite sign with the absolute mode, e.g. ``(-3, 4, 'abs')``,
are equivalent to a single absolute maximum given by the larger magnitude,
i.e. ``(4, 'max', 'abs')``.

Example
-------

>>> import numpy as np
>>> from ClearThresh.ImageProcessing.Thresholding import threshold
>>> data = np.array([-5, -1, 0, 1, 5])
>>> threshold(data, 1)
array([1., 1., 1., 1., 5.])
>>> threshold(data, 1, 'abs')
array([-5., -1.,  1.,  1.,  5.])
>>> threshold(data, 1, 'max', 'abs')
array([-1., -1.,  0.,  1.,  1.])
>>> threshold(data, 1, 2, 'abs')
array([-2., -1.,  1.,  1.,  2.])
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import logging
import math
import numbers
from dataclasses import dataclass

import numpy as np

import ClearThresh.ParallelProcessing.DataProcessing.ArrayProcessing as ap
from ClearThresh.Utils.exceptions import ConfigError, ThresholdTypeError
from ClearThresh.Utils.utilities import is_iterable

logger = logging.getLogger(__name__)


ABSOLUTE_TOKENS = ('abs', 'absolute')
"""Mode tokens selecting sign symmetric thresholds."""

MAXIMUM_TOKENS = ('max', 'maximum')
"""Mode tokens turning a single threshold into a ceiling."""

MAX_THRESHOLDS = 2


###############################################################################
### Configuration
###############################################################################

@dataclass(frozen=True)
class ThresholdConfiguration:
    """Validated thresholding configuration.

    Attributes
    ----------
    thresholds : tuple of float
        One threshold or two thresholds sorted in increasing order.
    use_absolute : bool
        If True, the thresholds are magnitudes applied symmetrically to
        positive and negative values.
    treat_as_minimum : bool
        If True, a single threshold is a lower bound, otherwise an upper bound.
        Ignored for two thresholds.

    Note
    ----
    Two thresholds of opposite sign with use_absolute are replaced by the
    single absolute maximum max(|lo|, |hi|), e.g. (-3, 4) becomes (4,) with
    treat_as_minimum False.
    """
    thresholds: tuple
    use_absolute: bool = False
    treat_as_minimum: bool = True

    def __post_init__(self):
        thresholds = self.thresholds if is_iterable(self.thresholds) else (self.thresholds,)
        thresholds = tuple(_as_real(t) for t in thresholds)
        if len(thresholds) == 0:
            raise ConfigError('no threshold provided')
        if len(thresholds) > MAX_THRESHOLDS:
            raise ConfigError(f'too many thresholds (max {MAX_THRESHOLDS})')
        if any(math.isnan(t) for t in thresholds):
            raise ConfigError('threshold is NaN')

        use_absolute = bool(self.use_absolute)
        treat_as_minimum = bool(self.treat_as_minimum)
        # Opposite signs with 'abs': the band (-b, a) is the magnitude bound max(|a|, |b|)
        if len(thresholds) == 2 and use_absolute and sum(t < 0 for t in thresholds) == 1:
            thresholds = (max(abs(t) for t in thresholds),)
            treat_as_minimum = False

        object.__setattr__(self, 'thresholds', tuple(sorted(thresholds)))
        object.__setattr__(self, 'use_absolute', use_absolute)
        object.__setattr__(self, 'treat_as_minimum', treat_as_minimum)

    @property
    def policy(self):
        """str: Name of the clipping policy applied by this configuration."""
        if len(self.thresholds) == 2:
            return 'absolute_band' if self.use_absolute else 'clamp'
        if self.use_absolute:
            return 'absolute_floor' if self.treat_as_minimum else 'absolute_ceiling'
        return 'floor' if self.treat_as_minimum else 'ceiling'

    @classmethod
    def from_dict(cls, parameters):
        """Create a configuration from a mapping, e.g. a configobj section.

        Arguments
        ---------
        parameters : dict
            With the key 'thresholds' (a number or a list of numbers) and
            the optional boolean keys 'absolute' and 'maximum'.

        Returns
        -------
        configuration : ThresholdConfiguration
            The resolved configuration.
        """
        thresholds = parameters.get('thresholds', ())
        if isinstance(thresholds, (list, tuple)):
            thresholds = tuple(thresholds)
        else:
            thresholds = (thresholds,)
        return resolve_configuration(*thresholds,
                                     absolute=parameters.get('absolute', False),
                                     maximum=parameters.get('maximum', False))


def resolve_configuration(*arguments, absolute=False, maximum=False):
    """Resolve loosely typed thresholding arguments into a configuration.

    Arguments
    ---------
    *arguments : numbers and str
        One or two numerical thresholds in any order mixed with the mode
        tokens 'abs', 'absolute', 'max' and 'maximum' (case insensitive).
        Other strings are ignored.
    absolute : bool
        Keyword equivalent of the 'abs' token.
    maximum : bool
        Keyword equivalent of the 'max' token.

    Returns
    -------
    configuration : ThresholdConfiguration
        The resolved configuration.

    Raises
    ------
    ConfigError
        If no, more than two or NaN thresholds are given.
    ThresholdTypeError
        If an argument is neither a real number nor a string.
    """
    values = []
    tokens = []
    for argument in arguments:
        if isinstance(argument, str):
            tokens.append(argument.lower())
        else:
            values.append(_as_real(argument))

    use_absolute = bool(absolute) or any(token in ABSOLUTE_TOKENS for token in tokens)
    treat_as_minimum = not (bool(maximum) or any(token in MAXIMUM_TOKENS for token in tokens))

    ignored = [token for token in tokens if token not in ABSOLUTE_TOKENS + MAXIMUM_TOKENS]
    if ignored:
        logger.debug('Ignoring unknown threshold modes %r', ignored)

    configuration = ThresholdConfiguration(thresholds=tuple(values),
                                           use_absolute=use_absolute,
                                           treat_as_minimum=treat_as_minimum)
    logger.debug('Resolved threshold configuration %r (%s)', configuration, configuration.policy)
    return configuration


def _as_real(value):
    if isinstance(value, np.ndarray) and value.ndim == 0:
        value = value[()]
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise ThresholdTypeError(f'Threshold {value!r} of type {type(value).__name__} is not a real number',
                                 value=value)
    return float(value)


###############################################################################
### Clipping policies
###############################################################################

def _floor(data, configuration):
    t = configuration.thresholds[0]
    return np.where(data < t, t, data)


def _ceiling(data, configuration):
    t = configuration.thresholds[0]
    return np.where(data > t, t, data)


def _clamp(data, configuration):
    lo, hi = configuration.thresholds
    result = np.where(data < lo, lo, data)
    return np.where(data > hi, hi, result)


def _absolute_floor(data, configuration):
    t = abs(configuration.thresholds[0])
    positive = data >= 0
    negative = data < 0
    result = np.where(positive & (data <= t), t, data)
    return np.where(negative & (data >= -t), -t, result)


def _absolute_ceiling(data, configuration):
    t = abs(configuration.thresholds[0])
    positive = data >= 0
    negative = data < 0
    result = np.where(positive & (data >= t), t, data)
    return np.where(negative & (data <= -t), -t, result)


def _absolute_band(data, configuration):
    magnitudes = [abs(t) for t in configuration.thresholds]
    a, b = min(magnitudes), max(magnitudes)
    positive = data >= 0
    negative = data < 0
    result = np.where(positive & (data < a), a, data)
    result = np.where(positive & (data > b), b, result)
    result = np.where(negative & (data > -a), -a, result)
    return np.where(negative & (data < -b), -b, result)


_policies = {
    'floor': _floor,
    'ceiling': _ceiling,
    'clamp': _clamp,
    'absolute_floor': _absolute_floor,
    'absolute_ceiling': _absolute_ceiling,
    'absolute_band': _absolute_band,
}


###############################################################################
### Thresholding
###############################################################################

def threshold(source, *arguments, absolute=False, maximum=False, processes=None, verbose=False):
    """Clip data to one or two thresholds.

    Arguments
    ---------
    source : array
        Input data of any shape, integer or floating point.
    *arguments : numbers and str
        One or two thresholds and the optional modes 'max' or 'maximum' and
        'abs' or 'absolute', see :func:`resolve_configuration`.
    absolute : bool
        Keyword equivalent of the 'abs' mode.
    maximum : bool
        Keyword equivalent of the 'max' mode.
    processes : None or int
        Number of processes to use, if None use number of cpus.
    verbose : bool
        If True, print progress information.

    Returns
    -------
    sink : array
        Clipped data, same shape as the source. Integer data is returned as
        float64, floating point data keeps its dtype.

    Examples
    --------
    1. Bound all data to a minimum: ``threshold(data, 1)``
    2. Bound all data to a maximum: ``threshold(data, 1, 'max')``
    3. Keep all data away from zero, ``x >= 1`` or ``x <= -1``:
       ``threshold(data, 1, 'abs')``
    4. Bound all data to ``[-1, 1]``: ``threshold(data, 1, 'max', 'abs')``
    5. Bound all data to ``[1, 2]``: ``threshold(data, 1, 2)``
    6. Bound all data to ``[-2, -1]`` and ``[1, 2]``: ``threshold(data, 1, 2, 'abs')``
    """
    source = _initialize_source(source)
    configuration = resolve_configuration(*arguments, absolute=absolute, maximum=maximum)
    return apply_threshold(source, configuration, processes=processes, verbose=verbose)


def apply_threshold(source, configuration, processes=None, verbose=False):
    """Clip data according to a resolved configuration.

    Arguments
    ---------
    source : array
        Input data of any shape, integer or floating point.
    configuration : ThresholdConfiguration
        The thresholds and modes.
    processes : None or int
        Number of processes to use, if None use number of cpus.
    verbose : bool
        If True, print progress information.

    Returns
    -------
    sink : array
        Clipped data, a new array with the shape of the source.
    """
    if not isinstance(configuration, ThresholdConfiguration):
        raise ThresholdTypeError(f'Expected a ThresholdConfiguration, found {type(configuration).__name__}',
                                 value=configuration)
    source = _initialize_source(source)

    processes, timer = ap.initialize_processing(processes=processes, verbose=verbose, function='threshold')

    policy = _policies[configuration.policy]
    sink = np.empty(source.shape, dtype=_sink_dtype(source.dtype))
    ap.process_elementwise(lambda data: policy(data, configuration), source, sink, processes=processes)

    ap.finalize_processing(verbose=verbose, function='threshold', timer=timer)

    return sink


def _initialize_source(source):
    source = np.asarray(source)
    if not (np.issubdtype(source.dtype, np.integer) or np.issubdtype(source.dtype, np.floating)):
        raise ThresholdTypeError(f'Input data must be real valued, found dtype {source.dtype}', value=source.dtype)
    return source


def _sink_dtype(dtype):
    if np.issubdtype(dtype, np.floating):
        return dtype
    return np.dtype(float)
