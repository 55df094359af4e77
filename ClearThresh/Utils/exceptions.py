"""
Custom exceptions for ``ClearThresh``
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'


class ClearThreshException(Exception):
    """
    Base exception for all exceptions in ClearThresh
    """
    pass


class ClearThreshValueError(ClearThreshException, ValueError):
    """
    Base exception for all exceptions related to value errors
    """
    pass


class ClearThreshTypeError(ClearThreshException, TypeError):
    """
    Base exception for all exceptions related to argument types
    """
    pass


class ConfigError(ClearThreshValueError):
    """
    Exception raised when the thresholds and modes passed to a thresholding
    routine do not form a valid configuration (missing, excess or NaN thresholds)
    """
    pass


class ThresholdTypeError(ClearThreshTypeError):
    """
    Exception raised when the data or a threshold is not a real number
    (e.g. complex, boolean or object arrays)
    """
    def __init__(self, message, value=None):
        self.value = value
        super().__init__(message)


class ConfigNotFoundError(ClearThreshException, IOError):
    """
    Exception raised when a configuration file is not found or cannot be parsed
    """
    pass
