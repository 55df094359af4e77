# -*- coding: utf-8 -*-
"""
Settings
========

Module to set *ClearThresh's* internal parameters.

The machine parameters (parallel processing) and display parameters
(demo plots) are read once at import from ``~/.clearthresh/`` if present,
otherwise from the defaults shipped in :mod:`ClearThresh.config`.

See Also
--------
    * :const:`machine_config`
    * :const:`display_config`
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import os

from ClearThresh.config.config_loader import ConfigLoader


###############################################################################
# ## Paths
###############################################################################

clearthresh_path = os.path.abspath(os.path.dirname(__file__))
"""Absolute path to the ClearThresh's root folder."""


###############################################################################
# ## Configuration
###############################################################################

config_loader = ConfigLoader()

machine_config = config_loader.get_cfg('machine')
"""Parallel processing parameters."""

display_config = config_loader.get_cfg('display')
"""Demo and plotting parameters."""
