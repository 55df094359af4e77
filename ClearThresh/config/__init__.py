"""
This subpackage handles the text configuration files for ClearThresh.

The configuration files store the machine parameters (parallel processing)
and the display parameters (demo plots and their style).

This subpackage contains the default configuration files and the functions to
parse them.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'
