# -*- coding: utf-8 -*-
"""
Utils
=====

Helper modules shared by the ClearThresh subpackages.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'
