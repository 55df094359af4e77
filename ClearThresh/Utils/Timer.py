# -*- coding: utf-8 -*-
"""
Timer
=====

Timing of the verbose array processing routines.

Example
-------

>>> import ClearThresh.Utils.Timer as tmr
>>> timer = tmr.Timer()
>>> timer.print_elapsed_time('threshold')
threshold: elapsed time: 0:00:00.000
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import time


class Timer:
    """Stop watch started at creation."""

    def __init__(self):
        self.time = time.time()

    def elapsed_time(self, head=None):
        """Elapsed time as 'head: elapsed time: h:mm:ss.mmm'."""
        delta_t = self.format_time(time.time() - self.time)
        if head is not None:
            return f'{head}: elapsed time: {delta_t}'
        return f'Elapsed time: {delta_t}'

    def print_elapsed_time(self, head=None):
        print(self.elapsed_time(head=head), flush=True)

    @staticmethod
    def format_time(t):
        """Format time in seconds as 'hours:minutes:seconds.milliseconds'."""
        m, s = divmod(t, 60)
        h, m = divmod(m, 60)
        seconds = int(s)
        millis = int((s - seconds) * 1000)
        return f"{int(h):d}:{int(m):02d}:{seconds:02d}.{millis:03d}"
