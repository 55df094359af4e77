"""
Small helpers used across ClearThresh.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import multiprocessing


def is_iterable(obj):
    try:
        _ = iter(obj)
        return True
    except TypeError:
        return False


def sanitize_n_processes(processes):
    """
    Convert a number of processes to a usable positive count.

    None means all cpus, negative numbers are counted back from the number of
    cpus (-1 leaves one cpu free).
    """
    if processes is None:
        return multiprocessing.cpu_count()
    if processes < 0:
        processes = multiprocessing.cpu_count() + processes
    processes = max(processes, 1)
    return processes
