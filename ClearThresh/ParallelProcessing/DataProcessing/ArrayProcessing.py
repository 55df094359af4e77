# -*- coding: utf-8 -*-
"""
ArrayProcessing
===============

Tools for parallel processing of large arrays.

Note
----
This module provides an interface to apply elementwise numpy routines to
large arrays block by block. The blocks are contiguous ranges of the
flattened arrays and are processed by a pool of threads, numpy releases the
GIL for the heavy lifting.

Elementwise functions have no dependency between elements so the result does
not depend on the number of processes or the block layout.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

from concurrent.futures import ThreadPoolExecutor

import numpy as np

import ClearThresh.Settings as settings
import ClearThresh.Utils.Timer as tmr
from ClearThresh.Utils.utilities import sanitize_n_processes


###############################################################################
### Default Machine Settings
###############################################################################

default_processes = sanitize_n_processes(settings.machine_config['parallel_processing']['processes'])
"""Default number of processes to use"""

default_blocks_per_process = settings.machine_config['parallel_processing']['blocks_per_process']
"""Default number of blocks per process to split the data.

Note
----
10 blocks per process is a good choice.
"""

default_cutoff = settings.machine_config['parallel_processing']['cutoff']
"""Default size of array below which ordinary numpy is used.

Note
----
Ideally test this on your machine for different array sizes.
"""


###############################################################################
### Elementwise processing
###############################################################################

def process_elementwise(function, source, sink, processes=None, blocks_per_process=None, cutoff=None):
    """Apply an elementwise function to the source and write the result to the sink.

    Arguments
    ---------
    function : callable
        Function taking a 1d array and returning a 1d array of the same size.
    source : array
        The source array.
    sink : array
        The result array, same shape as the source and C-contiguous.
    processes : None or int
        Number of processes to use, if None use number of cpus.
    blocks_per_process : None or int
        Number of blocks per process, if None use the default.
    cutoff : None or int
        Size below which the array is processed in a single call.

    Returns
    -------
    sink : array
        The sink array.
    """
    if source.shape != sink.shape:
        raise ValueError(f'Source and sink shapes differ: {source.shape} != {sink.shape}')
    if not sink.flags['C_CONTIGUOUS']:
        raise ValueError('Sink array must be C-contiguous')

    processes = sanitize_n_processes(processes if processes is not None else default_processes)
    if blocks_per_process is None:
        blocks_per_process = default_blocks_per_process
    if cutoff is None:
        cutoff = default_cutoff

    source_flat = np.ravel(source)  # view whenever possible
    sink_flat = sink.reshape(-1)

    if processes == 1 or source_flat.size < cutoff:
        sink_flat[:] = function(source_flat)
        return sink

    def _process_block(block_range):
        start, stop = block_range
        sink_flat[start:stop] = function(source_flat[start:stop])

    ranges = block_ranges(source_flat.size, processes=processes, blocks_per_process=blocks_per_process)
    with ThreadPoolExecutor(max_workers=processes) as executor:
        # list() to propagate exceptions raised in the workers
        list(executor.map(_process_block, ranges))

    return sink


def block_ranges(size, processes, blocks_per_process=None):
    """Split a range of size elements into contiguous blocks.

    Arguments
    ---------
    size : int
        Number of elements.
    processes : int
        Number of processes.
    blocks_per_process : None or int
        Number of blocks per process.

    Returns
    -------
    ranges : list of tuple
        The (start, stop) ranges in increasing order.
    """
    if blocks_per_process is None:
        blocks_per_process = default_blocks_per_process
    n_blocks = max(1, min(size, processes * blocks_per_process))
    edges = np.linspace(0, size, n_blocks + 1).astype(int)
    return [(int(start), int(stop)) for start, stop in zip(edges[:-1], edges[1:]) if stop > start]


###############################################################################
### Helpers
###############################################################################

def initialize_processing(processes=None, verbose=False, function=None):
    """Initialize parallel array processing.

    Arguments
    ---------
    processes : int, 'serial' or None
        The number of processes to use. If None use number of cpus.
    verbose : bool
        If True, print progress information.
    function : str or None
        The name of the function.

    Returns
    -------
    processes : int
        The number of processes.
    timer : Timer
        A timer for the processing.
    """
    if processes is None:
        processes = default_processes
    if processes == 'serial':
        processes = 1
    processes = sanitize_n_processes(processes)

    if verbose:
        if function:
            print(f'{function}: initialized, processes={processes}.')
        timer = tmr.Timer()
    else:
        timer = None

    return processes, timer


def finalize_processing(verbose=False, function=None, timer=None):
    """Finalize parallel array processing.

    Arguments
    ---------
    verbose : bool
        If True, print progress information.
    function : str or None
        The name of the function.
    timer : Timer or None
        A processing timer.
    """
    if verbose and timer is not None:
        timer.print_elapsed_time(head=function)
