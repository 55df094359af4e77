# -*- coding: utf-8 -*-
"""
PlotUtils Module
================

Plotting routines to inspect the thresholding policies, based on matplotlib.

The plot style is an explicit rc dictionary (see :func:`plot_style`) applied
within :func:`matplotlib.pyplot.rc_context`, the global matplotlib defaults
are never modified.

Note
----
    This module is using matplotlib.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import numpy as np

import matplotlib.pyplot as plt
from matplotlib import cycler
from matplotlib.patches import Patch

from ClearThresh.ImageProcessing.Thresholding import threshold


DEMO_CASES = [
    ('Minimum value of 1', (1,)),
    ('Maximum value of 1', (1, 'max')),
    ('Thresholds -1 and 1 using absolute value 1', (1, 'abs')),
    ('Bounded to [-1, 1] using absolute value 1', (1, 'max', 'abs')),
    ('Bounded to [1, 2]', (1, 2)),
    ('Bounded to [-2, -1] and [1, 2]', (1, 2, 'abs')),
]
"""The documented thresholding configurations as (label, arguments) pairs."""


###############################################################################
# ## Style
###############################################################################

def plot_style(style_cfg):
    """Convert the style section of the display configuration to matplotlib rc parameters.

    Arguments
    ---------
    style_cfg : dict
        The style parameters, see ``default_display_params.cfg``.

    Returns
    -------
    rc : dict
        The rc parameters to use with :func:`matplotlib.pyplot.rc_context`.
    """
    colors = np.asarray(style_cfg['colors'], dtype=float) / 255
    prop_cycle = cycler(linestyle=list(style_cfg['line_styles'])) * cycler(color=[tuple(c) for c in colors])
    return {
        'figure.figsize': tuple(style_cfg['figure_size']),
        'font.size': style_cfg['text_font_size'],
        'axes.labelsize': style_cfg['axes_font_size'],
        'xtick.labelsize': style_cfg['axes_font_size'],
        'ytick.labelsize': style_cfg['axes_font_size'],
        'axes.linewidth': style_cfg['axes_line_width'],
        'lines.linewidth': style_cfg['line_width'],
        'axes.prop_cycle': prop_cycle,
    }


###############################################################################
# ## Threshold plots
###############################################################################

def plot_threshold_lines(data, cases=None, style=None, processes=None):
    """Plot the thresholded values of 1d data against the original values.

    Arguments
    ---------
    data : array
        1d input values, e.g. ``np.arange(-5, 5, 0.01)``.
    cases : list of (str, tuple) or None
        Labels and threshold arguments, if None use :const:`DEMO_CASES`.
    style : dict or None
        Matplotlib rc parameters, if None use the current defaults.
    processes : None or int
        Number of processes for the thresholding.

    Returns
    -------
    figure : Figure
        The figure. It is registered with pyplot, close it with
        ``plt.close(figure)`` when done.
    """
    if cases is None:
        cases = DEMO_CASES
    data = np.asarray(data)
    if data.ndim != 1:
        raise ValueError(f'Line plots expect 1d data, found {data.ndim}d!')

    with plt.rc_context(style or {}):
        figure, ax = plt.subplots()
        ax.grid(True)
        ax.plot(data, data, label='Original values')
        for label, arguments in cases:
            ax.plot(data, threshold(data, *arguments, processes=processes), '--', label=label)
        ax.legend(loc='center left', bbox_to_anchor=(1.02, 0.5))
        figure.subplots_adjust(right=0.7)
    return figure


def plot_threshold_surfaces(xx, yy, data, cases=None, style=None, colors=None, alpha=0.5, processes=None):
    """Plot the thresholded values of 2d data as surfaces.

    Arguments
    ---------
    xx, yy : array
        2d grid coordinates, e.g. from ``np.meshgrid(x, y, indexing='ij')``.
    data : array
        2d input values on the grid.
    cases : list of (str, tuple) or None
        Labels and threshold arguments, if None use :const:`DEMO_CASES`.
    style : dict or None
        Matplotlib rc parameters, if None use the current defaults.
    colors : list or None
        One face color per case, if None use the color cycle.
    alpha : float
        Transparency of the thresholded surfaces.
    processes : None or int
        Number of processes for the thresholding.

    Returns
    -------
    figure : Figure
        The figure. It is registered with pyplot, close it with
        ``plt.close(figure)`` when done.
    """
    if cases is None:
        cases = DEMO_CASES
    data = np.asarray(data)
    if not (np.shape(xx) == np.shape(yy) == data.shape) or data.ndim != 2:
        raise ValueError(f'Surface plots expect 2d data on the grid, found shapes '
                         f'{np.shape(xx)}, {np.shape(yy)}, {data.shape}!')

    with plt.rc_context(style or {}):
        figure = plt.figure()
        ax = figure.add_subplot(projection='3d')
        if colors is None:
            colors = [f'C{i + 1}' for i in range(len(cases))]
        if len(colors) < len(cases):
            raise ValueError(f'Need one color per case, found {len(colors)} for {len(cases)} cases!')

        ax.plot_surface(xx, yy, data, color='C0')
        handles = [Patch(color='C0', label='Original values')]
        for (label, arguments), color in zip(cases, colors):
            clipped = threshold(data, *arguments, processes=processes)
            ax.plot_surface(xx, yy, clipped, color=color, edgecolor=color, alpha=alpha)
            handles.append(Patch(color=color, alpha=alpha, label=label))
        ax.legend(handles=handles, loc='center left', bbox_to_anchor=(1.05, 0.5))
    return figure
