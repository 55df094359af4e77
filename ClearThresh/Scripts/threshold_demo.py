"""
Demo of the thresholding policies.

Plots the six documented thresholding configurations applied to a ramp
(line plots) and to a 2d grid (surface plots).

Usage:
    clearthresh-demo [--no-lines] [--no-surfaces] [--no-style] [--output DIR]
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import argparse
import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

import ClearThresh
import ClearThresh.Settings as settings
from ClearThresh.Visualization.Matplotlib import PlotUtils as plot_utils

logger = logging.getLogger('clearthresh-demo')


def setup_logging(verbose=False):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
        logger.addHandler(handler)


def sample_range(start, stop, step):
    """Inclusive range of samples, like ``start:step:stop``"""
    n_samples = int(round((stop - start) / step)) + 1
    return np.linspace(start, stop, n_samples)


def make_figures(display_cfg, line_plots=True, surface_plots=True, use_style=True, processes=None):
    """
    Create the demo figures.

    Returns
    -------
    figures: dict
        Figures by name ('lines', 'surfaces').
    """
    demo_cfg = display_cfg['demo']
    style = plot_utils.plot_style(display_cfg['style']) if use_style else None

    figures = {}
    if line_plots:
        data = sample_range(*demo_cfg['line_range'])
        logger.debug('Line plots over %d samples', data.size)
        figures['lines'] = plot_utils.plot_threshold_lines(data, style=style, processes=processes)
    if surface_plots:
        xx, yy = np.meshgrid(sample_range(*demo_cfg['surface_x_range']),
                             sample_range(*demo_cfg['surface_y_range']), indexing='ij')
        logger.debug('Surface plots over a %r grid', xx.shape)
        colors = display_cfg['style']['surface_colors'] if use_style else None
        figures['surfaces'] = plot_utils.plot_threshold_surfaces(xx, yy, xx, style=style, colors=colors,
                                                                 alpha=demo_cfg['surface_alpha'],
                                                                 processes=processes)
    return figures


def main(argv=None):
    display_cfg = settings.display_config
    parser = argparse.ArgumentParser(prog='clearthresh-demo',
                                     description='Plot the thresholding policies of ClearThresh',
                                     epilog='Example: clearthresh-demo --no-surfaces -o figures')

    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {ClearThresh.__version__}')
    parser.add_argument('--no-lines', dest='line_plots', action='store_false',
                        default=display_cfg['demo']['line_plots'], help='Skip the line plots.')
    parser.add_argument('--no-surfaces', dest='surface_plots', action='store_false',
                        default=display_cfg['demo']['surface_plots'], help='Skip the surface plots.')
    parser.add_argument('--no-style', dest='use_style', action='store_false',
                        help='Use the matplotlib defaults instead of the configured style.')
    parser.add_argument('-o', '--output', type=Path, default=None,
                        help='Directory to save the figures to as png instead of showing them.')
    parser.add_argument('-p', '--processes', type=int, default=None,
                        help='Number of processes used for the thresholding.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Turns on verbose mode.')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if not (args.line_plots or args.surface_plots):
        logger.warning('Nothing to plot')
        return 0

    figures = make_figures(display_cfg, line_plots=args.line_plots, surface_plots=args.surface_plots,
                           use_style=args.use_style, processes=args.processes)

    if args.output is not None:
        args.output.mkdir(parents=True, exist_ok=True)
        for name, figure in figures.items():
            f_path = args.output / f'threshold_{name}.png'
            figure.savefig(f_path, bbox_inches='tight')
            logger.info('Saved %s', f_path)
    else:
        plt.show()
    for figure in figures.values():
        plt.close(figure)
    return 0


if __name__ == '__main__':
    sys.exit(main())
