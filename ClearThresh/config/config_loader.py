"""
This module provides functions to load configuration files for ClearThresh.

The configuration files are stored as configobj files with python literals
as values (``unrepr=True``). User files in ``~/.clearthresh/`` take precedence
over the defaults installed with the package; keys missing from a user file
are filled in from the defaults.
"""
__author__ = 'ClearThresh developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2020 by the ClearThresh developers'

import inspect
import logging
import os
from pathlib import Path

import configobj

from ClearThresh.Utils.exceptions import ConfigNotFoundError

logger = logging.getLogger(__name__)

INSTALL_CFG_DIR = Path(inspect.getfile(inspect.currentframe())).parent.absolute()  # Where this file resides (w cfgs)
CLEARTHRESH_CFG_DIR = Path('~/.clearthresh/').expanduser()

CONFIG_NAMES = ['machine', 'display']


def clean_path(path):
    return os.path.normpath(os.path.expanduser(path))


def get_configobj_cfg(cfg_path, must_exist=True):
    """
    Read a configobj file.

    Parameters
    ----------
    cfg_path: str or Path
        The path to the file.
    must_exist: bool
        If True, a missing file raises a ConfigNotFoundError, otherwise an
        empty config bound to that path is returned.

    Returns
    -------
    configobj.ConfigObj
    """
    cfg_path = clean_path(str(cfg_path))
    try:
        return configobj.ConfigObj(cfg_path, encoding="UTF8", indent_type='    ', unrepr=True, file_error=must_exist)
    except IOError as err:
        raise ConfigNotFoundError(f'Could not find config file "{cfg_path}"') from err
    except configobj.ConfigObjError as err:
        raise ConfigNotFoundError(f'Could not read config file "{cfg_path}", '
                                  f'some errors were encountered: "{err}"') from err


def patch_cfg(cfg, default_cfg):
    """Add the keys of default_cfg that are missing in cfg, recursively"""
    for k, v in default_cfg.items():
        if k not in cfg.keys():
            cfg[k] = v  # everything below will match by definition
        else:
            if isinstance(v, dict):
                patch_cfg(cfg[k], v)


class ConfigLoader(object):
    loader_functions = {
        '.cfg': get_configobj_cfg,
        '.ini': get_configobj_cfg,
    }
    supported_exts = tuple(loader_functions.keys())
    default_dir = CLEARTHRESH_CFG_DIR

    def __init__(self, src_dir=None):
        self._src_dir = None
        self.src_dir = src_dir if src_dir is not None else self.default_dir

    @property
    def src_dir(self):
        return self._src_dir

    @src_dir.setter
    def src_dir(self, value):
        self._src_dir = Path(value).expanduser()

    def get_cfg_path(self, cfg_name, must_exist=True):
        """
        Get the path to the user configuration file with the given name.
        Several extensions are tried in order of preference.

        Parameters
        ----------
        cfg_name: str
            The name (without params and extension) of the configuration file
        must_exist: bool
            Whether the file must exist. If missing and True, a FileNotFoundError is raised,
            otherwise the first possible option is returned.

        Returns
        -------
        Path
            The path to the configuration file
        """
        cfg_name = self.strip_params_suffix(cfg_name)
        for ext in self.supported_exts:
            cfg_path = self.src_dir / f'{cfg_name}_params{ext}'
            if cfg_path.exists():
                return cfg_path
        if not must_exist:
            return self.src_dir / f'{cfg_name}_params{self.supported_exts[0]}'
        raise FileNotFoundError(f'Could not find file {cfg_name} in {self.src_dir}')

    def get_cfg(self, cfg_name):
        """
        Get the configuration with the given name.

        The user file is used if it exists and patched with the package defaults,
        otherwise the package defaults are returned.
        """
        default_cfg = self.get_cfg_from_path(self.get_default_path(cfg_name))
        cfg_path = self.get_cfg_path(cfg_name, must_exist=False)
        if not cfg_path.exists():
            logger.debug('No user config for "%s" in %s, using defaults', cfg_name, self.src_dir)
            return default_cfg
        cfg = self.get_cfg_from_path(cfg_path)
        patch_cfg(cfg, default_cfg)
        return cfg

    @staticmethod
    def get_cfg_from_path(cfg_path):
        cfg_path = Path(cfg_path)
        if cfg_path.suffix not in ConfigLoader.loader_functions:
            raise ValueError(f'Unsupported config extension "{cfg_path.suffix}", '
                             f'expected one of {ConfigLoader.supported_exts}')
        return ConfigLoader.loader_functions[cfg_path.suffix](cfg_path)

    @staticmethod
    def strip_params_suffix(cfg_name):
        if cfg_name.endswith('_params'):
            cfg_name = cfg_name[:-len('_params')]
        return cfg_name

    @staticmethod
    def get_default_path(cfg_name, must_exist=True):
        cfg_name = ConfigLoader.strip_params_suffix(cfg_name)
        if cfg_name not in CONFIG_NAMES:
            raise ValueError(f'Unknown config "{cfg_name}", expected one of {CONFIG_NAMES}')
        paths_checked = []
        for ext in ConfigLoader.supported_exts:
            cfg_path = INSTALL_CFG_DIR / f'default_{cfg_name}_params{ext}'
            paths_checked.append(cfg_path)
            if cfg_path.exists():
                return cfg_path
        if must_exist:
            raise FileNotFoundError(f'Could not find file {cfg_name}, checked {paths_checked}')
        return paths_checked[0]
