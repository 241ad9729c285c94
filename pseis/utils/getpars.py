"""SU style ``key=value`` parameters.

Parameters are given on command line, e.g. ``sucmp a.su b.su limit=1e-3``,
or in a par file given by ``par=file``. A par file holds ``key=value``
pairs separated by whitespace or new lines, ``#`` starts a comment. Par files
ending with ``.yaml`` are loaded as a yaml mapping instead.

Values on command line take precedence over values from par files.
"""
import logging
import shlex
from typing import Dict, List, Optional, Set

from pseis.errors import ConfigurationError

import yaml

__all__ = ["GetPars", "parse_pars", "load_parfile"]

logger = logging.getLogger(__name__)


def parse_pars(args: List[str]) -> Dict[str, str]:
    """Parse ``key=value`` strings to dict, later keys win."""
    pars = {}
    for arg in args:
        if "=" not in arg:
            raise ConfigurationError(f"Bad parameter `{arg}`, expect key=value")
        key, value = arg.split("=", 1)
        if not key:
            raise ConfigurationError(f"Bad parameter `{arg}`, empty key")
        pars[key] = value
    return pars


def load_parfile(parfile: str) -> Dict[str, str]:
    """Load parameters from par file."""
    try:
        with open(parfile, "r") as fid:
            content = fid.read()
    except OSError as e:
        raise ConfigurationError(f"Can not read par file {parfile}: {e}") from e

    if parfile.endswith((".yaml", ".yml")):
        config = yaml.load(content, Loader=yaml.SafeLoader) or {}
        if not isinstance(config, dict):
            raise ConfigurationError(f"{parfile} should be a yaml mapping")
        return {str(k): str(v) for k, v in config.items()}

    args = shlex.split(content, comments=True)
    return parse_pars(args)


class GetPars:
    """Get parameters by name.

    Every parameter given should be read by one of the getpar methods,
    call :meth:`checkpars` after all of them to reject unknown ones.
    """

    def __init__(self, args: Optional[List[str]] = None):
        cmdline = parse_pars(args or [])
        self._pars = {}
        if "par" in cmdline:
            parfile = cmdline.pop("par")
            logger.debug(f"load parameters from {parfile}")
            self._pars.update(load_parfile(parfile))
        self._pars.update(cmdline)
        self._used: Set[str] = set()

    def __contains__(self, name):
        return name in self._pars

    def __repr__(self):
        return f"GetPars({self._pars})"

    def getparstring(self, name: str) -> Optional[str]:
        self._used.add(name)
        return self._pars.get(name)

    def getparfloat(self, name: str) -> Optional[float]:
        value = self.getparstring(name)
        if value is None:
            return None
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(
                f"Parameter {name}={value} is not a number"
            ) from None

    def getparint(self, name: str) -> Optional[int]:
        value = self.getparstring(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(
                f"Parameter {name}={value} is not an integer"
            ) from None

    def checkpars(self):
        unknown = sorted(set(self._pars) - self._used)
        if unknown:
            raise ConfigurationError(f"Unknown parameter(s): {', '.join(unknown)}")
