from .defaults import DEFAULTS
from .settings import CONFIG_MODULE_ENVVAR, TRACE_LEVELS, Settings

__all__ = ["DEFAULTS", "CONFIG_MODULE_ENVVAR", "TRACE_LEVELS", "Settings"]
