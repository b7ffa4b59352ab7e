# Copyright 2026 The codeplug developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""
Logging setup for codeplug.

Importing this module configures the root logger once: a console handler
whose level comes from CODEPLUG_DEBUG (a level name or number, warnings
only by default) and, if CODEPLUG_LOG names a file, a log file at
CODEPLUG_LOG_LEVEL. log_history() captures records emitted while a block
runs, which is how operations hand their log messages back to the caller.
"""

import contextlib
import logging
import os
import sys

from codeplug import CODEPLUG_VERSION
from codeplug import platform


def version_string():
    return "codeplug %s on %s (Python %s)" % (
        CODEPLUG_VERSION, platform.get_platform().os_version_string(),
        sys.version.split()[0])


#: Map human-readable logging levels to their internal values.
log_level_names = {"critical": logging.CRITICAL,
                   "error":    logging.ERROR,
                   "warn":     logging.WARNING,
                   "info":     logging.INFO,
                   "debug":    logging.DEBUG,
                   }


def _level_from_string(value, default=logging.DEBUG):
    try:
        return int(value)
    except ValueError:
        return log_level_names.get(value.lower(), default)


class Logger(object):
    log_format = '[%(asctime)s] %(name)s - %(levelname)s: %(message)s'

    def __init__(self):
        self.logger = logging.getLogger()
        self.logger.setLevel(logging.DEBUG)
        self.LOG = logging.getLogger(__name__)

        debug = os.getenv("CODEPLUG_DEBUG")
        if debug:
            self.console_level = min(_level_from_string(debug),
                                     logging.CRITICAL)
        else:
            self.console_level = logging.WARNING
        self.console = logging.StreamHandler()
        self.console.setLevel(self.console_level)
        self.console.setFormatter(logging.Formatter(
            '%(levelname)s: %(message)s'))
        self.logger.addHandler(self.console)

        self.logfile = None
        logname = os.getenv("CODEPLUG_LOG")
        if logname:
            level = os.getenv("CODEPLUG_LOG_LEVEL")
            self.open_log_file(logname, level and _level_from_string(level)
                               or logging.DEBUG)

        if self.console_level <= logging.DEBUG:
            self.LOG.debug(version_string())

    def open_log_file(self, name, level=logging.DEBUG):
        """Log records at @level and above to @name, truncating it"""
        if self.logfile is not None:
            self.LOG.error("Already logging to %s", self.logfile.baseFilename)
            return
        self.logfile = logging.FileHandler(name, mode="w")
        self.logfile.setLevel(min(level, logging.CRITICAL))
        self.logfile.setFormatter(logging.Formatter(self.log_format))
        self.logger.addHandler(self.logfile)

    def close(self):
        for handler in (self.console, self.logfile):
            if handler is not None:
                self.logger.removeHandler(handler)
                handler.close()
        self.logfile = None

    instance: object


Logger.instance = Logger()


class LookbackHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self._history = []

    def emit(self, record):
        self._history.append(record)

    def get_history(self):
        return self._history

    def get_messages(self):
        return [record.getMessage() for record in self._history]


@contextlib.contextmanager
def log_history(level, root=None):
    root = logging.getLogger(root)
    handler = LookbackHandler()
    handler.setLevel(level)
    try:
        root.addHandler(handler)
        yield handler
    finally:
        root.removeHandler(handler)
