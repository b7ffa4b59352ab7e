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


class GraphConsistencyError(Exception):
    """A reference or index lookup does not match the configuration graph"""
    pass


class ValidationError(ValueError):
    """An invalid value was assigned to an entity field"""

    def __init__(self, field, msg=None):
        self.field = field
        super().__init__(msg or "Invalid value for `%s'" % field)


class EncodingFailure(Exception):
    """A binary image could not be encoded at all"""
    pass


class CapacityExceeded(UserWarning):
    """The source database did not fit and was truncated"""
    pass


class QueryFilterError(SyntaxError):
    """A user selection query could not be parsed or applied"""
    pass


class DownloadError(Exception):
    """A remote database could not be fetched"""
    pass
