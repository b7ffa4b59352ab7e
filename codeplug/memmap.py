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

from codeplug import util


class MemoryMap:
    """
    A pythonic memory map interface over a fixed-size byte image
    """

    def __init__(self, data):
        self._data = bytearray(data)

    @classmethod
    def filled(cls, size, byteval=b"\xff"):
        """Return a new map of @size bytes, all set to @byteval"""
        assert isinstance(byteval, bytes) and len(byteval) == 1
        return cls(byteval * size)

    def printable(self, start=None, end=None):
        """Return a printable representation of the memory map"""
        if not start:
            start = 0

        if not end:
            end = len(self._data)

        return util.hexprint(self._data[start:end])

    def get(self, start, length=1):
        """Return a chunk of memory of @length bytes from @start"""
        if start == -1:
            return bytes(self._data[start:])
        else:
            return bytes(self._data[start:start+length])

    def set(self, pos, value):
        """Set a chunk of memory at @pos to @value"""
        if isinstance(value, int):
            self._data[pos] = value & 0xFF
        elif isinstance(value, (bytes, bytearray)):
            if pos + len(value) > len(self._data):
                raise IndexError("Write of %i bytes at 0x%06x exceeds "
                                 "map size 0x%06x" % (len(value), pos,
                                                      len(self._data)))
            self._data[pos:pos + len(value)] = value
        else:
            raise ValueError("Unsupported type %s for value" %
                             type(value).__name__)

    def fill(self, start, length, byteval=b"\xff"):
        """Set @length bytes from @start to @byteval"""
        self.set(start, byteval * length)

    def get_packed(self):
        """Return the entire memory map as raw data"""
        return bytes(self._data)

    def __len__(self):
        return len(self._data)

    def __getitem__(self, pos):
        if isinstance(pos, slice):
            return bytes(self._data[pos])
        return self._data[pos]

    def __setitem__(self, pos, value):
        """
        NB: Setting a value of more than one byte overwrites
        len(value) bytes of the map, unlike a typical array!
        """
        self.set(pos, value)

    def __repr__(self):
        return '<MemoryMap %i bytes>' % len(self._data)
