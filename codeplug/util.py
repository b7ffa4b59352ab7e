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

import struct


def hexprint(data, addrfmt=None, block_size=8):
    """Return a hexdump-like encoding of @data"""
    if addrfmt is None:
        addrfmt = '%(addr)06x'

    out = ""

    blocks = len(data) // block_size
    if len(data) % block_size:
        blocks += 1

    for block in range(0, blocks):
        addr = block * block_size
        try:
            out += addrfmt % {'addr': addr}
        except (OverflowError, ValueError, TypeError, KeyError):
            out += "%06x" % addr
        out += ': '

        chunk = data[addr:addr + block_size]
        for j in range(0, block_size):
            if j < len(chunk):
                out += "%02x " % chunk[j]
            else:
                out += "   "

        out += "  "

        for char in chunk:
            if 0x20 < char < 0x7E:
                out += chr(char)
            else:
                out += "."

        out += "\n"

    return out


def ascii_field(text, width):
    """Pack @text into a zero-padded field of @width bytes

    At most width-1 bytes of text are kept so the field is always null
    terminated. Characters outside of 7-bit ASCII become '?'.
    """
    raw = (text or "").encode('ascii', errors='replace')[:width - 1]
    return raw.ljust(width, b"\x00")


def field_string(raw):
    """Return the text of a null-terminated ASCII field"""
    return raw.split(b"\x00", 1)[0].decode('ascii', errors='replace')


def pack_u24(value, bigendian=True):
    """Pack @value into three bytes"""
    if bigendian:
        return struct.pack(">I", value & 0xFFFFFF)[1:]
    else:
        return struct.pack("<I", value & 0xFFFFFF)[:3]


def unpack_u24(data, bigendian=True):
    """Unpack three bytes of @data into an int"""
    if bigendian:
        return struct.unpack(">I", b"\x00" + bytes(data[:3]))[0]
    else:
        return struct.unpack("<I", bytes(data[:3]) + b"\x00")[0]
