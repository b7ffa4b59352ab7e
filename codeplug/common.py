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

import enum
import re

# 50 Tones
TONES = (
    67.0, 69.3, 71.9, 74.4, 77.0, 79.7, 82.5,
    85.4, 88.5, 91.5, 94.8, 97.4, 100.0, 103.5,
    107.2, 110.9, 114.8, 118.8, 123.0, 127.3,
    131.8, 136.5, 141.3, 146.2, 151.4, 156.7,
    159.8, 162.2, 165.5, 167.9, 171.3, 173.8,
    177.3, 179.9, 183.5, 186.2, 189.9, 192.8,
    196.6, 199.5, 203.5, 206.5, 210.7, 218.1,
    225.7, 229.1, 233.6, 241.8, 250.3, 254.1,
)

# 104 DTCS Codes
DTCS_CODES = (
    23,  25,  26,  31,  32,  36,  43,  47,  51,  53,  54,
    65,  71,  72,  73,  74,  114, 115, 116, 122, 125, 131,
    132, 134, 143, 145, 152, 155, 156, 162, 165, 172, 174,
    205, 212, 223, 225, 226, 243, 244, 245, 246, 251, 252,
    255, 261, 263, 265, 266, 271, 274, 306, 311, 315, 325,
    331, 332, 343, 346, 351, 356, 364, 365, 371, 411, 412,
    413, 423, 431, 432, 445, 446, 452, 454, 455, 462, 464,
    465, 466, 503, 506, 516, 523, 526, 532, 546, 565, 606,
    612, 624, 627, 631, 632, 654, 662, 664, 703, 712, 723,
    731, 732, 734, 743, 754,
)

DTMF_CHARS = "0123456789ABCD*#"

# Largest DMR ID, used as the all-call number
MAX_DMR_ID = 0xFFFFFF
ALL_CALL_ID = 16777215
# Highest number of a group or private call
MAX_CALL_ID = 16776415


class Special(enum.Enum):
    """Distinguished values that stand in for a channel reference"""
    SELECTED = "Sel"


SELECTED = Special.SELECTED


def VALIDTONE(v):
    """A disabled tone (0), a CTCSS tone in Hz or a DCS code like D023N"""
    if v == 0:
        return True
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return float(v) in TONES
    if isinstance(v, str):
        match = re.match(r'^D([0-7]{3})([NI]?)$', v)
        return bool(match) and int(match.group(1)) in DTCS_CODES
    return False


def format_tone(v):
    """Format a tone code for display, '-' when disabled"""
    if v == 0:
        return "-"
    if isinstance(v, (int, float)):
        return "%.1f" % v
    return str(v)


def BOOLEAN(v):
    return isinstance(v, bool)


def NAME(v):
    return isinstance(v, str) and v.strip() != ""


def STRING(v):
    return isinstance(v, str)


def INT(min=0, max=None):
    def checkint(v):
        if isinstance(v, bool) or not isinstance(v, int):
            return False
        if v < min:
            return False
        return max is None or v <= max

    return checkint


def POSITIVE(v):
    return (isinstance(v, (int, float)) and not isinstance(v, bool) and
            v > 0)


def ENUM(cls):
    def checkenum(v):
        return isinstance(v, cls)

    return checkenum


def DTMF(v):
    return (isinstance(v, str) and v != "" and
            all(c in DTMF_CHARS for c in v.upper()))


def format_freq(mhz):
    """Format a frequency in MHz with four decimals (100 Hz resolution)"""
    return "%.4f" % (round(mhz * 10000) / 10000)


def same_freq(a, b):
    """Return True if two frequencies in MHz match to within 1 Hz"""
    return abs(a - b) < 0.000001


def CALLSIGN(v):
    return isinstance(v, str) and bool(re.match(r'^[A-Za-z0-9]{1,8}$', v))
