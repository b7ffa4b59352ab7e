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
import logging

from codeplug import common, objects

LOG = logging.getLogger(__name__)


class Power(enum.Enum):
    MAX = "Max"
    HIGH = "High"
    MID = "Mid"
    LOW = "Low"
    MIN = "Min"


class AnalogAdmit(enum.Enum):
    NONE = "-"
    FREE = "Free"
    TONE = "Tone"


class DigitalAdmit(enum.Enum):
    NONE = "-"
    FREE = "Free"
    COLOR_CODE = "Color"


class Bandwidth(enum.Enum):
    NARROW = 12.5
    WIDE = 25.0


class TimeSlot(enum.Enum):
    TS1 = 1
    TS2 = 2


class Channel(objects.ConfigObject):
    """Base class of analog and digital channels

    Frequencies are in MHz. Extra keyword arguments are assigned as
    attributes, so they are validated like any later edit.
    """

    ID_PREFIX = "ch"

    rx_frequency: float = 0.0
    tx_frequency: float = 0.0
    power: Power = Power.HIGH
    tx_timeout: int = 0
    rx_only: bool = False

    scan_list = objects.Reference("ScanList")

    _valid_map = dict(objects.ConfigObject._valid_map, **{
        "rx_frequency": common.POSITIVE,
        "tx_frequency": common.POSITIVE,
        "power": common.ENUM(Power),
        "tx_timeout": common.INT(0),
        "rx_only": common.BOOLEAN,
    })

    def __init__(self, name, rx_frequency, tx_frequency=None, **kwargs):
        super().__init__(name)
        self.rx_frequency = rx_frequency
        if tx_frequency is None:
            tx_frequency = rx_frequency
        self.tx_frequency = tx_frequency
        for key, value in kwargs.items():
            setattr(self, key, value)

    def is_digital(self):
        return False

    def tx_offset(self):
        """Return the transmit offset in MHz (negative for a down shift)"""
        return self.tx_frequency - self.rx_frequency


class AnalogChannel(Channel):
    admit: AnalogAdmit = AnalogAdmit.NONE
    squelch: int = 1
    rx_tone = 0
    tx_tone = 0
    bandwidth: Bandwidth = Bandwidth.NARROW

    aprs_system = objects.Reference("APRSSystem")

    _valid_map = dict(Channel._valid_map, **{
        "admit": common.ENUM(AnalogAdmit),
        "squelch": common.INT(0, 10),
        "rx_tone": common.VALIDTONE,
        "tx_tone": common.VALIDTONE,
        "bandwidth": common.ENUM(Bandwidth),
    })


class DigitalChannel(Channel):
    admit: DigitalAdmit = DigitalAdmit.COLOR_CODE
    color_code: int = 1
    time_slot: TimeSlot = TimeSlot.TS1

    rx_group_list = objects.Reference("RXGroupList")
    tx_contact = objects.Reference("DigitalContact")
    pos_system = objects.Reference("GPSSystem", "APRSSystem")
    roaming_zone = objects.Reference("RoamingZone")
    radio_id = objects.Reference("RadioID")

    _valid_map = dict(Channel._valid_map, **{
        "admit": common.ENUM(DigitalAdmit),
        "color_code": common.INT(0, 15),
        "time_slot": common.ENUM(TimeSlot),
    })

    def is_digital(self):
        return True

    def _reference_deleted(self, name, target):
        if name == "rx_group_list":
            LOG.warning('Channel %s lost its receive group list %s',
                        self.name, target.name)
        else:
            super()._reference_deleted(name, target)


class ChannelList(objects.ObjectList):
    KINDS = ("Channel",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="channels")

    def digital_channels(self):
        return [x for x in self if x.is_digital()]

    def analog_channels(self):
        return [x for x in self if not x.is_digital()]

    def find_digital_channel(self, rx_frequency, tx_frequency, time_slot,
                             color_code):
        """Return the first digital channel matching all criteria, or None

        Frequencies match to within 1 Hz.
        """
        if not isinstance(time_slot, TimeSlot):
            time_slot = TimeSlot(time_slot)
        for channel in self.digital_channels():
            if (common.same_freq(channel.rx_frequency, rx_frequency) and
                    common.same_freq(channel.tx_frequency, tx_frequency) and
                    channel.time_slot == time_slot and
                    channel.color_code == color_code):
                return channel
        return None

    def find_analog_channel_by_tx_freq(self, frequency):
        for channel in self.analog_channels():
            if common.same_freq(channel.tx_frequency, frequency):
                return channel
        return None
