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

from codeplug import common, objects


class PositioningSystem(objects.ConfigObject):
    """Common base of GPS and APRS position reporting"""

    period: int = 300

    _valid_map = dict(objects.ConfigObject._valid_map, **{
        "period": common.INT(1),
    })

    def __init__(self, name, **kwargs):
        super().__init__(name)
        for key, value in kwargs.items():
            setattr(self, key, value)


class GPSSystem(PositioningSystem):
    """DMR position reporting to a contact"""

    ID_PREFIX = "gps"

    contact = objects.Reference("DigitalContact")
    revert_channel = objects.Reference("DigitalChannel", allow_selected=True)


class APRSSystem(PositioningSystem):
    """Analog APRS position reporting"""

    ID_PREFIX = "aprs"

    destination: str = "APAT81"
    dest_ssid: int = 0
    source: str = "N0CALL"
    src_ssid: int = 0

    revert_channel = objects.Reference("AnalogChannel")

    _valid_map = dict(PositioningSystem._valid_map, **{
        "destination": common.CALLSIGN,
        "dest_ssid": common.INT(0, 15),
        "source": common.CALLSIGN,
        "src_ssid": common.INT(0, 15),
    })


class RadioID(objects.ConfigObject):
    ID_PREFIX = "id"

    number: int = 1

    _valid_map = dict(objects.ConfigObject._valid_map, **{
        "number": common.INT(1, common.MAX_DMR_ID),
    })

    def __init__(self, name, number):
        super().__init__(name)
        self.number = number


class GPSSystems(objects.ObjectList):
    KINDS = ("GPSSystem",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="gps_systems")


class APRSSystems(objects.ObjectList):
    KINDS = ("APRSSystem",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="aprs_systems")


class RadioIDList(objects.ObjectList):
    KINDS = ("RadioID",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="radio_ids")

    def find(self, number):
        for radio_id in self:
            if radio_id.number == number:
                return radio_id
        return None
