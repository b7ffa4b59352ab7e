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

from codeplug import common, errors, objects


class CallType(enum.Enum):
    GROUP = "Group"
    PRIVATE = "Private"
    ALL = "All"


class Contact(objects.ConfigObject):
    ID_PREFIX = "cont"

    rx_tone: bool = False

    _valid_map = dict(objects.ConfigObject._valid_map, **{
        "rx_tone": common.BOOLEAN,
    })

    def is_digital(self):
        return False


class DigitalContact(Contact):
    """A DMR group, private or all-call contact

    All-call contacts always use the reserved all-call number, which no
    group or private contact may use. Use set_call() to change the type
    and number together.
    """

    type: CallType = CallType.GROUP
    number: int = 1

    _valid_map = dict(Contact._valid_map, **{
        "type": common.ENUM(CallType),
        "number": common.INT(1, common.MAX_DMR_ID),
    })

    def __init__(self, name, type=CallType.GROUP, number=None,
                 rx_tone=False):
        super().__init__(name)
        if number is None and type == CallType.ALL:
            number = common.ALL_CALL_ID
        self.set_call(type, number)
        self.rx_tone = rx_tone

    def __setattr__(self, name, val):
        if name == "type":
            self._check_call(name, val, self.number)
        elif name == "number":
            self._check_call(name, self.type, val)
        super().__setattr__(name, val)

    @staticmethod
    def _check_call(field, type, number):
        if not isinstance(number, int):
            # Left to the field validator
            return
        if type == CallType.ALL and number != common.ALL_CALL_ID:
            raise errors.ValidationError(
                field, "All-call contacts must use number %i" % (
                    common.ALL_CALL_ID))
        if type != CallType.ALL and number > common.MAX_CALL_ID:
            raise errors.ValidationError(
                field, "Number %i is reserved for all-call" % number)

    def set_call(self, type, number):
        """Set the call type and number at once"""
        for field, value in (("type", type), ("number", number)):
            if not self._valid_map[field](value):
                raise errors.ValidationError(
                    field, "`%r' is not a valid value for `%s'" % (value,
                                                                  field))
        self._check_call("number", type, number)
        super().__setattr__("type", type)
        super().__setattr__("number", number)

    def is_digital(self):
        return True


class DTMFContact(Contact):
    number: str = ""

    _valid_map = dict(Contact._valid_map, **{
        "number": common.DTMF,
    })

    def __init__(self, name, number, rx_tone=False):
        super().__init__(name)
        self.number = number
        self.rx_tone = rx_tone


class ContactList(objects.ObjectList):
    KINDS = ("Contact",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="contacts")

    def digital_contacts(self):
        return [x for x in self if x.is_digital()]

    def find_digital_contact(self, number):
        for contact in self.digital_contacts():
            if contact.number == number:
                return contact
        return None


class RXGroupList(objects.ConfigObject):
    """An ordered set of contacts a digital channel listens to"""

    ID_PREFIX = "grp"

    def __init__(self, name, contacts=()):
        super().__init__(name)
        self._add_member_list("contacts", GroupMembers(self))
        for contact in contacts:
            self.contacts.add(contact)


class GroupMembers(objects.RefList):
    KINDS = ("DigitalContact",)

    def __init__(self, owner):
        super().__init__(owner, name="%s.contacts" % owner.name)


class RXGroupLists(objects.ObjectList):
    KINDS = ("RXGroupList",)

    def __init__(self, codeplug=None):
        super().__init__(codeplug, name="rx_group_lists")
