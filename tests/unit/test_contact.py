import ddt

from codeplug import common
from codeplug import contact
from codeplug import errors
from codeplug import graph
from tests.unit import base


@ddt.ddt
class TestContacts(base.BaseTest):
    def test_all_call_default_number(self):
        c = contact.DigitalContact('All', contact.CallType.ALL)
        self.assertEqual(common.ALL_CALL_ID, c.number)

    def test_reserved_number(self):
        self.assertRaises(errors.ValidationError,
                          contact.DigitalContact, 'TG',
                          contact.CallType.GROUP, common.ALL_CALL_ID)

    @ddt.data(contact.CallType.GROUP, contact.CallType.PRIVATE)
    def test_all_call_number_rejected_by_setter(self, call_type):
        c = contact.DigitalContact('TG', call_type, 91)
        with self.assertRaises(errors.ValidationError) as cm:
            c.number = common.ALL_CALL_ID
        self.assertEqual('number', cm.exception.field)
        self.assertEqual(91, c.number)

    def test_reserved_range(self):
        c = contact.DigitalContact('TG', number=common.MAX_CALL_ID)
        self.assertRaises(errors.ValidationError, setattr, c, 'number',
                          common.MAX_CALL_ID + 1)
        self.assertEqual(common.MAX_CALL_ID, c.number)

    def test_type_all_rejected_by_setter(self):
        c = contact.DigitalContact('Local', number=9)
        with self.assertRaises(errors.ValidationError) as cm:
            c.type = contact.CallType.ALL
        self.assertEqual('type', cm.exception.field)
        self.assertEqual(contact.CallType.GROUP, c.type)

    def test_all_call_type_change_rejected(self):
        c = contact.DigitalContact('All', contact.CallType.ALL)
        self.assertRaises(errors.ValidationError, setattr, c, 'type',
                          contact.CallType.PRIVATE)
        self.assertRaises(errors.ValidationError, setattr, c, 'number', 9)
        self.assertEqual(contact.CallType.ALL, c.type)
        self.assertEqual(common.ALL_CALL_ID, c.number)

    def test_set_call(self):
        c = contact.DigitalContact('Local', number=9)
        c.set_call(contact.CallType.ALL, common.ALL_CALL_ID)
        self.assertEqual(contact.CallType.ALL, c.type)
        c.set_call(contact.CallType.PRIVATE, 2621001)
        self.assertEqual(contact.CallType.PRIVATE, c.type)
        self.assertEqual(2621001, c.number)

    def test_set_call_invalid_changes_nothing(self):
        c = contact.DigitalContact('Local', number=9)
        self.assertRaises(errors.ValidationError, c.set_call,
                          contact.CallType.ALL, 9)
        self.assertRaises(errors.ValidationError, c.set_call,
                          contact.CallType.PRIVATE, 0)
        self.assertEqual(contact.CallType.GROUP, c.type)
        self.assertEqual(9, c.number)

    @ddt.data(0, -1, 0x1000000, '91', 9.5)
    def test_bad_number(self, number):
        c = contact.DigitalContact('TG', number=91)
        self.assertRaises(errors.ValidationError, setattr, c, 'number',
                          number)
        self.assertEqual(91, c.number)

    @ddt.data('', '12X', 123, None)
    def test_bad_dtmf(self, number):
        self.assertRaises(errors.ValidationError,
                          contact.DTMFContact, 'D', number)

    def test_dtmf(self):
        c = contact.DTMFContact('D', '0123456789ABCD*#', rx_tone=True)
        self.assertFalse(c.is_digital())
        self.assertTrue(c.rx_tone)

    def test_find_digital_contact(self):
        cp = graph.Codeplug()
        cp.contacts.add(contact.DTMFContact('D', '91'))
        tg = contact.DigitalContact('TG', number=91)
        cp.contacts.add(tg)
        self.assertIs(tg, cp.contacts.find_digital_contact(91))
        self.assertIsNone(cp.contacts.find_digital_contact(92))
        self.assertEqual([tg], cp.contacts.digital_contacts())

    def test_group_list_member_deleted(self):
        cp = base.sample_codeplug()
        group = cp.rx_group_lists.at(0)
        tg91 = group.contacts.at(0)
        local = group.contacts.at(1)
        cp.contacts.delete(tg91)
        self.assertEqual([local], list(group.contacts))
        self.assertEqual(0, group.contacts.index(local))
        self.assertIsNone(cp.channels.at(0).tx_contact)
