"""
Tests for the decode_nic management command
"""

from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase


class DecodeNicCommandTest(SimpleTestCase):
    def test_decode_multiple(self):
        out = StringIO()
        call_command('decode_nic', '996663272V', '197419202757', today='2024-01-01', stdout=out)
        output = out.getvalue()
        self.assertIn('996663272V: June 15, 1999, 24 years, Female, Old (9 digits + V/X)', output)
        self.assertIn('197419202757: July 11, 1974, 49 years, Male, New (12 digits)', output)

    def test_explain(self):
        out = StringIO()
        call_command('decode_nic', '996663272V', today='2024-01-01', explain=True, stdout=out)
        output = out.getvalue()
        self.assertIn('The first two digits (99) represent the year 1999.', output)
        self.assertIn('Day 166 is June 15.', output)

    def test_rejected_nic_raises(self):
        out = StringIO()
        with self.assertRaises(CommandError):
            call_command('decode_nic', '996663272V', '12345', today='2024-01-01', stdout=out)
        self.assertIn('12345: Please enter a valid NIC number', out.getvalue())

    def test_invalid_today(self):
        with self.assertRaises(CommandError):
            call_command('decode_nic', '996663272V', today='01/01/2024', stdout=StringIO())
