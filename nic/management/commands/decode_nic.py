"""
Management command to decode Sri Lankan NIC numbers from the command line.

Usage:
    python manage.py decode_nic 996663272V
    python manage.py decode_nic 197419202757 996663272V --today 2024-01-01
    python manage.py decode_nic 996663272V --explain
"""

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from nic.utils import Rejection, Sex, NicFormat, decode, explain, format_birth_date


class Command(BaseCommand):
    help = 'Decode Sri Lankan NIC numbers into birth date, age and sex'

    def add_arguments(self, parser):
        parser.add_argument('nics', nargs='+', help='NIC numbers to decode')
        parser.add_argument(
            '--today',
            help='Reference date for age calculation (YYYY-MM-DD), defaults to today',
        )
        parser.add_argument(
            '--explain',
            action='store_true',
            help='Show how each field was read',
        )

    def handle(self, *args, **options):
        if options['today']:
            try:
                reference_now = datetime.strptime(options['today'], '%Y-%m-%d').date()
            except ValueError:
                raise CommandError(f"Invalid --today value {options['today']!r}, expected YYYY-MM-DD")
        else:
            reference_now = timezone.localdate()

        rejected = 0
        for nic in options['nics']:
            result = decode(nic, reference_now)
            if isinstance(result, Rejection):
                rejected += 1
                self.stdout.write(self.style.ERROR(f"{nic}: {result.label}"))
                continue

            self.stdout.write(
                self.style.SUCCESS(
                    f"{nic}: {format_birth_date(result.birth_date)}, "
                    f"{result.age} years, {Sex(result.sex).label}, "
                    f"{NicFormat(result.source_format).label}"
                )
            )
            if options['explain']:
                details = explain(result, nic)
                for key in ('format', 'year', 'sex'):
                    self.stdout.write(f"  {details[key]}")
                self.stdout.write(f"  Day {details['day_of_year']} is {details['day_description']}.")

        if rejected:
            raise CommandError(f"{rejected} of {len(options['nics'])} NIC numbers could not be decoded")
