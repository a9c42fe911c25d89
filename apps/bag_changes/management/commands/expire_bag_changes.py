"""
Management command to close undo windows that have run out.

Undo already refuses expired changes on its own; this sweep makes them
permanently non-undoable in the ledger so listings and the admin agree.

Usage:
    python manage.py expire_bag_changes
    python manage.py expire_bag_changes --dry-run
"""

import logging

from django.core.management.base import BaseCommand
from django.utils import timezone
from apps.bag_changes.models import ChangeRecord

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Mark bag changes past their undo window as no longer undoable'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be updated without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        now = timezone.now()

        expired = ChangeRecord.objects.filter(
            can_undo=True,
            undone=False,
            undo_expires_at__lt=now,
        )

        count = expired.count()

        if count == 0:
            self.stdout.write(
                self.style.SUCCESS('No expired bag changes. All good!')
            )
            return

        self.stdout.write(f'\nFound {count} expired bag change(s):\n')

        for record in expired.select_related('user'):
            self.stdout.write(
                f'  - {record.id} | {record.get_change_type_display()} | '
                f'User: {record.user.email} | Expired: {record.undo_expires_at:%Y-%m-%d %H:%M}'
            )

        if dry_run:
            self.stdout.write(
                self.style.WARNING('\n--dry-run mode: No changes made.')
            )
            return

        updated = expired.update(can_undo=False, updated_at=now)
        logger.info("Closed undo window for %d expired bag change(s)", updated)

        self.stdout.write(
            self.style.SUCCESS(f'\n✓ Closed undo window for {updated} bag change(s)!')
        )
