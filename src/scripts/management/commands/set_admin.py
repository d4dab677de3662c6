"""Grant or revoke the admin flag from the server shell."""

from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import NotFound

from authentication.services import UserService


class Command(BaseCommand):
    help = "Set the admin flag on an existing user record. Use --revoke to clear it."

    def add_arguments(self, parser):
        parser.add_argument("uid", help="Identity-provider UID of the user.")
        parser.add_argument("--revoke", action="store_true", help="Clear the admin flag instead of setting it.")

    def handle(self, *args, **options):
        """Entrypoint for the management command."""
        is_admin = not options["revoke"]
        try:
            account = UserService.set_admin(options["uid"], is_admin)
        except NotFound:
            raise CommandError(f"No user record for uid {options['uid']!r}; the user must sign in once first.")

        state = "granted" if account.is_admin else "revoked"
        self.stdout.write(self.style.SUCCESS(f"Admin {state} for {account.uid} ({account.display_name})."))
