from django.core.management.base import BaseCommand, CommandError, CommandParser

from campusconnect.users.models import User

DEFAULT_PASSWORD = "test123"


class Command(BaseCommand):
    help = "Reset a user's password (defaults to 'test123')"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("email")
        parser.add_argument("password", nargs="?", default=DEFAULT_PASSWORD)

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        user = User.objects.filter(email=email).first()
        if not user:
            raise CommandError(f"User not found for email: {email}")

        user.set_password(options["password"])
        user.save(update_fields=["password", "updated_at"])
        self.stdout.write(self.style.SUCCESS(f"Password for {email} updated."))
