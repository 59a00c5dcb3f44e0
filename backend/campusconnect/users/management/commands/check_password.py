from django.core.management.base import BaseCommand, CommandError, CommandParser

from campusconnect.users.models import User


class Command(BaseCommand):
    help = "Check whether a password matches the stored hash for a user"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("email")
        parser.add_argument("password")

    def handle(self, *args, **options):
        email = options["email"].strip().lower()
        user = User.objects.filter(email=email).first()
        if not user:
            raise CommandError(f"User not found for email: {email}")

        self.stdout.write(f"Found user: {user.email}")
        self.stdout.write(f"Has usable password: {user.has_usable_password()}")

        if not user.check_password(options["password"]):
            raise CommandError("password does not match")
        self.stdout.write(self.style.SUCCESS("password matches"))
