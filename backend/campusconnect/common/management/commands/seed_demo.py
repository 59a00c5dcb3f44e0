# campusconnect/common/management/commands/seed_demo.py
from django.core.management.base import BaseCommand
from django.db import transaction

from campusconnect.users.models import User

DEMO_PASSWORD = "test123"

SENIORS = [
    dict(
        email="asha.senior@example.com",
        name="Asha Verma",
        role=User.Role.SENIOR,
        bio="Final year CS. Happy to help with DSA and internships.",
        tags=["dsa", "internships", "python"],
        department="Computer Science",
        graduation_year=2026,
    ),
    dict(
        email="rohan.alumni@example.com",
        name="Rohan Mehta",
        role=User.Role.ALUMNI,
        bio="Backend engineer. Ask me about system design and careers.",
        tags=["backend", "system-design", "careers"],
        department="Information Technology",
        enrollment_year=2016,
        graduation_year=2020,
        current_company="Acme Cloud",
        job_title="Senior Software Engineer",
        location="Bengaluru",
    ),
    dict(
        email="meera.alumni@example.com",
        name="Meera Iyer",
        role=User.Role.ALUMNI,
        bio="Data scientist, previously research intern.",
        tags=["ml", "research", "higher-studies"],
        department="Electronics",
        enrollment_year=2015,
        graduation_year=2019,
        current_company="Northwind Analytics",
        job_title="Data Scientist",
        show_email=True,
    ),
]

JUNIORS = [
    dict(
        email="kabir.junior@example.com",
        name="Kabir Shah",
        role=User.Role.JUNIOR,
        tags=["web", "react"],
        department="Computer Science",
        graduation_year=2029,
    ),
    dict(
        email="nisha.junior@example.com",
        name="Nisha Rao",
        role=User.Role.JUNIOR,
        tags=["ml"],
        department="Electronics",
        graduation_year=2028,
    ),
]


class Command(BaseCommand):
    help = "Seed demo mentors and students for CampusConnect"

    def add_arguments(self, parser):
        parser.add_argument("--password", default=DEMO_PASSWORD)

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0
        for data in SENIORS + JUNIORS:
            data = dict(data)
            email = data.pop("email")
            user, was_created = User.objects.get_or_create(email=email, defaults=data)
            if was_created:
                user.set_password(options["password"])
                user.save(update_fields=["password"])
                created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"seeded {created} users ({len(SENIORS) + len(JUNIORS) - created} already existed)"
            )
        )
