from django.core.management.base import BaseCommand

from clinic.models import User

DEFAULT_USERS = [
    {
        'email': 'admin@healthcare.com',
        'name': 'Admin User',
        'phone': '+1234567890',
        'role': User.ROLE_ADMIN,
        'is_staff': True,
        'is_superuser': True,
    },
    {
        'email': 'patient@healthcare.com',
        'name': 'John Doe',
        'phone': '+1234567894',
        'role': User.ROLE_PATIENT,
        'gender': 'Male',
        'address': '123 Main Street, New York, NY 10001',
    },
]


class Command(BaseCommand):
    help = "Ensure the default admin and demo patient exist (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--admin-password', default='Admin@123')
        parser.add_argument('--patient-password', default='Patient')

    def handle(self, *args, **opts):
        passwords = {
            User.ROLE_ADMIN: opts['admin_password'],
            User.ROLE_PATIENT: opts['patient_password'],
        }
        for defaults in DEFAULT_USERS:
            fields = dict(defaults)
            email = fields.pop('email')
            if User.objects.filter(email=email).exists():
                self.stdout.write(f"exists, skipped: {email}")
                continue
            User.objects.create_user(email, passwords[fields['role']], is_approved=True, **fields)
            self.stdout.write(self.style.SUCCESS(f"created: {email} ({fields['role']})"))
        self.stdout.write(self.style.SUCCESS("Default users ensured."))
