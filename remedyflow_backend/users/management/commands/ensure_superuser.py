"""
PATH: users/management/commands/ensure_superuser.py

Admin account bootstrap for deploys without shell access.

- Reads AUTO_ADMIN_EMAIL + AUTO_ADMIN_PASSWORD (django-environ).
- Idempotent: creates the admin if missing; otherwise re-asserts admin
  role + flags and resets the password to the env value.
- Never prints the password.
"""

from __future__ import annotations

import environ
from django.core.management.base import BaseCommand
from django.db import transaction

from users.models import User


class Command(BaseCommand):
    help = "Create/update the storefront admin from AUTO_ADMIN_* env vars (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", help="Overrides AUTO_ADMIN_EMAIL")
        parser.add_argument("--password", help="Overrides AUTO_ADMIN_PASSWORD")

    def handle(self, *args, **options):
        env = environ.Env()
        email = (options.get("email") or env.str("AUTO_ADMIN_EMAIL", default="")).strip()
        password = (options.get("password") or env.str("AUTO_ADMIN_PASSWORD", default="")).strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping."))
            return

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()

            if user:
                user.role = User.ROLE_ADMIN
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Admin ensured: {user.email} (updated)"))
                return

            user = User.objects.create_superuser(email, password=password)

        self.stdout.write(self.style.SUCCESS(f"Admin ensured: {user.email} (created)"))
