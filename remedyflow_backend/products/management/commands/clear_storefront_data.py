from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from orders.models import Order
from products.models import Category, Product
from purchases.models import Purchase
from sales.models import Sale


class Command(BaseCommand):
    """
    Wipe storefront data, keeping user accounts.

    Order matters: every ledger FK is PROTECT, so dependents go first.
    Queryset deletes bypass the append-only Model.delete() guards.
    """

    help = "Delete all sales, orders, purchases, products and categories (users are kept)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--yes",
            action="store_true",
            help="Confirm the wipe (required).",
        )

    def handle(self, *args, **options):
        if not options["yes"]:
            raise CommandError("Refusing to delete data without --yes")

        steps = [
            ("sales", Sale),
            ("orders", Order),
            ("purchases", Purchase),
            ("products", Product),
            ("categories", Category),
        ]

        with transaction.atomic():
            for label, model in steps:
                deleted, _ = model.objects.all().delete()
                self.stdout.write(f"Deleted {deleted} {label}")

        self.stdout.write(self.style.SUCCESS("Storefront data cleared; users preserved."))
