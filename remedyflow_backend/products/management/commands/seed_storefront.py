from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from orders.models import Order, OrderStatus
from orders.services.order_service import create_order, update_order_status
from products.models import Category, Product
from purchases.services.purchase_service import record_purchase

CATEGORIES = [
    ("Analgesics", "Pain relief and fever reducers"),
    ("Antibiotics", "Prescription antibacterial medicines"),
    ("Vitamins", "Supplements and immune support"),
    ("Homeopathy", "Dilutions, mother tinctures and biochemics"),
]

# name, category, potency, form, manufacturer, selling, cost, expiry (days), opening stock
PRODUCTS = [
    ("Paracetamol 500mg", "Analgesics", "500mg", "Tablet", "PharmaCorp", "5.99", "3.50", 400, 100),
    ("Amoxicillin 250mg", "Antibiotics", "250mg", "Capsule", "MediLife", "12.99", "8.50", 25, 50),
    ("Vitamin C 1000mg", "Vitamins", "1000mg", "Tablet", "HealthPlus", "15.99", "10.00", 50, 75),
    ("Arnica Montana", "Homeopathy", "30C", "Pellets", "Boiron", "9.50", "5.25", 80, 8),
    ("Belladonna", "Homeopathy", "200C", "Dilution", "SBL", "7.25", "4.00", None, 0),
]


class Command(BaseCommand):
    help = "Seed sample categories, products, opening stock (purchases) and orders"

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-orders",
            action="store_true",
            help="Only seed catalog and stock.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding storefront..."))
        today = timezone.localdate()

        # -------------------------------
        # CATEGORIES
        # -------------------------------
        category_objs = {}
        for name, description in CATEGORIES:
            obj, _ = Category.objects.get_or_create(name=name, defaults={"description": description})
            category_objs[name] = obj

        # -------------------------------
        # PRODUCTS + OPENING STOCK
        # -------------------------------
        product_objs = []
        for name, cat, potency, form, maker, selling, cost, expiry_days, opening in PRODUCTS:
            product, created = Product.objects.get_or_create(
                name=name,
                defaults={
                    "description": f"{name} ({potency} {form.lower()}) by {maker}",
                    "category": category_objs[cat],
                    "potency": potency,
                    "form": form,
                    "manufacturer": maker,
                    "batch_number": f"{maker[:2].upper()}{today:%Y}{len(product_objs) + 1:03d}",
                    "expiry_date": today + timedelta(days=expiry_days) if expiry_days else None,
                    "selling_price": Decimal(selling),
                    "purchase_price": Decimal(cost),
                    "image": "https://images.unsplash.com/photo-1584308666744-24d5c474f2ae?w=400",
                },
            )
            product_objs.append(product)

            if created and opening:
                record_purchase(
                    product_id=product.id,
                    quantity=opening,
                    unit_cost=cost,
                    supplier="Wholesale Supplier A",
                    notes="Initial stock purchase",
                )

        self.stdout.write(f"Products: {len(product_objs)}")

        # -------------------------------
        # SAMPLE ORDERS
        # -------------------------------
        if options["no_orders"] or Order.objects.exists():
            self.stdout.write(self.style.SUCCESS("Storefront seeded (orders skipped)."))
            return

        pending = create_order(
            customer_name="John Doe",
            email="john@example.com",
            phone="+1234567890",
            province="New York",
            city="New York",
            area="Manhattan",
            address="123 Main St, New York, NY 10001",
            product_id=product_objs[0].id,
            quantity=2,
        )
        confirmed = create_order(
            customer_name="Jane Smith",
            email="jane@example.com",
            phone="+1234567891",
            province="California",
            city="Los Angeles",
            area="Downtown",
            address="456 Oak Ave, Los Angeles, CA 90001",
            product_id=product_objs[1].id,
            quantity=1,
        )
        update_order_status(confirmed.id, OrderStatus.CONFIRMED)

        self.stdout.write(f"Orders: {pending.order_number} (pending), {confirmed.order_number} (confirmed)")
        self.stdout.write(self.style.SUCCESS("Storefront seeded successfully."))
