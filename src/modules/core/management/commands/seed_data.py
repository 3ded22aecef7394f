from __future__ import annotations

import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.customers.models import Customer
from modules.delivery.constants import DeliveryMethodType
from modules.delivery.models import DeliveryMethod, DeliverySlot
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.views import build_order_service
from modules.payments.models import PaymentMethod
from modules.products.models import Category, Product
from modules.shipping.dtos import ShippingAddressDTO
from modules.stores.models import Shop, Site


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument("--orders", type=int, default=30)

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        site, shops = self._seed_stores()
        payment_methods = self._seed_payment_methods()
        delivery = self._seed_delivery()
        products = self._seed_products()
        customers = self._seed_customers()
        orders_created = self._seed_orders(
            options["orders"], site, shops, payment_methods, delivery, products, customers
        )

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"customers={len(customers)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        created = 0
        if not User.objects.filter(username="admin").exists():
            User.objects.create_superuser("admin", password="admin123")
            created += 1
        if not User.objects.filter(username="operator").exists():
            User.objects.create_user("operator", password="operator123", is_staff=True)
            created += 1
        return created

    def _seed_stores(self) -> tuple[Site, list[Shop]]:
        self.stdout.write("Creating site and shops...")
        site, _ = Site.objects.get_or_create(code="MAIN", defaults={"name": "Main Store"})
        shops = []
        for code, name in [("TKY-01", "Tokyo Shibuya"), ("OSK-01", "Osaka Umeda")]:
            shop, _ = Shop.objects.get_or_create(
                code=code, defaults={"name": name, "site": site}
            )
            shops.append(shop)
        self.stdout.write(self.style.SUCCESS("Creating site and shops... Done!"))
        return site, shops

    def _seed_payment_methods(self) -> list[PaymentMethod]:
        methods = []
        for code, name in [
            ("CARD", "Credit card"),
            ("COD", "Cash on delivery"),
            ("BANK", "Bank transfer"),
        ]:
            method, _ = PaymentMethod.objects.get_or_create(
                code=code, defaults={"name": name}
            )
            methods.append(method)
        return methods

    def _seed_delivery(self) -> list[tuple[DeliveryMethod, list[DeliverySlot]]]:
        self.stdout.write("Creating delivery methods...")
        seeded = []
        for code, name, method_type in [
            ("STD", "Standard delivery", DeliveryMethodType.STANDARD),
            ("EXP", "Express delivery", DeliveryMethodType.EXPRESS),
            ("COOL", "Refrigerated delivery", DeliveryMethodType.COOL),
        ]:
            method, _ = DeliveryMethod.objects.get_or_create(
                code=code, defaults={"name": name, "type": method_type}
            )
            slots = []
            # Slot codes repeat across methods
            for slot_code, slot_name in [
                ("AM", "Morning"),
                ("14-16", "14:00-16:00"),
                ("18-20", "18:00-20:00"),
            ]:
                slot, _ = DeliverySlot.objects.get_or_create(
                    delivery_method=method,
                    code=slot_code,
                    defaults={"name": slot_name},
                )
                slots.append(slot)
            seeded.append((method, slots))
        self.stdout.write(self.style.SUCCESS("Creating delivery methods... Done!"))
        return seeded

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("TEA-001", "Sencha 100g", "Tea", Decimal("1200"), Decimal("700")),
            ("TEA-002", "Matcha 30g", "Tea", Decimal("2400"), Decimal("1500")),
            ("TEA-003", "Hojicha 150g", "Tea", Decimal("900"), Decimal("450")),
            ("SWT-001", "Dorayaki 6 pcs", "Sweets", Decimal("1500"), Decimal("800")),
            ("SWT-002", "Yokan", "Sweets", Decimal("1800"), Decimal("1000")),
            ("WRE-001", "Teapot", "Tableware", Decimal("5400"), Decimal("3000")),
            ("WRE-002", "Tea cup set", "Tableware", Decimal("3800"), Decimal("2100")),
        ]
        for code, name, category_name, retail, purchase in catalog:
            category, _ = Category.objects.get_or_create(name=category_name)
            product, _ = Product.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "category": category,
                    "retail_price": retail,
                    "purchase_price": purchase,
                },
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_customers(self) -> list[Customer]:
        self.stdout.write("Creating customers...")
        customers: list[Customer] = []
        seed_customers = [
            ("Aiko Tanaka", "aiko@example.com", "090-1111-2222"),
            ("Kenji Sato", "kenji@example.com", "080-3333-4444"),
            ("Yui Suzuki", "yui@example.com", ""),
            ("Haruto Ito", "haruto@example.com", "070-5555-6666"),
            ("Mei Watanabe", "mei@example.com", ""),
        ]
        for name, email, phone in seed_customers:
            customer, _ = Customer.objects.get_or_create(
                email=email, defaults={"name": name, "phone": phone}
            )
            customers.append(customer)
        self.stdout.write(self.style.SUCCESS("Creating customers... Done!"))
        return customers

    def _seed_orders(
        self, count, site, shops, payment_methods, delivery, products, customers
    ) -> int:
        self.stdout.write("Creating orders...")
        service = build_order_service()
        prefectures = ["Tokyo", "Osaka", "Kyoto", "Hokkaido", "Fukuoka"]
        progressions = [
            [],
            [OrderStatus.CONFIRMED],
            [OrderStatus.CONFIRMED, OrderStatus.SHIPPED],
            [OrderStatus.CONFIRMED, OrderStatus.SHIPPED, OrderStatus.COMPLETED],
            [OrderStatus.CANCELED],
        ]

        for _ in range(count):
            customer = random.choice(customers)
            method, slots = random.choice(delivery)
            lines = random.sample(products, k=random.randint(1, 3))
            items = [
                CreateOrderItemDTO(
                    product_id=product.id,
                    quantity=random.randint(1, 3),
                    unit_price=product.retail_price,
                )
                for product in lines
            ]
            total = sum((item.unit_price * item.quantity for item in items), Decimal("0"))
            shipping_fee = Decimal("500")
            order = service.create_order(
                CreateOrderDTO(
                    customer_id=customer.id,
                    site_id=site.id,
                    shop_id=random.choice(shops).id,
                    payment_method_id=random.choice(payment_methods).id,
                    delivery_method_id=method.id,
                    delivery_slot_id=random.choice(slots).id,
                    shipping_address=ShippingAddressDTO(
                        name=customer.name,
                        postal_code=f"{random.randint(100, 999)}-{random.randint(0, 9999):04d}",
                        prefecture=random.choice(prefectures),
                        address_line=f"{random.randint(1, 30)}-{random.randint(1, 20)} Chuo",
                    ),
                    items=items,
                    total_amount=total,
                    shipping_fee=shipping_fee,
                    billing_amount=total + shipping_fee,
                )
            )
            for status in random.choice(progressions):
                service.update_status(order.id, status)

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
