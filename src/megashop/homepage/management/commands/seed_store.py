"""Management command to seed categories, homepage sections and settings."""

from django.core.management.base import BaseCommand
from django.db import transaction

from megashop.catalog.models import Category
from megashop.core.models import Setting
from megashop.homepage.models import HomepageSection


CATEGORIES = [
    {
        "name": "Electronics",
        "slug": "electronics",
        "description": "Phones, computers, audio and the accessories that go with them.",
        "sort_order": 1,
        "children": [
            {"name": "Smartphones", "slug": "smartphones"},
            {"name": "Laptops", "slug": "laptops"},
            {"name": "Audio", "slug": "audio"},
        ],
    },
    {
        "name": "Fashion",
        "slug": "fashion",
        "description": "Clothing, shoes and accessories for every season.",
        "sort_order": 2,
        "children": [
            {"name": "Men", "slug": "men"},
            {"name": "Women", "slug": "women"},
            {"name": "Shoes", "slug": "shoes"},
        ],
    },
    {
        "name": "Home & Garden",
        "slug": "home-garden",
        "description": "Furniture, kitchenware, decor and tools for the garden.",
        "sort_order": 3,
        "children": [
            {"name": "Kitchen", "slug": "kitchen"},
            {"name": "Furniture", "slug": "furniture"},
        ],
    },
    {
        "name": "Books & Media",
        "slug": "books-media",
        "description": "Books, music and films.",
        "sort_order": 4,
        "children": [
            {"name": "Books", "slug": "books"},
            {"name": "Music", "slug": "music"},
        ],
    },
]


SECTIONS = [
    {
        "section_name": "hero",
        "title": "Everything you need, delivered to your door",
        "subtitle": "Quality products at fair prices. Pay on delivery.",
        "button_text": "Order now",
        "button_url": "#order-form",
        "sort_order": 1,
    },
    {
        "section_name": "featured_products",
        "title": "Featured products",
        "subtitle": "Hand-picked favourites from our catalog",
        "sort_order": 2,
    },
    {
        "section_name": "benefits",
        "title": "Why shop with us",
        "sort_order": 3,
        "additional_data": {
            "benefits": [
                {"icon": "truck", "title": "Fast delivery", "text": "Orders ship within 24 hours."},
                {"icon": "cash", "title": "Cash on delivery", "text": "Pay when your order arrives."},
                {"icon": "refresh", "title": "Easy returns", "text": "Seven days to change your mind."},
            ],
        },
    },
    {
        "section_name": "video",
        "title": "See it in action",
        "sort_order": 4,
        "additional_data": {"video_url": ""},
    },
    {
        "section_name": "pricing",
        "title": "Simple pricing",
        "subtitle": "No hidden fees. Delivery included.",
        "sort_order": 5,
    },
    {
        "section_name": "order_form",
        "title": "Place your order",
        "subtitle": "Fill in your details and we will call you to confirm.",
        "button_text": "Confirm order",
        "sort_order": 6,
        "additional_data": {"default_product_id": None},
    },
]


SETTINGS = [
    {"key": "site_name", "value": "MegaShop", "group": "general"},
    {"key": "site_description", "value": "Online store with cash on delivery", "group": "general"},
    {"key": "contact_email", "value": "support@megashop.local", "group": "general"},
    {"key": "contact_phone", "value": "", "group": "general"},
    {"key": "mail_from_name", "value": "MegaShop", "group": "mail"},
]


class Command(BaseCommand):
    help = "Seed categories, homepage sections and default settings"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Replace existing homepage sections and settings",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        force = options["force"]

        self.stdout.write("\nCreating categories...")
        for cat_data in CATEGORIES:
            parent = self.seed_category(cat_data)
            for child_data in cat_data["children"]:
                self.seed_category(child_data, parent=parent)

        self.stdout.write("\nCreating homepage sections...")
        for section_data in SECTIONS:
            existing = HomepageSection.objects.filter(section_name=section_data["section_name"])
            if existing.exists():
                if not force:
                    self.stdout.write(f"  Skipping existing section: {section_data['section_name']}")
                    continue
                existing.delete()
                self.stdout.write(f"  Deleted existing section: {section_data['section_name']}")

            HomepageSection.objects.create(is_active=True, **section_data)
            self.stdout.write(self.style.SUCCESS(f"  Created: {section_data['section_name']}"))

        self.stdout.write("\nCreating settings...")
        for setting in SETTINGS:
            if Setting.objects.filter(key=setting["key"]).exists() and not force:
                self.stdout.write(f"  Skipping existing setting: {setting['key']}")
                continue
            Setting.set_value(setting["key"], setting["value"], group=setting["group"])
            self.stdout.write(self.style.SUCCESS(f"  Set: {setting['key']}"))

        self.stdout.write(self.style.SUCCESS("\nStore seed complete!"))
        self.stdout.write(f"  Categories: {Category.objects.count()}")
        self.stdout.write(f"  Sections: {HomepageSection.objects.count()}")

    def seed_category(self, data, parent=None):
        category, created = Category.objects.get_or_create(
            slug=data["slug"],
            defaults={
                "name": data["name"],
                "description": data.get("description", ""),
                "parent": parent,
                "sort_order": data.get("sort_order", 0),
                "is_active": True,
            },
        )
        label = f"{parent.name} > {data['name']}" if parent else data["name"]
        if created:
            self.stdout.write(self.style.SUCCESS(f"  Created: {label}"))
        else:
            self.stdout.write(f"  Skipping existing category: {label}")
        return category
