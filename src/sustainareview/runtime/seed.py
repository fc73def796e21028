"""Demo catalog: categories, attributes, products, users, reviews and bookmarks."""

from datetime import UTC, datetime
from functools import lru_cache

from loguru import logger
from sqlmodel import Session, select

from src.sustainareview.core.security import hash_password
from src.sustainareview.entities import (
    BookmarkTable,
    CategoryTable,
    ProductAttributeLinkTable,
    ProductAttributeTable,
    ProductTable,
    ReviewPhotoTable,
    ReviewTable,
    UserTable,
)

DEMO_PASSWORD = "sustainable123"

CATEGORIES = [
    ("cat_001", "Electronics", "Devices and gadgets, from smartphones to laptops"),
    ("cat_002", "Apparel", "Clothing and fashion items"),
    ("cat_003", "Home Goods", "Items for your living space, from furniture to decor"),
    ("cat_004", "Personal Care", "Products for hygiene and well-being"),
    ("cat_005", "Food & Beverage", "Groceries and consumables"),
    ("cat_006", "Outdoor Gear", "Equipment for adventures and nature activities"),
]

ATTRIBUTES = [
    ("attr_001", "Recycled Materials", "sustainability", "Made from post-consumer recycled content"),
    ("attr_002", "Vegan", "ethical", "Contains no animal products or by-products"),
    ("attr_003", "Fair Trade Certified", "ethical", "Ensures fair wages and safe working conditions"),
    ("attr_004", "Low Carbon Footprint", "sustainability", "Manufactured with significantly reduced greenhouse gas emissions"),
    ("attr_005", "B Corp Certified", "ethical", "Certified by B Lab for meeting rigorous standards of social and environmental performance"),
    ("attr_006", "Durable Construction", "durability", "Built to last with high-quality materials and robust design"),
    ("attr_007", "Organic Cotton", "sustainability", "Made from cotton grown without synthetic pesticides or fertilizers"),
    ("attr_008", "Energy Efficient", "sustainability", "Consumes less energy compared to similar products"),
    ("attr_009", "Locally Sourced", "ethical", "Materials or manufacturing processes are primarily from the local region"),
    ("attr_010", "Water Resistant", "durability", "Protects against water ingress to a certain degree"),
]

USERS = [
    ("user_abc", "ecowoman_emily", "emily@sustainareview.com", "2023-10-26 10:00:00"),
    ("user_def", "practical_paul", "paul@sustainareview.com", "2023-10-26 10:05:00"),
    ("user_ghi", "ethical_alex", "alex@sustainareview.com", "2023-10-26 10:10:00"),
    ("user_jkl", "review_guru", "guru@sustainareview.com", "2023-10-26 10:15:00"),
]

# id, name, brand, description, image, category, overall, sustainability, ethical, durability, created
PRODUCTS = [
    ("prod_001", "EcoPure Water Bottle", "AquaLife", "A reusable water bottle made from 100% recycled stainless steel.", "https://picsum.photos/seed/aquife/300/300", "cat_003", 4.7, 4.9, 4.5, 4.8, "2023-10-26 11:00:00"),
    ("prod_002", "TrailBlazer Hiking Boots", "SummitChaser", "Durable and waterproof hiking boots for all terrains.", "https://picsum.photos/seed/hikewear/300/300", "cat_006", 4.5, 4.0, 4.2, 4.9, "2023-10-26 11:05:00"),
    ("prod_003", "Conscious Cotton T-Shirt", "EverGreen Apparel", "A soft, breathable t-shirt made from organic cotton.", "https://picsum.photos/seed/cottontee/300/300", "cat_002", 4.6, 4.8, 4.7, 4.3, "2023-10-26 11:10:00"),
    ("prod_004", "SolarCharge Power Bank", "Sunergy", "A portable charger that harnesses solar energy.", "https://picsum.photos/seed/solarbank/300/300", "cat_001", 4.3, 4.6, 4.0, 4.1, "2023-10-26 11:15:00"),
    ("prod_005", "Artisan Coffee Beans", "BeanCraft", "Ethically sourced and single-origin coffee beans.", "https://picsum.photos/seed/coffeebeans/300/300", "cat_005", 4.8, 4.7, 4.9, None, "2023-10-26 11:20:00"),
    ("prod_006", "DuraBlend Kitchen Blender", "KitchenPro", "A powerful and long-lasting blender with multiple settings.", "https://picsum.photos/seed/blender/300/300", "cat_003", 4.6, 4.2, 4.4, 4.7, "2023-10-26 11:25:00"),
    ("prod_007", "Naturals Skincare Set", "PureSkin Co.", "Gentle, organic skincare products.", "https://picsum.photos/seed/skincare/300/300", "cat_004", 4.4, 4.5, 4.6, 4.0, "2023-10-26 11:30:00"),
    ("prod_008", "Zenith Laptop", "TechNova", "High-performance laptop with recycled aluminum casing.", "https://picsum.photos/seed/laptoptech/300/300", "cat_001", 4.7, 4.8, 4.5, 4.6, "2023-10-26 11:35:00"),
    ("prod_009", "EverWarm Winter Jacket", "ArcticGear", "Insulated jacket made with recycled fill.", "https://picsum.photos/seed/winterjack/300/300", "cat_002", 4.5, 4.7, 4.3, 4.7, "2023-10-26 11:40:00"),
    ("prod_010", "Adventure Backpack", "Explorer Pack", "Rugged backpack designed for long trips, water resistant.", "https://picsum.photos/seed/backpack/300/300", "cat_006", 4.6, 4.3, 4.5, 4.8, "2023-10-26 11:45:00"),
]

PRODUCT_ATTRIBUTES = [
    ("prod_001", "attr_001"),
    ("prod_001", "attr_008"),
    ("prod_002", "attr_006"),
    ("prod_003", "attr_007"),
    ("prod_003", "attr_002"),
    ("prod_004", "attr_008"),
    ("prod_004", "attr_004"),
    ("prod_005", "attr_003"),
    ("prod_005", "attr_009"),
    ("prod_006", "attr_006"),
    ("prod_007", "attr_002"),
    ("prod_007", "attr_007"),
    ("prod_008", "attr_001"),
    ("prod_008", "attr_008"),
    ("prod_009", "attr_001"),
    ("prod_010", "attr_006"),
    ("prod_010", "attr_010"),
]

# id, product, user, title, body, overall, sustainability, ethical, durability, helpful, created
REVIEWS = [
    ("rev_001", "prod_001", "user_abc", "Fantastic Eco-Bottle!", "Love this bottle! Keeps water cold all day and I feel good knowing it's recycled.", 5, 5, 4, 5, 10, "2023-10-27 09:00:00"),
    ("rev_002", "prod_002", "user_def", "Solid boots, worth the price.", "These boots are incredibly durable. Hiked several miles in them and they held up perfectly. A bit stiff initially but broke in well.", 4, 4, 4, 5, 8, "2023-10-27 09:15:00"),
    ("rev_003", "prod_003", "user_ghi", "So soft and ethical!", "The most comfortable t-shirt I own. Knowing it's organic cotton and ethically made makes it even better.", 5, 5, 5, 4, 12, "2023-10-27 09:30:00"),
    ("rev_004", "prod_001", "user_def", "Good bottle, but heavy.", "It is a good bottle, but it is heavier than I expected.", 4, 4, 4, 5, 2, "2023-10-27 10:00:00"),
    ("rev_005", "prod_004", "user_abc", "Charges well, even on cloudy days.", "The solar panel is surprisingly effective. Great for camping.", 4, 5, 4, 4, 5, "2023-10-28 10:00:00"),
    ("rev_006", "prod_008", "user_ghi", "Fast and sleek laptop", "The performance is top-notch, and I appreciate the sustainable design choices.", 5, 5, 5, 5, 7, "2023-10-28 11:00:00"),
    ("rev_007", "prod_003", "user_def", "Shrank in the wash!", "Washed it once according to instructions and it shrunk significantly.", 2, 3, 4, 3, 1, "2023-10-29 12:00:00"),
    ("rev_008", "prod_002", "user_ghi", "Needs better waterproofing", "While durable, my feet got wet during a heavy rain shower.", 3, 3, 4, 5, 3, "2023-10-29 13:00:00"),
    ("rev_009", "prod_005", "user_jkl", "Best coffee, ethically sourced", "Rich flavor profile and the ethical sourcing story is inspiring.", 5, 5, 5, None, 6, "2023-10-30 08:00:00"),
    ("rev_010", "prod_010", "user_jkl", "Great backpack for treks", "Very sturdy and comfortable, even when fully loaded. The water resistance is a nice touch.", 4, 4, 4, 5, 4, "2023-10-30 09:00:00"),
]

REVIEW_PHOTOS = [
    ("photo_001", "rev_001", "https://picsum.photos/seed/bottle_user_a/400/300", "2023-10-27 09:05:00"),
    ("photo_002", "rev_003", "https://picsum.photos/seed/tshirt_user_c/400/300", "2023-10-27 09:35:00"),
    ("photo_003", "rev_005", "https://picsum.photos/seed/powerbank_user_a/400/300", "2023-10-28 10:05:00"),
    ("photo_004", "rev_006", "https://picsum.photos/seed/laptop_user_c/400/300", "2023-10-28 11:05:00"),
    ("photo_005", "rev_010", "https://picsum.photos/seed/backpack_user_c/400/300", "2023-10-30 09:05:00"),
]

BOOKMARKS = [
    ("user_abc", "prod_001", "2023-10-27 10:00:00"),
    ("user_abc", "prod_008", "2023-10-28 15:00:00"),
    ("user_def", "prod_002", "2023-10-27 11:00:00"),
    ("user_def", "prod_006", "2023-10-29 13:00:00"),
    ("user_ghi", "prod_003", "2023-10-28 12:00:00"),
    ("user_ghi", "prod_007", "2023-10-29 14:00:00"),
]


def _ts(value: str) -> datetime:
    return datetime.strptime(value, "%Y-%m-%d %H:%M:%S").replace(tzinfo=UTC)


@lru_cache(maxsize=1)
def _demo_password_hash() -> str:
    return hash_password(DEMO_PASSWORD)


def seed_database(session: Session) -> bool:
    """Load the demo data into an empty schema.

    Returns False without touching anything when categories already exist.
    """
    if session.exec(select(CategoryTable)).first() is not None:
        logger.info("Database already seeded; skipping")
        return False

    session.add_all(
        CategoryTable(id=cid, name=name, description=description)
        for cid, name, description in CATEGORIES
    )
    session.add_all(
        ProductAttributeTable(id=aid, name=name, attribute_type=kind, description=description)
        for aid, name, kind, description in ATTRIBUTES
    )
    password_hash = _demo_password_hash()
    session.add_all(
        UserTable(
            id=uid,
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=_ts(created),
            updated_at=_ts(created),
        )
        for uid, username, email, created in USERS
    )
    session.flush()

    session.add_all(
        ProductTable(
            id=pid,
            name=name,
            brand_name=brand,
            description=description,
            primary_image_url=image,
            category_id=category_id,
            overall_score=overall,
            sustainability_score=sustainability,
            ethical_score=ethical,
            durability_score=durability,
            created_at=_ts(created),
            updated_at=_ts(created),
        )
        for (
            pid,
            name,
            brand,
            description,
            image,
            category_id,
            overall,
            sustainability,
            ethical,
            durability,
            created,
        ) in PRODUCTS
    )
    session.flush()
    session.add_all(
        ProductAttributeLinkTable(product_id=pid, attribute_id=aid)
        for pid, aid in PRODUCT_ATTRIBUTES
    )
    session.add_all(
        ReviewTable(
            id=rid,
            product_id=pid,
            user_id=uid,
            title=title,
            body=body,
            overall_rating=overall,
            sustainability_rating=sustainability,
            ethical_rating=ethical,
            durability_rating=durability,
            helpful_votes=helpful,
            moderation_status="approved",
            created_at=_ts(created),
            updated_at=_ts(created),
        )
        for (
            rid,
            pid,
            uid,
            title,
            body,
            overall,
            sustainability,
            ethical,
            durability,
            helpful,
            created,
        ) in REVIEWS
    )
    session.flush()
    session.add_all(
        ReviewPhotoTable(id=photo_id, review_id=rid, photo_url=url, uploaded_at=_ts(uploaded))
        for photo_id, rid, url, uploaded in REVIEW_PHOTOS
    )
    session.add_all(
        BookmarkTable(user_id=uid, product_id=pid, bookmarked_at=_ts(bookmarked))
        for uid, pid, bookmarked in BOOKMARKS
    )
    session.commit()
    logger.info(
        "Seeded {} categories, {} products, {} users and {} reviews",
        len(CATEGORIES),
        len(PRODUCTS),
        len(USERS),
        len(REVIEWS),
    )
    return True
