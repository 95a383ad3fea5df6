"""
Demo Seed Service - Loads the demo business, its catalog and a few donations
File: foodshare/services/demo/seed_service.py
"""
import logging
from datetime import datetime, timezone, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from foodshare.models.business import Business
from foodshare.models.donation import Donation
from foodshare.models.product import Product
from foodshare.schemas.business import BusinessCreate
from foodshare.services.business.business_service import BusinessService
from foodshare.services.donation.fiscal import TAX_BENEFIT, get_fiscal_policy
from foodshare.services.store.entity_store import EntityStore

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)


class DemoSeedService:
    """Populates an empty store with the demo restaurant"""

    @staticmethod
    def seed(db: Session, business_id: str, now: Optional[datetime] = None) -> Business:
        """Insert demo data unless the business already exists"""
        existing = BusinessService.get_business(db, business_id)
        if existing:
            logger.debug(f"Demo business {business_id} already present, skipping seed")
            return existing

        now = now or datetime.now(timezone.utc)

        business = BusinessService.create_business(
            db,
            BusinessCreate(
                name="Restaurant Le Jardin Bio",
                type="Restaurant",
                description="Restaurant de cuisine biologique locale avec un engagement fort pour l'environnement.",
                address="123 Rue des Jardins, 75001 Paris",
                collection_instructions="Entrée par la porte arrière, sonner deux fois. Apporter des contenants.",
            ),
            business_id=business_id,
        )

        products = EntityStore(db, Product)
        catalog = [
            ("Pain de campagne artisanal", "Pain bio au levain naturel, cuit au feu de bois",
             "Boulangerie", "4.50", 8, 2),
            ("Salade César bio", "Salade fraîche avec parmesan, croûtons maison",
             "Plats", "12.80", 5, 1),
            ("Tomates cerises bio", "Tomates cerises de producteurs locaux",
             "Légumes", "6.20", 15, 3),
            ("Tarte aux pommes", "Tarte artisanale aux pommes du verger",
             "Desserts", "18.00", 3, 1),
            ("Jus de pomme fermier", "Jus de pomme 100% naturel, sans conservateur",
             "Boissons", "3.80", 12, 7),
            ("Bananes bio équitables", "Bananes issues du commerce équitable",
             "Fruits", "2.90", 2, 2),
        ]
        unit_prices = {}
        for index, (name, description, category, price, stock, days) in enumerate(catalog, start=1):
            product = products.create(
                id=f"product-{index}",
                business_id=business_id,
                name=name,
                description=description,
                category=category,
                unit_price=price,
                current_stock=stock,
                expiry_date=now + days * DAY,
            )
            unit_prices[product.id] = product.unit_price

        policy = get_fiscal_policy(TAX_BENEFIT)
        donations = EntityStore(db, Donation)
        samples = [
            ("product-1", 3, 1, "Pain de la veille, encore excellent pour le petit déjeuner",
             "active", now, now + 2 * DAY, ["lunch", "dinner"]),
            ("product-2", 2, 1, "Salades préparées ce matin, à consommer rapidement",
             "active", now, now + DAY, ["lunch"]),
            ("product-4", 1, 1, "Tarte d'hier, parfaite pour le goûter",
             "completed", now - DAY, now - timedelta(hours=2), ["afternoon"]),
            ("product-6", 1, 2, "Bananes très mûres, parfaites pour smoothies",
             "completed", now - 2 * DAY, now - DAY, ["morning"]),
        ]
        for index, (product_id, quantity, max_pp, description, status,
                    start, end, slots) in enumerate(samples, start=1):
            donations.create(
                id=f"donation-{index}",
                business_id=business_id,
                product_id=product_id,
                quantity=quantity,
                max_per_person=max_pp,
                description=description,
                status=status,
                available_from=start,
                available_to=end,
                collection_slots=slots,
                fiscal_value=str(policy.compute(unit_prices[product_id], quantity)),
                fiscal_policy=policy.name,
                created_at=start,
            )

        logger.info(f"🌱 Seeded demo business {business_id} with {len(unit_prices)} products")
        return business
