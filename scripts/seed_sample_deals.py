"""
Seed the database with the sample SFR and multi-family deals.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from deal_analyzer.api.deals import apply_payload
from deal_analyzer.api.samples import SAMPLE_DEALS, get_sample_deal
from deal_analyzer.db.database import get_db_context, init_db
from deal_analyzer.db.models import Deal
from deal_analyzer.services.insights import get_insights_service


def main():
    init_db()
    insights = get_insights_service()

    with get_db_context() as db:
        for property_type in SAMPLE_DEALS:
            payload = get_sample_deal(property_type)
            payload["property_type"] = property_type

            existing = (
                db.query(Deal)
                .filter(Deal.name == payload["name"], Deal.is_deleted == False)
                .first()
            )
            if existing:
                print(f"Deal '{existing.name}' already exists (ID: {existing.id})")
                continue

            deal = Deal()
            apply_payload(deal, payload, insights)
            db.add(deal)
            db.flush()

            metrics = deal.analysis["key_metrics"]
            print(f"Created deal: {deal.name} (ID: {deal.id})")
            print(f"  Cap rate: {metrics['cap_rate']:.2f}%  DSCR: {metrics['dscr']:.2f}")

    print("\nSample deals seeded.")


if __name__ == "__main__":
    main()
