"""Export batch pricing quotes to CSV and JSON reports."""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path

from ..models import PricingQuote


def export_csv(quotes: list[PricingQuote], path: Path | str) -> None:
    """Export one row per priced property to CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = [
        "rank",
        "property_id",
        "type",
        "city",
        "state",
        "bedrooms",
        "bathrooms",
        "square_footage",
        "proposed_rent",
        "suggested_rent",
        "min_rent",
        "max_rent",
        "within_ethical_range",
        "warnings",
    ]

    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for i, q in enumerate(quotes, 1):
            p = q.characteristics
            rec = q.recommendation
            writer.writerow({
                "rank": i,
                "property_id": q.property_id,
                "type": p.type.value,
                "city": p.location.city,
                "state": p.location.state,
                "bedrooms": p.bedrooms,
                "bathrooms": p.bathrooms,
                "square_footage": p.square_footage,
                "proposed_rent": "" if q.proposed_rent is None else q.proposed_rent,
                "suggested_rent": rec.suggested_rent,
                "min_rent": rec.min_rent,
                "max_rent": rec.max_rent,
                "within_ethical_range": rec.is_within_ethical_range,
                "warnings": " | ".join(rec.warnings),
            })


def export_json(quotes: list[PricingQuote], path: Path | str, errors: list[str] | None = None) -> None:
    """Export full quotes, reasoning included, to JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "generated_at": datetime.utcnow().isoformat(),
        "count": len(quotes),
        "errors": list(errors or []),
        "results": [q.to_dict() for q in quotes],
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
