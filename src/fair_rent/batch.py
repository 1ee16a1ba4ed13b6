"""Price a batch of property documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .errors import InvalidPropertyError
from .intake import property_from_document, property_id, proposed_rent_from_document
from .models import PricingQuote
from .pricing import EthicalPricingEngine

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Quotes for the documents that passed intake, plus one error per rejected document."""

    quotes: list[PricingQuote] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def speculative(self) -> list[PricingQuote]:
        return [q for q in self.quotes if q.is_speculative]


def quote_documents(
    documents: Iterable[dict[str, Any]],
    engine: EthicalPricingEngine | None = None,
) -> BatchResult:
    """Run intake checks and price every document.

    Documents with an asking rent are validated against the ethical maximum;
    the rest get a plain recommendation. Rejected documents never stop the batch.
    """
    engine = engine or EthicalPricingEngine()
    result = BatchResult()
    for i, doc in enumerate(documents, 1):
        pid = property_id(doc) or f"#{i}"
        try:
            prop = property_from_document(doc)
            proposed = proposed_rent_from_document(doc)
        except InvalidPropertyError as e:
            logger.warning("Skipping %s: %s", pid, "; ".join(e.problems))
            result.errors.append(f"{pid}: {'; '.join(e.problems)}")
            continue
        if proposed is None:
            rec = engine.calculate_ethical_rent(prop)
        else:
            rec = engine.validate_ethical_pricing(proposed, prop)
        result.quotes.append(
            PricingQuote(
                property_id=pid,
                characteristics=prop,
                recommendation=rec,
                proposed_rent=proposed,
            )
        )
    return result


def rank_quotes(quotes: list[PricingQuote]) -> list[PricingQuote]:
    """Speculative listings first (largest overshoot first), then by suggested rent."""

    def overshoot(q: PricingQuote) -> float:
        if q.proposed_rent is None:
            return 0.0
        return q.proposed_rent - q.recommendation.max_rent

    return sorted(
        quotes,
        key=lambda q: (not q.is_speculative, -overshoot(q), -q.recommendation.suggested_rent),
    )
