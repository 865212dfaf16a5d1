"""The resource market, with moving prices and trading fees."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .resources import Resource

log = logging.getLogger(__name__)

MAX_AVG_AMPL = 5.0 / 100.0
STD_DIV = 3.0
MARKET_CHANGE_SEC = 10.0
BASE_FEE_RATE = 26.0 / 100.0
FEE_RATE_DEC_POWF = 1.15
UPD_PRICE_PROBA = 0.80

PRICE_INC_DIV = 8000.0
PRICE_INC_RANGE_MAX = 10.0 / 100.0
PRICE_INC_MIN_RATIO = 75.0 / 100.0


def fee_rate(rank: int) -> float:
    """Share of a transaction taken as fees by a trader of the given rank."""
    return BASE_FEE_RATE / float(rank) ** FEE_RATE_DEC_POWF


@dataclass
class MarketTx:
    """The effects of one market transaction."""

    added_cargo: Optional[tuple] = None
    removed_cargo: Optional[tuple] = None
    added_money: Optional[float] = None
    removed_money: Optional[float] = None
    fees: float = 0.0

    def to_json(self) -> dict:
        def cargo(entry):
            return None if entry is None else [entry[0].value, entry[1]]

        return {
            "added_cargo": cargo(self.added_cargo),
            "removed_cargo": cargo(self.removed_cargo),
            "added_money": self.added_money,
            "removed_money": self.removed_money,
            "fees": self.fees,
        }


def _base_prices() -> dict:
    return {resource: resource.base_price() for resource in Resource}


@dataclass
class Market:
    """Current price of every resource."""

    prices: dict = field(default_factory=_base_prices)
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    def _new_price(self, rng, resource: Resource, old: float) -> float:
        ratio = old / resource.base_price()
        avg = (1.0 - ratio) * MAX_AVG_AMPL
        std = abs(avg) + MAX_AVG_AMPL / STD_DIV
        return old * (1.0 + rng.gauss(avg, std))

    def update_prices(self, rng) -> None:
        """Randomly move prices, drifting back towards the base prices."""
        new_prices = []
        for resource, price in sorted(self.prices.items()):
            if not rng.random() < UPD_PRICE_PROBA:
                continue
            new_prices.append((resource, self._new_price(rng, resource, price)))
        for resource, price in new_prices:
            log.debug(
                "%s %s (%s%%)", resource.value, price, price / resource.base_price() * 100.0
            )
            self.prices[resource] = price

    def _checked_cost(self, resource: Resource, amnt: float) -> float:
        if not amnt > 0.0:
            raise ValueError(f"amount must be positive, got {amnt}")
        price = self.prices[resource]
        if not price > 0.0:
            raise ValueError(f"price of {resource.value} is not positive")
        return amnt * price

    def _price_shift(self, cost: float) -> float:
        high = (cost / PRICE_INC_DIV) * PRICE_INC_RANGE_MAX
        return self.rng.uniform(high * PRICE_INC_MIN_RATIO, high)

    def buy(self, trader, resource: Resource, amnt: float) -> MarketTx:
        """Buy ``amnt`` units; the price of the resource goes up."""
        cost = self._checked_cost(resource, amnt)
        fees = cost * fee_rate(trader.rank)
        self.prices[resource] *= 1.0 + self._price_shift(cost)
        return MarketTx(
            added_cargo=(resource, amnt), removed_money=cost + fees, fees=fees
        )

    def sell(self, trader, resource: Resource, amnt: float) -> MarketTx:
        """Sell ``amnt`` units; the price of the resource goes down."""
        cost = self._checked_cost(resource, amnt)
        fees = cost * fee_rate(trader.rank)
        self.prices[resource] *= 1.0 - self._price_shift(cost)
        return MarketTx(
            removed_cargo=(resource, amnt), added_money=cost - fees, fees=fees
        )

    def to_json(self) -> dict:
        return {"prices": {r.value: p for r, p in sorted(self.prices.items())}}