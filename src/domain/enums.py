"""Domain enumerations and per-order-type delivery multipliers."""

import enum


class FacilityType(str, enum.Enum):
    WAREHOUSE = "warehouse"
    DISTRIBUTION = "distribution"
    STORE = "store"
    HUB = "hub"


class OrderType(str, enum.Enum):
    STANDARD = "standard"
    EXPRESS = "express"
    SAME_DAY = "same_day"
    SCHEDULED = "scheduled"


# Urgency multiplier applied on top of the load-adjusted travel time
ORDER_TYPE_FACTORS: dict[OrderType, float] = {
    OrderType.STANDARD: 1.0,
    OrderType.EXPRESS: 0.7,
    OrderType.SAME_DAY: 1.2,
    OrderType.SCHEDULED: 1.5,
}

ORDER_TYPE_LABELS: dict[OrderType, str] = {
    OrderType.STANDARD: "Standard Delivery",
    OrderType.EXPRESS: "Express Delivery",
    OrderType.SAME_DAY: "Same Day Delivery",
    OrderType.SCHEDULED: "Scheduled Delivery",
}

# Product / variant selections that mean "no filter"
NO_FILTER_SENTINELS = frozenset({"", "any", "all"})
