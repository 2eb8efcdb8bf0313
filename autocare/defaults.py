"""Built-in maintenance categories."""

from .rule import CategoryRule

DEFAULT_RULES = (
    CategoryRule(
        "Engine Oil", 5000, 6, description="Oil change required", key="oil_change"
    ),
    CategoryRule(
        "Tires", 7500, 6, description="Tire rotation required", key="tire_rotation"
    ),
    CategoryRule(
        "Brakes", 15000, 12, description="Brake service required", key="brake_service"
    ),
)
