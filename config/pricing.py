"""
Unit conversion constants for the pricing engine.

Catalog dimensions are stored in centimeters (width, height),
kilograms (weight), grams per square meter (gsm) and liters (volume).
All constants are Decimal so repeated recalculation never drifts.
"""

from decimal import Decimal

# =============================================================================
# LENGTH
# =============================================================================

# Catalog width/height are centimeters
CM_PER_METER = Decimal("100")

# International yard
METERS_PER_YARD = Decimal("0.9144")


# =============================================================================
# AREA
# =============================================================================

# 1 m² = 10.7639 ft²
SQFT_PER_SQM = Decimal("10.7639")


# =============================================================================
# WEIGHT
# =============================================================================

GRAMS_PER_KG = Decimal("1000")

# GSM pricing basis: area (m²) × gsm ÷ 1000 = kilograms of face yarn.
# The unit price is then read as "per kg of material implied by face weight".
# Reconstructed from order form usage; verify against real catalog data.
GSM_TO_KG_DIVISOR = GRAMS_PER_KG


# =============================================================================
# PRESENTATION
# =============================================================================

# Money and quantities are only rounded when presented
DISPLAY_DECIMAL_PLACES = 2
