"""Application constants that never change across environments.

These are true constants representing physical facts or fixed business
values that should never vary between dev/staging/prod.
"""

# ===== Geographic Constants =====
EARTH_RADIUS_METERS = 6_371_000  # Mean Earth radius (for Haversine formula)

# Syntagma Square, used as the seed area for initial positions
SEED_CENTER_LATITUDE = 37.9838
SEED_CENTER_LONGITUDE = 23.7275

# ===== Time Constants =====
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60

# ===== Simulation =====
MIN_POSITION_INTERVAL_SECONDS = 2
MAX_POSITION_INTERVAL_SECONDS = 10

# ===== Seed Data =====
VEHICLE_NAME_PREFIXES = ("VAN", "TRUCK", "CAR", "BUS", "TAXI", "DELIVERY", "FLEET")

# ===== Cache Prefixes =====
CACHE_PREFIX_LAST_POSITION = "last_position"
CACHE_PREFIX_VEHICLES = "vehicles"
CACHE_PREFIX_VEHICLE = "vehicle"
CACHE_PREFIX_VEHICLES_WITH_POSITIONS = "vehicles_with_positions"
