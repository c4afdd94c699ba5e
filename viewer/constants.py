"""Protocol constants for the basket viewer.

Centralizes fixed-point scales and time units shared by the readers.
"""

# Fee percentages and prices are fixed-point with 18 decimals
FEE_SCALE = 10**18

# Streaming fees are quoted per year of 365.25 days
SECONDS_PER_DAY = 86_400
SECONDS_PER_YEAR = 31_557_600

# Maximum number of entities accepted by one batch request at the API layer
MAX_BATCH_SIZE = 500
