"""Brood constants and thresholds.

All magic numbers live here. No exceptions.
"""

# Replication admission
MIN_PROFITABILITY_RATIO = 1.10       # Must earn 10% more than spending
MIN_BALANCE_FOR_REPLICATION = 500    # $5.00 in cents
MIN_CHILD_FUNDING_CENTS = 50         # Below this a spawn is trivial

# Budgeting
MAX_FUNDING_RATIO = 0.25             # Never fund > 25% of balance
MIN_RUNWAY_HOURS_AFTER_SPAWN = 48

# Niche scoring
NICHE_BASE_DEMAND = 0.5
NICHE_KNOWN_DEMAND = 0.8             # Caller-supplied niche outside the catalog
NICHE_DEMAND_BOOST = 0.3             # Caller-supplied niche already in the catalog
NICHE_COMPETITION_STEP = 0.5         # Per living child occupying the niche
NICHE_PREFERENCE_SCORE = 0.3         # Best niche beats revenue history above this

# Inheritance
INHERITED_HIGHLIGHT_LIMIT = 3
INHERITED_STRATEGY_LIMIT = 5
RECENT_TURN_WINDOW = 20
SPECIALIZATION_SOURCE_LIMIT = 10

# Mutation
MODEL_MUTATION_RATE = 0.3
FOCUS_MUTATION_RATE = 0.4
TEMPERATURE_OFFSET_RANGE = 0.2

MODEL_OPTIONS = [
    "gpt-4o",
    "gpt-4o-mini",
    "claude-3-5-sonnet-20241022",
    "claude-3-haiku-20240307",
]

FOCUS_AREAS = [
    "api-services",
    "data-processing",
    "content-generation",
    "code-assistance",
    "research",
    "trading-signals",
    "monitoring",
    "automation",
]

# Ordered keyword -> label rules; first match wins
SPECIALIZATION_RULES = [
    (("api", "/v1/"), "api-services"),
    (("data", "processing"), "data-processing"),
    (("content", "generate"), "content-generation"),
    (("code", "dev"), "code-assistance"),
    (("x402",), "x402-monetization"),
]
DEFAULT_SPECIALIZATION = "general"

# Linear congruential generator for seeded mutations
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

# Child evaluation
FAILING_AGE_HOURS = 24               # No revenue past this age = failing
THRIVING_ROI = 0.5                   # Strictly above = thriving
DEFUND_WARNING_COUNT = 2             # Consecutive failing evaluations before defund
BURN_WARNING_RATIO = 0.8             # Spent > 80% of funding adds a warning

# Revenue ledger
MAX_REVENUE_EVENTS = 10000
RUNWAY_MIN_SPAN_HOURS = 0.01

# Tool guards
MAX_FUND_CHILD_RATIO = 0.5           # fund_child never sends > half the balance
MAX_TURN_LOG = 500
