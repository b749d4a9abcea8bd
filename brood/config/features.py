"""Feature flags for Brood.

All new features start DISABLED. Deployment sequence:
1. All OFF (shadow mode, decisions logged as receipts only)
2. REPLICATION (strategy engine may hand children to the spawner)
3. AUTO_DEFUND (fleet report marks defunded children dead)
4. FORCE_SPAWN (operators may bypass the strategy engine)
"""

# Replication: spawn children when the strategy engine allows it
FEATURE_REPLICATION_ENABLED = False

# Force spawn: skip profitability and balance gates on operator request
FEATURE_FORCE_SPAWN_ALLOWED = False

# Auto-defund: act on defund advice instead of only reporting it
FEATURE_AUTO_DEFUND_ENABLED = False
