"""
Rule engine helpers (time model, configuration, classification, contract tiers)
"""
