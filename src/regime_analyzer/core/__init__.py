"""Core domain: models, rules, calculation and analysis."""
