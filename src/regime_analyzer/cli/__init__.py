"""Command line interface for Regime Analyzer."""
