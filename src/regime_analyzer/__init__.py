"""Regime Analyzer - Comparador de regimes tributários para empresas."""

__version__ = "0.1.0"
