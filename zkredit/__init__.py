"""
zkredit Gateway - Remittance Ledger & Microloan Credit Service

Records worker remittances, derives privacy-preserving behavioral
attributes from the remittance history, and turns them into
microloan decisions.
"""

__version__ = "0.1.0"
