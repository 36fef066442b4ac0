"""Scenarios for seeding a ledger with realistic data."""

from loan_ledger.scenarios.portfolio import PortfolioScenario

__all__ = ["PortfolioScenario"]
