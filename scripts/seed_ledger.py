#!/usr/bin/env python3
"""Seed a loan ledger with a synthetic portfolio.

Customers, loans and payments are created through the ledger service, so
every generated record passes the same validation as a real request. The
store comes from the environment (``LEDGER_STORE``, ``POSTGRES_*``) unless
``--store`` overrides it.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ledger.config import STORE_BACKENDS, LedgerConfig
from loan_ledger.exceptions import LoanLedgerError
from loan_ledger.logging import setup_logging
from loan_ledger.scenarios import PortfolioScenario
from loan_ledger.store import create_store

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Seed a loan ledger with synthetic data")
    parser.add_argument(
        "--customers",
        type=int,
        default=100,
        help="Number of customers to generate (default: 100)",
    )
    parser.add_argument(
        "--max-loans",
        type=int,
        default=2,
        help="Maximum loans per customer (default: 2)",
    )
    parser.add_argument(
        "--payoff-rate",
        type=float,
        default=0.2,
        help="Share of loans paid off in full (default: 0.2)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--store",
        type=str,
        choices=STORE_BACKENDS,
        default=config.store_backend,
        help="Store backend (default: LEDGER_STORE or memory)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()

    setup_logging(args.log_level, config.log_format)
    config.store_backend = args.store

    try:
        store = create_store(config)
        scenario = PortfolioScenario(
            num_customers=args.customers,
            max_loans_per_customer=args.max_loans,
            payoff_rate=args.payoff_rate,
            seed=args.seed,
            locale=config.faker_locale,
            store=store,
        )
        start = time.time()
        scenario.generate()
        logger.info("Seeded ledger in %.2fs", time.time() - start)
    except LoanLedgerError as e:
        logger.error("Seeding failed: %s", e)
        sys.exit(1)

    print(json.dumps(scenario.get_portfolio_summary(), indent=2))


if __name__ == "__main__":
    main()
