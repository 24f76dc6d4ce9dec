"""
Worker Wallet Demo

Console driver that walks one worker wallet through its whole lifecycle:
fund it from the treasury, let it "work", then sweep it back.
"""

import logging
import sys
import time
from decimal import Decimal
from typing import Callable, Optional

from dotenv import load_dotenv

from worker_wallets.config import PROJECT_ROOT, WorkerWalletSettings
from worker_wallets.exceptions import ConfigurationError, InvalidCredentialError, LedgerError, TransferError
from worker_wallets.manager import WorkerWalletManager
from worker_wallets.menu.menu_formatter import MenuFormatter

logger = logging.getLogger(__name__)

FAUCET_URL = "https://docs.cardano.org/cardano-testnets/tools/faucet"


def run_demo(
    manager: WorkerWalletManager,
    funding_ada: Decimal = Decimal("2"),
    min_treasury_ada: Decimal = Decimal("5"),
    menu: Optional[MenuFormatter] = None,
    sleep: Callable[[float], None] = time.sleep,
    activity_seconds: float = 3.0,
) -> bool:
    """
    Run the fund → work → reclaim flow once

    Args:
        manager: Wallet lifecycle manager
        funding_ada: ADA sent to the worker
        min_treasury_ada: Treasury balance required to start
        menu: Console formatter
        sleep: Sleep function (injectable for tests)
        activity_seconds: Length of the simulated activity

    Returns:
        True if the worker was funded and reclaimed, False if the demo aborted
    """
    menu = menu or MenuFormatter()
    treasury_address = manager.treasury_address

    menu.print_header("WORKER WALLET DEMO", f"Network: {manager.network.value}")

    initial_treasury = manager.get_ada_balance(treasury_address)
    menu.print_status_bar(manager.network.value, initial_treasury, len(manager.active_workers()))

    if initial_treasury < min_treasury_ada:
        menu.print_error(f"Treasury balance is too low, at least {min_treasury_ada} ADA is needed to run this demo.")
        menu.print_info(f"Your treasury address is: {treasury_address}")
        menu.print_info(f"Request test ADA at {FAUCET_URL}")
        return False

    menu.print_section("Worker Wallet Creation")
    try:
        worker = manager.create_and_fund_wallet(funding_ada)
    except TransferError as e:
        logger.error(f"Worker funding failed: {e}")
        menu.print_error("Failed during worker wallet creation and funding. Aborting demo.")
        return False

    sleep(1)
    worker_balance = manager.get_ada_balance(worker.identifier)
    menu.print_wallet_info("Worker", worker.identifier, worker_balance)
    menu.print_success(f"Worker wallet created and funded with ~{worker_balance:.4f} ADA")

    menu.print_section("Simulating Activity")
    sleep(activity_seconds)
    menu.print_info("Activity simulation complete")

    menu.print_section("Worker Wallet Closure")
    try:
        result = manager.close_wallet_and_reclaim_ada(worker)
    except (TransferError, LedgerError) as e:
        logger.error(f"Worker closure failed: {e}")
        menu.print_error(f"Failed to close the worker wallet {worker.identifier}.")
        if isinstance(e, TransferError) and e.tx_id:
            menu.print_warning(f"Transaction {e.tx_id} may still confirm, check it before retrying")
        return False

    if result.transfer_performed:
        menu.print_success(f"Reclaimed {result.reclaimed_ada} ADA (tx: {result.tx_id})")
    else:
        menu.print_info("Worker wallet was already empty, no transaction needed")

    sleep(1)
    menu.print_wallet_info("Worker", worker.identifier, manager.get_ada_balance(worker.identifier))
    menu.print_wallet_info("Treasury", treasury_address, manager.get_ada_balance(treasury_address))
    menu.print_success("Demo complete")
    return True


def main() -> int:
    """Console entry point"""
    load_dotenv(PROJECT_ROOT / ".env")
    settings = WorkerWalletSettings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    menu = MenuFormatter()
    try:
        manager = WorkerWalletManager.from_settings(settings)
    except (ConfigurationError, InvalidCredentialError) as e:
        menu.print_error(str(e))
        return 1

    try:
        completed = run_demo(
            manager,
            funding_ada=settings.demo_funding_ada,
            min_treasury_ada=settings.demo_min_treasury_ada,
            menu=menu,
        )
    except LedgerError as e:
        logger.error(f"Ledger unavailable: {e}", exc_info=True)
        menu.print_error(f"Ledger unavailable: {e}")
        return 1

    return 0 if completed else 1


if __name__ == "__main__":
    sys.exit(main())
