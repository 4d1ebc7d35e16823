"""
Dashboard business logic: headline counters and latest contracts.
"""

from __future__ import annotations

import logging

from app.schemas.contract import ContractWithClient
from app.schemas.dashboard import DashboardResponse, DashboardStats
from app.services.gateway import DataGateway, StoreError
from app.utils.constants import CLOSED_STATUSES, WARRANTY_STATUS

logger = logging.getLogger(__name__)

RECENT_CONTRACTS = 5


def get_dashboard(gateway: DataGateway) -> DashboardResponse:
    """Compute the dashboard summary.

    ``pending_contracts`` counts every contract that is neither delivered
    nor finished, including statuses outside the catalog.  Like every other
    read, a store failure yields an empty (all-zero) dashboard.
    """
    try:
        total_contracts = gateway.count("contracts")
        stats = DashboardStats(
            total_clients=gateway.count("clients"),
            total_contracts=total_contracts,
            pending_contracts=total_contracts
            - gateway.count("contracts", in_={"status": sorted(CLOSED_STATUSES)}),
            in_warranty=gateway.count("contracts", eq={"status": WARRANTY_STATUS}),
        )
        recent = gateway.select("contracts", joins=("client",), limit=RECENT_CONTRACTS)
    except StoreError:
        logger.exception("Error loading dashboard; rendering empty summary")
        return DashboardResponse(
            stats=DashboardStats(
                total_clients=0, total_contracts=0, pending_contracts=0, in_warranty=0
            ),
            recent_contracts=[],
        )

    logger.debug("dashboard: %s", stats)
    return DashboardResponse(
        stats=stats,
        recent_contracts=[ContractWithClient.model_validate(c) for c in recent],
    )
