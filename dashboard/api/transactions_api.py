"""
Transactions API endpoints for the fraud view dashboard.
"""

import logging
from typing import Any, Dict, List, Optional

from flask import Blueprint, current_app, jsonify, request

from fraudview.ml.model_trainer import ScoredDataset
from fraudview.models.transaction import ScoredTransaction
from fraudview.processing.transaction_filter import (
    filter_by_region,
    filter_by_risk_level,
    summarize,
)

logger = logging.getLogger(__name__)

transactions_bp = Blueprint("transactions", __name__)


class TransactionsAPI:
    """Read-only queries over the scored transaction set."""

    def __init__(self, dataset: ScoredDataset):
        """Initialize the transactions API."""
        self.dataset = dataset

    def _select(self, region: Optional[str], risk_level: Optional[str]):
        """Apply the optional region and risk level filters."""
        frame = self.dataset.frame
        if region:
            frame = filter_by_region(frame, region, self.dataset.categories)
        if risk_level:
            frame = filter_by_risk_level(frame, risk_level)
        return frame

    def get_transactions(
        self,
        limit: int = 100,
        region: Optional[str] = None,
        risk_level: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Get scored transactions with optional filtering."""
        if limit < 0:
            raise ValueError(f"limit must be non-negative: {limit}")

        frame = self._select(region, risk_level).head(limit)

        transactions = []
        for index, record in zip(frame.index, frame.to_dict(orient="records")):
            transaction = ScoredTransaction.from_dict(record).to_dict()
            transaction["index"] = int(index)
            transactions.append(transaction)

        return transactions

    def get_transaction(self, index: int) -> Optional[Dict[str, Any]]:
        """Get a specific transaction by its position in the generated set."""
        frame = self.dataset.frame
        if index not in frame.index:
            return None

        transaction = ScoredTransaction.from_dict(frame.loc[index].to_dict()).to_dict()
        transaction["index"] = int(index)
        return transaction

    def get_transaction_statistics(
        self, region: Optional[str] = None, risk_level: Optional[str] = None
    ) -> Dict[str, Any]:
        """Get transaction statistics for the current selection."""
        statistics = summarize(self._select(region, risk_level))
        statistics["region"] = region
        return statistics


def _get_api() -> TransactionsAPI:
    return TransactionsAPI(current_app.config["SCORED_DATASET"])


# Flask Blueprint routes
@transactions_bp.route("/api/transactions", methods=["GET"])
def get_transactions():
    """Get transactions endpoint."""
    try:
        default_limit = current_app.config.get("TRANSACTIONS_LIMIT", 100)
        limit = int(request.args.get("limit", default_limit))
        region = request.args.get("region")
        risk_level = request.args.get("risk_level")

        transactions = _get_api().get_transactions(
            limit=limit, region=region, risk_level=risk_level
        )

        return jsonify(transactions)
    except ValueError as e:
        logger.warning(f"Rejected transactions request: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error in get transactions endpoint: {e}")
        return jsonify({"error": str(e)}), 500


@transactions_bp.route("/api/transactions/<int:index>", methods=["GET"])
def get_transaction(index):
    """Get specific transaction endpoint."""
    try:
        transaction = _get_api().get_transaction(index)

        if transaction:
            return jsonify(transaction)
        else:
            return jsonify({"error": "Transaction not found"}), 404
    except Exception as e:
        logger.error(f"Error in get transaction endpoint: {e}")
        return jsonify({"error": str(e)}), 500


@transactions_bp.route("/api/statistics", methods=["GET"])
def get_statistics():
    """Get transaction statistics endpoint."""
    try:
        statistics = _get_api().get_transaction_statistics(
            region=request.args.get("region"),
            risk_level=request.args.get("risk_level"),
        )
        return jsonify(statistics)
    except ValueError as e:
        logger.warning(f"Rejected statistics request: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error in get statistics endpoint: {e}")
        return jsonify({"error": str(e)}), 500
