"""
Chart endpoints for the fraud view dashboard.
"""

import json
import logging
from typing import Any, Dict

import pandas as pd
import plotly.express as px
import plotly.graph_objs as go
from flask import Blueprint, current_app, jsonify, request

from fraudview.ml.model_trainer import ScoredDataset
from fraudview.models.fraud_score import RiskLevel
from fraudview.processing.transaction_filter import filter_by_region, risk_levels

logger = logging.getLogger(__name__)

charts_bp = Blueprint("charts", __name__)

RISK_COLORS = {
    RiskLevel.LOW.value: "#2ca02c",
    RiskLevel.MEDIUM.value: "#ffbf00",
    RiskLevel.HIGH.value: "#ff7f0e",
    RiskLevel.CRITICAL.value: "#d62728",
}

OAUTH_LABELS = {True: "OAuth valid", False: "OAuth invalid"}
TWO_FA_LABELS = {True: "2FA passed", False: "2FA failed"}


def _empty_figure(title: str) -> go.Figure:
    """Placeholder figure for a selection without transactions."""
    figure = go.Figure()
    figure.update_layout(
        title=title,
        xaxis={"visible": False},
        yaxis={"visible": False},
        annotations=[
            {
                "text": "No transactions for this selection",
                "showarrow": False,
                "xref": "paper",
                "yref": "paper",
                "x": 0.5,
                "y": 0.5,
            }
        ],
    )
    return figure


def build_amount_histogram(frame: pd.DataFrame) -> go.Figure:
    """Histogram of transaction amounts, stacked by fraud risk band."""
    title = "Transaction amount by fraud risk"
    if frame.empty:
        return _empty_figure(title)

    data = frame.assign(risk_level=risk_levels(frame))
    figure = px.histogram(
        data,
        x="amount",
        color="risk_level",
        nbins=50,
        log_y=True,
        category_orders={"risk_level": list(RISK_COLORS)},
        color_discrete_map=RISK_COLORS,
        labels={"amount": "Amount (USD)", "risk_level": "Risk level"},
        title=title,
    )
    figure.update_layout(barmode="stack", bargap=0.05)
    return figure


def two_fa_proportions(frame: pd.DataFrame) -> pd.DataFrame:
    """Share of 2FA outcomes within each OAuth validity group."""
    columns = ["oauth_valid", "two_fa_passed", "count", "proportion"]
    if frame.empty:
        return pd.DataFrame(columns=columns)

    counts = frame.groupby(["oauth_valid", "two_fa_passed"]).size().rename("count")
    totals = counts.groupby(level="oauth_valid").transform("sum")
    result = counts.to_frame().assign(proportion=counts / totals).reset_index()
    return result[columns]


def build_two_fa_chart(frame: pd.DataFrame) -> go.Figure:
    """Grouped bar chart of 2FA pass/fail proportions per OAuth validity."""
    title = "2FA outcome by OAuth validity"
    if frame.empty:
        return _empty_figure(title)

    data = two_fa_proportions(frame)
    data["oauth"] = data["oauth_valid"].map(OAUTH_LABELS)
    data["two_fa"] = data["two_fa_passed"].map(TWO_FA_LABELS)

    figure = px.bar(
        data,
        x="oauth",
        y="proportion",
        color="two_fa",
        barmode="group",
        range_y=[0, 1],
        category_orders={
            "oauth": [OAUTH_LABELS[True], OAUTH_LABELS[False]],
            "two_fa": [TWO_FA_LABELS[True], TWO_FA_LABELS[False]],
        },
        hover_data=["count"],
        labels={"oauth": "OAuth", "proportion": "Proportion", "two_fa": "2FA"},
        title=title,
    )
    figure.update_yaxes(tickformat=".0%")
    return figure


class ChartsAPI:
    """Builds both dashboard figures for a region selection."""

    def __init__(self, dataset: ScoredDataset):
        """Initialize the charts API."""
        self.dataset = dataset

    def get_charts(self, region: str) -> Dict[str, Any]:
        """Filter the scored frame to a region and render both charts."""
        subset = filter_by_region(self.dataset.frame, region, self.dataset.categories)
        logger.debug(f"Rendering charts for region {region} ({len(subset)} rows)")

        return {
            "region": region,
            "transaction_count": int(len(subset)),
            "amount_histogram": json.loads(build_amount_histogram(subset).to_json()),
            "two_fa_chart": json.loads(build_two_fa_chart(subset).to_json()),
        }


# Flask Blueprint routes
@charts_bp.route("/api/charts", methods=["GET"])
def get_charts():
    """Chart figures endpoint."""
    dataset = current_app.config["SCORED_DATASET"]
    region = request.args.get("region", dataset.categories[0])
    try:
        return jsonify(ChartsAPI(dataset).get_charts(region))
    except ValueError as e:
        logger.warning(f"Rejected chart request: {e}")
        return jsonify({"error": str(e)}), 400
    except Exception as e:
        logger.error(f"Error in get charts endpoint: {e}")
        return jsonify({"error": str(e)}), 500
