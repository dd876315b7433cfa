"""
Chart service module for the price chart.

Converts a priced flight list into a validated DataFrame and builds
the price-over-departure-time figure shown above the results.
"""

import logging
from typing import Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

from src.flight_search.schemas.flight import Flight, FlightFrame, FlightFrameSchema
from src.flight_search.schemas.search import SearchParams
from src.flight_search.services.pricing_service import effective_price

logger = logging.getLogger(__name__)

__all__ = [
    "FRAME_COLUMNS",
    "build_flight_frame",
    "create_price_trend_figure",
]

FRAME_COLUMNS = (
    "flight_id",
    "price",
    "effective_price",
    "airline_code",
    "airline_name",
    "stops",
    "duration",
    "departure_at",
)

PRICE_LINE_COLOR = "#4f46e5"
BEST_PRICE_COLOR = "#10b981"
CHART_HEIGHT = 260


def build_flight_frame(flights: Sequence[Flight], params: SearchParams) -> FlightFrame:
    """
    Build the DataFrame form of a flight list, ordered by departure.

    Args:
        flights: Flights to chart (usually the filtered view).
        params: Pricing basis for the effective_price column.

    Returns:
        DataFrame validated against FlightFrameSchema.
    """
    if not flights:
        return pd.DataFrame(columns=list(FRAME_COLUMNS))

    df = pd.DataFrame(
        {
            "flight_id": [f.id for f in flights],
            "price": [float(f.price) for f in flights],
            "effective_price": [
                effective_price(f, params.passengers, params.cabin_class)
                for f in flights
            ],
            "airline_code": [f.airline.code for f in flights],
            "airline_name": [f.airline.name for f in flights],
            "stops": [f.stops for f in flights],
            "duration": [f.duration for f in flights],
            # Wall-clock departure, offsets dropped so mixed zones still compare
            "departure_at": [f.departure_time.replace(tzinfo=None) for f in flights],
        }
    )
    df = df.sort_values("departure_at", kind="stable").reset_index(drop=True)

    return FlightFrameSchema.validate(df)


def create_price_trend_figure(df: pd.DataFrame) -> Optional[go.Figure]:
    """
    Create an area chart of effective price by departure time.

    A dashed reference line marks the lowest price.

    Args:
        df: Frame from ``build_flight_frame``.

    Returns:
        Plotly Figure object, or None if data is empty.
    """
    if df.empty:
        return None

    best_price = float(df["effective_price"].min())

    fig = go.Figure(
        go.Scatter(
            x=df["departure_at"],
            y=df["effective_price"],
            mode="lines+markers",
            fill="tozeroy",
            line={"color": PRICE_LINE_COLOR, "shape": "spline"},
            customdata=df[["airline_name", "stops"]].to_numpy(),
            hovertemplate=(
                "%{x|%H:%M}<br>$%{y:.0f}<br>%{customdata[0]}"
                " · %{customdata[1]} stop(s)<extra></extra>"
            ),
            name="Price",
        )
    )
    fig.add_hline(
        y=best_price,
        line_dash="dash",
        line_color=BEST_PRICE_COLOR,
        annotation_text=f"Best: ${best_price:.0f}",
        annotation_position="top left",
    )
    fig.update_layout(
        height=CHART_HEIGHT,
        showlegend=False,
        xaxis_title="Departure",
        yaxis_title="Price",
        margin={"l": 40, "r": 20, "t": 20, "b": 40},
    )

    logger.debug("Built price trend figure for %d flights", len(df))
    return fig
