"""
Dashboard page: headline figures and the monthly revenue chart.
"""

import reflex as rx

from mixer_admin.components.layout import app_shell, page_header
from mixer_admin.state import DashboardState

PERIODS = ["7d", "30d", "90d", "12m"]


def _card(card) -> rx.Component:
    return rx.card(
        rx.text(card["label"], size="2", class_name="muted"),
        rx.heading(card["value"], size="5"),
        class_name="stat-card",
    )


def _revenue_chart() -> rx.Component:
    return rx.card(
        rx.hstack(
            rx.heading("Revenue", size="3"),
            rx.spacer(),
            rx.select(PERIODS, value=DashboardState.period, on_change=DashboardState.set_period, size="1"),
        ),
        rx.recharts.bar_chart(
            rx.recharts.bar(data_key="total", fill=rx.color("accent", 9)),
            rx.recharts.x_axis(data_key="month"),
            rx.recharts.y_axis(),
            rx.recharts.graphing_tooltip(),
            data=DashboardState.revenue,
            height=280,
        ),
    )


def dashboard_page() -> rx.Component:
    return app_shell(
        page_header("Dashboard", "Rentals at a glance"),
        rx.cond(
            DashboardState.error != "",
            rx.callout(DashboardState.error, icon="triangle-alert", color_scheme="red"),
        ),
        rx.grid(rx.foreach(DashboardState.cards, _card), columns="5", spacing="3"),
        _revenue_chart(),
    )
