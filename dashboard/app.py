"""
Streamlit Dashboard for the Hedge Calculator
Calculator and manual modes, free bet toggle and betting fee card
"""

import streamlit as st
import pandas as pd

from dashboard.utils import (
    OUTCOME_LABELS,
    api_get,
    api_post,
    format_money,
    sidebar_api_key,
)

st.set_page_config(
    page_title="Hedge Calculator",
    page_icon="🛡️",
    layout="centered",
)

sidebar_api_key()


# ==============================================================================
# SIDEBAR
# ==============================================================================

with st.sidebar:
    st.title("🛡️ Hedge Calculator")
    mode = st.radio(
        "Mode",
        ["Calculator", "Manual"],
        help="Calculator solves the hedge stake; Manual evaluates two stakes you pick.",
    )


# ==============================================================================
# BETTING FEE CARD
# ==============================================================================

def fee_card():
    """Render the fee card and return the fee payload (or None)."""
    if not st.toggle("Add betting fee", key="show_fee"):
        return None

    fee_mode = st.radio(
        "Fee source", ["location", "state", "custom"],
        format_func=str.title, horizontal=True, key="fee_mode",
    )
    payload = {"mode": fee_mode, "include_fee": False}
    fee_per_bet = 0.0
    label = None

    if fee_mode == "location":
        col1, col2 = st.columns(2)
        lat = col1.number_input("Latitude", -90.0, 90.0, value=None, format="%.4f", key="latitude")
        lon = col2.number_input("Longitude", -180.0, 180.0, value=None, format="%.4f", key="longitude")
        located = st.session_state.get("located")
        if located and located["coords"] != (lat, lon):
            located = None
        if lat is None or lon is None:
            st.caption("Enter your coordinates to detect the local betting fee")
        elif st.button("Detect location", key="detect_location"):
            found = api_post("/api/fees/locate", {"latitude": lat, "longitude": lon})
            if found:
                located = {**found, "coords": (lat, lon)}
                st.session_state["located"] = located
        if located:
            fee_per_bet = located["fee_per_bet"]
            label = located["state"]
            # Already geocoded: the calculation is charged by state
            payload.update(mode="state", state=label)

    elif fee_mode == "state":
        table = api_get("/api/fees/states")
        if table:
            df = pd.DataFrame(table["states"])
            state = st.selectbox("State", df["state"].tolist(), index=None)
            if state:
                fee_per_bet = float(df.loc[df["state"] == state, "fee_per_bet"].iloc[0])
                label = state
                payload["state"] = state
            with st.expander("All state fees"):
                st.dataframe(
                    df.rename(columns={"fee_per_bet": "Fee / bet", "total_fee": "Both legs"}),
                    hide_index=True,
                )

    else:
        custom = st.text_input("Fee per bet ($)", placeholder="0.00")
        payload["custom_fee"] = custom
        try:
            fee_per_bet = max(float(custom), 0.0) if custom else 0.0
        except ValueError:
            fee_per_bet = 0.0
        if fee_per_bet > 0:
            st.caption(f"Total fees for 2 bets: {format_money(fee_per_bet * 2)}")

    if label:
        st.write(f"Fee per bet in **{label}**: {format_money(fee_per_bet)}")
        if fee_per_bet == 0:
            st.success(f"No betting fee in {label}!")

    if fee_per_bet > 0:
        payload["include_fee"] = st.toggle(
            "Include fees as expense",
            key="include_fee",
            help="Deducts the fee for both bets from your profit",
        )
    return payload


# ==============================================================================
# INPUTS
# ==============================================================================

fee_payload = fee_card()

st.subheader("ORIGINAL BET")
col1, col2 = st.columns(2)
original_stake = col1.number_input(
    "Stake ($)", min_value=0.0, value=None, step=10.0, key="original_stake"
)
original_odds = col2.number_input(
    "Odds (American)", value=None, step=5.0, format="%.0f", key="original_odds"
)
is_free_bet = st.toggle("Free bet", help="Stake is not returned if the bet wins")

st.subheader("HEDGE BET")
col1, col2 = st.columns(2)
hedge_odds = col1.number_input(
    "Hedge odds (American)", value=None, step=5.0, format="%.0f", key="hedge_odds"
)
hedge_stake = None
if mode == "Manual":
    hedge_stake = col2.number_input("Hedge stake ($)", min_value=0.0, value=None, step=10.0)

calculate = st.button(
    "CALCULATE" if mode == "Calculator" else "CALCULATE PROFIT",
    type="primary",
    key="calculate",
)


# ==============================================================================
# RESULTS
# ==============================================================================

def _required_missing(*values) -> bool:
    return any(v is None for v in values)


if calculate:
    if _required_missing(original_stake, original_odds, hedge_odds) or (
        mode == "Manual" and hedge_stake is None
    ):
        st.warning("Enter valid values")
    elif mode == "Calculator":
        result = api_post(
            "/api/hedge/solve",
            {
                "original_stake": original_stake,
                "original_odds": original_odds,
                "hedge_odds": hedge_odds,
                "is_free_bet": is_free_bet,
                "fee": fee_payload,
            },
            quiet_422=True,
        )
        if result:
            st.subheader("RESULTS")
            st.metric("Hedge Amount", format_money(result["hedge_stake"]))
            c1, c2 = st.columns(2)
            c1.metric("If Original Wins", format_money(result["profit_if_original_wins"]))
            c2.metric("If Hedge Wins", format_money(result["profit_if_hedge_wins"]))
            st.metric("GUARANTEED PROFIT", format_money(result["guaranteed_profit"]))
            if result["total_fee"] > 0:
                st.caption(
                    f"* Includes {format_money(result['total_fee'])} betting fees "
                    f"({result.get('fee_jurisdiction') or 'custom'})"
                )
    else:
        result = api_post(
            "/api/hedge/evaluate",
            {
                "original_stake": original_stake,
                "original_odds": original_odds,
                "hedge_stake": hedge_stake,
                "hedge_odds": hedge_odds,
                "is_free_bet": is_free_bet,
                "fee": fee_payload,
            },
            quiet_422=True,
        )
        if result:
            st.subheader("RESULTS")
            st.metric("Total Staked", format_money(result["total_staked"]))
            c1, c2 = st.columns(2)
            with c1:
                st.markdown(f"**IF ORIGINAL WINS ({original_odds:+.0f})**")
                st.metric("You Receive", format_money(result["original_payout"]))
                st.metric("Net Profit", format_money(result["profit_if_original_wins"], signed=True))
            with c2:
                st.markdown(f"**IF HEDGE WINS ({hedge_odds:+.0f})**")
                st.metric("You Receive", format_money(result["hedge_payout"]))
                st.metric("Net Profit", format_money(result["profit_if_hedge_wins"], signed=True))
            st.info(OUTCOME_LABELS[result["outcome"]])
            if result["total_fee"] > 0:
                st.caption(
                    f"* Includes {format_money(result['total_fee'])} betting fees "
                    f"({result.get('fee_jurisdiction') or 'custom'})"
                )
