import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.express as px
from datetime import date

from ledger.categories import CATEGORIES, category_details
from ledger.config import load_settings
from ledger.dates import decode_date
from ledger.domain import FilterCriteria
from ledger.functional import parse_amount
from ledger.logging_setup import configure_logging
from ledger.services import LedgerService
from ledger.transforms import backup_filename, load_entries, save_entries

settings = load_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Ledger Tracker", layout="wide")


def money(value):
    return f"{value:,.0f} {settings.currency}"


def entries_to_df(entries):
    rows = [
        {
            "id": e.id,
            "date": e.date_key,
            "category": e.category,
            "amount": e.amount,
            "description": e.description,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=["id", "date", "category", "amount", "description"])


if "ledger" not in st.session_state:
    st.session_state.ledger = LedgerService(
        load_entries(settings.data_path),
        owner_ref=settings.default_owner,
        on_change=lambda entries: save_entries(settings.data_path, entries),
    )
if "editing_id" not in st.session_state:
    st.session_state.editing_id = None

service = st.session_state.ledger
stats = service.stats()

st.title("📒 Ledger")

k1, k2, k3, k4 = st.columns(4)
with k1:
    st.metric("Today", money(stats.daily))
with k2:
    st.metric("This Week", money(stats.weekly))
with k3:
    st.metric("This Month", money(stats.monthly))
with k4:
    st.metric("All Time", money(stats.total))

chart_left, chart_right = st.columns([3, 2])
with chart_left:
    series = pd.DataFrame(
        [{"day": p.day, "date": p.date_key, "total": p.total} for p in stats.seven_day_series]
    )
    fig_week = px.bar(
        series,
        x="day",
        y="total",
        hover_data=["date"],
        labels={"day": "", "total": f"Spent ({settings.currency})"},
        title="Last 7 Days",
    )
    st.plotly_chart(fig_week, use_container_width=True)

with chart_right:
    if stats.category_totals:
        df_cat = pd.DataFrame(
            [{"Category": c.name, "Total": c.total} for c in stats.category_totals]
        )
        fig_cat = px.pie(
            df_cat,
            values="Total",
            names="Category",
            color="Category",
            color_discrete_map={c.name: c.color for c in stats.category_totals},
            title="By Category",
        )
        st.plotly_chart(fig_cat, use_container_width=True)
    else:
        st.info("No expenses yet.")

st.sidebar.header("🔎 Filters")
text = st.sidebar.text_input("Search")
category = st.sidebar.selectbox("Category", ["All"] + list(CATEGORIES))
pick_date = st.sidebar.checkbox("Filter by date")
day = st.sidebar.date_input("Date", value=date.today()) if pick_date else None

criteria = FilterCriteria(
    text=text or None,
    category=None if category == "All" else category,
    date=day.isoformat() if day else None,
)
visible = service.filtered(criteria)

st.header("🧾 Entries")
if visible:
    table = entries_to_df(visible)
    table["amount"] = table["amount"].map(lambda v: parse_amount(v).map(money).get_or_else("-"))
    st.dataframe(table.drop(columns=["id"]), use_container_width=True, hide_index=True)

    chosen = st.selectbox(
        "Entry",
        [e.id for e in visible],
        format_func=lambda eid: next(f"{e.date_key} · {e.category} · {e.description}" for e in visible if e.id == eid),
    )
    b1, b2 = st.columns(2)
    with b1:
        if st.button("✏️ Edit"):
            st.session_state.editing_id = chosen
    with b2:
        if st.button("🗑 Delete"):
            service.delete(chosen)
            st.rerun()
else:
    st.info("No entries match the selected filters")

editing = next((e for e in service.entries if e.id == st.session_state.editing_id), None)
st.header("✏️ Edit Entry" if editing else "➕ Add Entry")
with st.form("entry_form", clear_on_submit=True):
    f_date = st.date_input("Date", value=decode_date(editing.date_key) if editing else date.today())
    f_category = st.selectbox(
        "Category",
        CATEGORIES,
        index=CATEGORIES.index(editing.category) if editing and editing.category in CATEGORIES else 0,
    )
    f_amount = st.text_input("Amount", value=str(editing.amount) if editing else "")
    f_description = st.text_input("Description", value=editing.description if editing else "")
    submitted = st.form_submit_button("Save")

if submitted:
    if editing:
        result = service.update(editing.id, f_date.isoformat(), f_category, f_amount, f_description)
    else:
        result = service.add(f_date.isoformat(), f_category, f_amount, f_description)
    if result.is_left():
        st.error(result.get_error()["message"])
    else:
        st.session_state.editing_id = None
        st.rerun()

st.header("📅 History")
tab_week, tab_month = st.tabs(["Weekly", "Monthly"])
for tab, history in ((tab_week, stats.weekly_history), (tab_month, stats.monthly_history)):
    with tab:
        if not history:
            st.caption("Nothing recorded yet.")
        for bucket in history:
            with st.expander(f"{bucket.label} · {money(bucket.total)} · {bucket.count} entries"):
                rows = entries_to_df(bucket.items).drop(columns=["id"])
                rows["color"] = rows["category"].map(lambda c: category_details(c).color)
                st.dataframe(rows, use_container_width=True, hide_index=True)

st.sidebar.header("💾 Backup")
st.sidebar.download_button(
    "⬇ Export JSON",
    service.export_json(),
    file_name=backup_filename(date.today()),
    mime="application/json",
)
uploaded = st.sidebar.file_uploader("Import JSON", type=["json"])
if uploaded is not None and st.sidebar.button("Import"):
    result = service.import_json(uploaded.getvalue().decode("utf-8"))
    if result.is_left():
        st.sidebar.error(result.get_error()["message"])
    else:
        st.sidebar.success(f"Imported {len(result.get_or_else(()))} entries")
        st.rerun()

if st.sidebar.button("⚠️ Clear my data"):
    removed = service.clear()
    st.sidebar.warning(f"Removed {removed} entries")
    st.rerun()
