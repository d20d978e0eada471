"""
Streamlit Frontend for Spendify

A single narrow column meant to be comfortable on a phone:
monthly chart, budgets, category filter and search, the expense list
with edit/delete, the add form, and a CSV download.

DESIGN PRINCIPLES:
1. The page only reads tracker state and calls tracker operations
2. Invalid form input simply does not add anything
3. Overspend alerts show up as toasts
"""

import datetime

import pandas as pd
import streamlit as st

from spendify.audit import configure_logging
from spendify.config import get_settings, validate_all_settings
from spendify.export import export_filename
from spendify.models import ALL_CATEGORIES, DEFAULT_CATEGORIES, BudgetAlert, Expense
from spendify.orchestrator import ExpenseTracker, create_app_components
from spendify.services.notifications import AlertChannelInterface


# Page configuration
st.set_page_config(
    page_title="Expense Tracker",
    page_icon="💸",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for a phone-sized layout
st.markdown("""
<style>
    .block-container {
        max-width: 480px;
    }
    .stButton>button {
        width: 100%;
    }
    .expense-amount {
        text-align: right;
        font-weight: bold;
    }
    .expense-category {
        color: gray;
        font-size: 0.9em;
    }
</style>
""", unsafe_allow_html=True)


class StreamlitToastChannel(AlertChannelInterface):
    """
    Shows overspend alerts as toasts.

    Alerts can be raised while the tracker is being built inside a cached
    function, so they are queued and shown by flush() on the next render.
    """

    def __init__(self, permitted: bool):
        self._permitted = permitted
        self._pending: list[BudgetAlert] = []

    def request_permission(self) -> bool:
        return self._permitted

    def send(self, alert: BudgetAlert) -> bool:
        self._pending.append(alert)
        return True

    def flush(self) -> None:
        while self._pending:
            alert = self._pending.pop(0)
            st.toast(f"**{alert.title}**\n\n{alert.body}", icon="⚠️")


@st.cache_resource
def get_components() -> tuple[ExpenseTracker, StreamlitToastChannel]:
    """Get or create the tracker (cached for the life of the server)."""
    settings = get_settings()
    configure_logging(settings.app.log_level)
    channel = StreamlitToastChannel(permitted=settings.app.notifications_enabled)
    try:
        return create_app_components(use_storage=True, channel=channel), channel
    except Exception as e:
        st.error(f"Failed to initialize storage: {e}")
        return create_app_components(use_storage=False, channel=channel), channel


def format_amount(amount) -> str:
    symbol = get_settings().app.currency_symbol
    return f"{symbol}{amount:,.2f}"


def main():
    """Main application entry point."""
    tracker, channel = get_components()

    header_col, export_col = st.columns([3, 1])
    with header_col:
        st.title("Expense Tracker")
    with export_col:
        st.download_button(
            "Export",
            data=tracker.export_csv(record=False).encode("utf-8"),
            file_name=export_filename(),
            mime="text/csv",
            on_click=tracker.record_export,
        )

    render_summary_chart(tracker)
    render_budgets(tracker)
    render_filters(tracker)
    render_expense_list(tracker)
    render_add_form(tracker)
    render_sidebar(tracker)

    channel.flush()


def render_summary_chart(tracker: ExpenseTracker):
    """Bar chart of this month's totals per category."""
    summary = tracker.monthly_summary()
    st.subheader(f"📊 {summary.label}")

    if not summary.totals:
        st.caption("No expenses this month yet.")
        return

    chart_data = pd.DataFrame(
        [(category, float(amount)) for category, amount in summary.sorted_items()],
        columns=["Category", "Amount"],
    )
    st.bar_chart(
        chart_data,
        x="Category",
        y="Amount",
        color="Category",
        height=get_settings().app.chart_height,
    )
    st.caption(f"Total this month: {format_amount(summary.total)}")


def render_budgets(tracker: ExpenseTracker):
    """Budget progress plus the form that sets a budget."""
    with st.expander("💰 Budgets"):
        statuses = tracker.budget_statuses()
        if not statuses:
            st.caption("No budgets set.")
        for status in statuses:
            label = (
                f"{status.category}: {format_amount(status.spent)} "
                f"of {format_amount(status.limit)}"
            )
            if status.exceeded:
                label += " 🔴"
            st.progress(min(status.used_ratio, 1.0), text=label)

        with st.form("set_budget", clear_on_submit=True):
            category = st.selectbox("Category", options=DEFAULT_CATEGORIES)
            limit_text = st.text_input("Monthly budget", placeholder="0.00")
            if st.form_submit_button("Set Budget"):
                if tracker.set_budget(category, limit_text):
                    st.rerun()


def render_filters(tracker: ExpenseTracker):
    """Category picker and search box."""
    options = [ALL_CATEGORIES] + DEFAULT_CATEGORIES
    if "filter_category" not in st.session_state:
        current = tracker.state.filter_category
        st.session_state.filter_category = current if current in options else ALL_CATEGORIES
    if "search_text" not in st.session_state:
        st.session_state.search_text = tracker.state.search_text

    category = st.radio(
        "Category",
        options=options,
        key="filter_category",
        horizontal=True,
        label_visibility="collapsed",
    )
    tracker.set_filter(category)

    search = st.text_input(
        "Search",
        key="search_text",
        placeholder="🔍 Search expenses",
        label_visibility="collapsed",
    )
    tracker.set_search(search)


def render_expense_list(tracker: ExpenseTracker):
    """Visible expenses, each with edit and delete."""
    expenses = tracker.visible_expenses()
    if not expenses:
        st.info("No expenses to show.")
        return

    for expense in expenses:
        name_col, amount_col, delete_col = st.columns([3, 2, 1])
        with name_col:
            st.markdown(f"**{expense.name}**")
            st.markdown(
                f'<span class="expense-category">{expense.category} · '
                f'{expense.date.strftime("%d %b %Y")}</span>',
                unsafe_allow_html=True,
            )
        with amount_col:
            st.markdown(
                f'<div class="expense-amount">{format_amount(expense.amount)}</div>',
                unsafe_allow_html=True,
            )
        with delete_col:
            if st.button("🗑️", key=f"delete-{expense.id}", help="Delete"):
                tracker.delete_expense(expense.id)
                st.rerun()

        with st.expander("Edit"):
            render_edit_form(tracker, expense)


def render_edit_form(tracker: ExpenseTracker, expense: Expense):
    """Edit form prefilled with the expense's current values."""
    with st.form(f"edit-{expense.id}"):
        name = st.text_input("Expense Name", value=expense.name)
        amount_text = st.text_input("Amount", value=str(expense.amount))
        options = list(DEFAULT_CATEGORIES)
        if expense.category not in options:
            options.append(expense.category)
        category = st.selectbox(
            "Category",
            options=options,
            index=options.index(expense.category),
        )
        expense_date = st.date_input("Date", value=expense.date)
        if st.form_submit_button("Save Changes"):
            if tracker.update_expense(
                expense.id,
                name,
                amount_text,
                category,
                expense_date,
            ):
                st.rerun()


def render_add_form(tracker: ExpenseTracker):
    """The add-expense form at the bottom of the page."""
    st.markdown("---")
    with st.form("add_expense", clear_on_submit=True):
        name_col, amount_col = st.columns(2)
        with name_col:
            name = st.text_input("Expense Name")
        with amount_col:
            amount_text = st.text_input("Amount", placeholder="0.00")

        category_col, date_col = st.columns(2)
        with category_col:
            category = st.selectbox("Category", options=DEFAULT_CATEGORIES)
        with date_col:
            expense_date = st.date_input("Date", value=datetime.date.today())

        if st.form_submit_button("Add Expense", type="primary"):
            if tracker.add_expense(name, amount_text, category, expense_date):
                st.rerun()


def render_sidebar(tracker: ExpenseTracker):
    """Storage status and recent activity."""
    st.sidebar.title("⚙️ Settings")

    status = validate_all_settings()
    for name, key in [("Storage", "storage"), ("App", "app")]:
        if status.get(key, False):
            st.sidebar.success(f"✅ {name} settings OK")
        else:
            st.sidebar.error(f"❌ {name}: {status.get(f'{key}_error', 'Not configured')}")

    if status.get("storage", False):
        st.sidebar.caption(f"Data directory: {get_settings().storage.data_dir}")

    st.sidebar.markdown("---")
    st.sidebar.markdown("### Recent activity")
    events = tracker.recent_activity(limit=10)
    if not events:
        st.sidebar.caption("Nothing yet.")
    for event in events:
        st.sidebar.caption(f"{event.timestamp.strftime('%H:%M:%S')} · {event.description}")


if __name__ == "__main__":
    main()
