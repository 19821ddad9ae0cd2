"""
Streamlit Frontend for Activity Log

Two pages:
1. Add Activity - the entry form
2. View Activities - statistics, category filter, delete and clear-all

All data goes through the HTTP API; the frontend never talks to Notion.
"""

from datetime import date, datetime

import streamlit as st

from activity_log.client import ActivityAPIClient, APIClientError
from activity_log.models.activity import ActivityCategory, ActivityInput
from activity_log.queries import filter_by_category, summarize


CATEGORY_ICONS = {
    ActivityCategory.COMPETITIVE_TRADING.value: "💹",
    ActivityCategory.FEE.value: "💰",
    ActivityCategory.CAIR_AIRDROP.value: "🎁",
}

FLASH_KEY = "flash_message"


# Page configuration
st.set_page_config(
    page_title="Activity Log",
    page_icon="📝",
    layout="wide",
    initial_sidebar_state="expanded",
)


@st.cache_resource
def get_client() -> ActivityAPIClient:
    """Get or create the API client (cached)."""
    return ActivityAPIClient()


def category_label(category: str) -> str:
    return f"{CATEGORY_ICONS.get(category, '📂')} {category}"


def main():
    """Main application entry point."""
    client = get_client()

    st.sidebar.title("📝 Activity Log")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📝 Add Activity", "📊 View Activities", "⚙️ Settings"],
        index=0,
    )

    if page == "📝 Add Activity":
        render_add_page(client)
    elif page == "📊 View Activities":
        render_view_page(client)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_add_page(client: ActivityAPIClient):
    """Render the entry form."""
    st.title("📝 Add Activity")

    with st.form("activity_form", clear_on_submit=True):
        col1, col2 = st.columns(2)

        with col1:
            entry_date = st.date_input("📅 Date *", value=date.today())
            category = st.selectbox(
                "📂 Category *",
                options=ActivityCategory.values(),
                format_func=category_label,
            )

        with col2:
            entry_time = st.text_input(
                "🕐 Time *",
                value=datetime.now().strftime("%H:%M"),
            )
            amount = st.number_input("💲 Amount", min_value=0, step=1, value=0)

        note = st.text_area("📝 Note (optional)", placeholder="Add a note...")
        submitted = st.form_submit_button("💾 Save", type="primary")

    if not submitted:
        return

    if not entry_time.strip():
        st.error("Please enter the time")
        return

    try:
        message = client.add_activity(
            ActivityInput(
                date=entry_date.isoformat(),
                time=entry_time,
                category=category,
                note=note,
                amount=int(amount),
            )
        )
        st.success(f"✅ {message}")
    except APIClientError as e:
        st.error(f"❌ {e}")


def render_view_page(client: ActivityAPIClient):
    """Render the list with statistics and filters."""
    st.title("📊 Activities")

    # Set before st.rerun(), shown once on the next run
    flash = st.session_state.pop(FLASH_KEY, None)
    if flash:
        st.success(f"✅ {flash}")

    try:
        activities = client.list_activities()
    except APIClientError as e:
        st.error(f"❌ Could not load activities: {e}")
        return

    if not activities:
        st.info("No activities yet. Use the 'Add Activity' page to add one.")
        return

    # Statistics
    summary = summarize(activities)
    # Form categories always get a card, stored extras follow
    shown_categories = ActivityCategory.values() + [
        item.category for item in summary.categories
        if item.category not in ActivityCategory.values()
    ]
    cards = st.columns(len(shown_categories) + 1)
    cards[0].metric("Total Activities", summary.total_count)
    for card, category in zip(cards[1:], shown_categories):
        item = summary.for_category(category)
        card.metric(category_label(item.category), item.count)
        card.caption(f"Total: {item.total_amount:,}")

    st.markdown("---")

    # Filters
    filter_category = st.selectbox(
        "🔍 Filter by Category",
        options=[""] + ActivityCategory.values(),
        format_func=lambda c: "All Categories" if not c else category_label(c),
    )
    shown = filter_by_category(activities, filter_category)
    st.subheader(f"📋 {filter_category or 'All Activities'} ({len(shown)})")

    for activity in shown:
        row = st.container(border=True)
        left, right = row.columns([5, 1])
        left.markdown(
            f"**📅 {activity.date}** 🕐 {activity.time} · "
            f"{category_label(activity.category)} · **{activity.amount:,}**"
        )
        if activity.note:
            left.caption(activity.note)
        if right.button("🗑️ Delete", key=f"delete-{activity.id}"):
            try:
                st.session_state[FLASH_KEY] = client.delete_activity(activity.id)
                st.rerun()
            except APIClientError as e:
                st.error(f"❌ {e}")

    st.markdown("---")
    confirm = st.checkbox("I understand this deletes ALL activities")
    if st.button("🗑️ Delete All", disabled=not confirm):
        try:
            st.session_state[FLASH_KEY] = client.clear_all()
            st.rerun()
        except APIClientError as e:
            st.error(f"❌ {e}")


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")
    st.markdown("### Configuration Status")

    from activity_log.config import validate_all_settings

    status = validate_all_settings()

    for name, key in [("Notion (Storage)", "notion"), ("Application", "app")]:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    st.markdown(
        "To configure the application, create a `.env` file with "
        "`NOTION_TOKEN` and `NOTION_DATABASE_ID`. See `.env.example`."
    )


if __name__ == "__main__":
    main()
