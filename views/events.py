"""Events Page - Every tracked event with its field strength."""

import plotly.express as px
import streamlit as st

from event_engine import (
    DIFFICULTY_TIERS, LOWEST_TIER, UNKNOWN_TIER,
    SORT_BY_DATE, SORT_BY_RATING, filter_events, sort_events
)
from logo_matcher import get_logo_for_event

SORT_OPTIONS = {
    "📆 Date": SORT_BY_DATE,
    "📈 Average Rating": SORT_BY_RATING,
}


def render(site_data):
    """Render the Events page."""
    st.header("Events")

    events_df = site_data.get_events()

    if len(events_df) == 0:
        st.info("No events found in the rating history.")
        return

    st.info("""
    **Difficulty tiers** are based on the average rating of the field after the event,
    from **Noob** (below 600) up to **Legendary** (1600+).
    """)

    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search_event = st.text_input("🔍 Search Events", "", key="events_search")
    with col2:
        sort_label = st.selectbox("Sort By", list(SORT_OPTIONS.keys()), index=0, key="events_sort")
    with col3:
        direction = st.radio("Order", ["Descending", "Ascending"], horizontal=True, key="events_order")

    filtered_df = filter_events(events_df, search_event)
    sorted_df = sort_events(filtered_df, sort_by=SORT_OPTIONS[sort_label], ascending=(direction == "Ascending"))

    st.subheader(f"Events ({len(sorted_df)})")

    display_df = sorted_df.copy()
    display_df['logo'] = display_df['event_name'].map(get_logo_for_event)
    display_df['average_rating'] = display_df['average_rating'].round(2)
    display_df = display_df[['event_name', 'event_date', 'participant_count', 'average_rating',
                             'difficulty_tier', 'slug', 'logo']]

    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
        height=750,
        column_config={
            "event_name": st.column_config.TextColumn("Event", width="large"),
            "event_date": st.column_config.TextColumn("Date", width="small"),
            "participant_count": st.column_config.NumberColumn("Players", format="%d"),
            "average_rating": st.column_config.NumberColumn("Avg Rating", format="%.2f"),
            "difficulty_tier": st.column_config.TextColumn("Difficulty"),
            "slug": st.column_config.TextColumn("Link (?event=)", width="medium"),
            "logo": st.column_config.TextColumn("Logo", width="small"),
        }
    )

    # Tier distribution across the filtered events
    if len(sorted_df) > 0:
        st.divider()
        st.subheader("Difficulty Distribution")
        tier_order = [UNKNOWN_TIER, LOWEST_TIER] + [tier for _, tier in reversed(DIFFICULTY_TIERS)]
        tier_counts = (sorted_df['difficulty_tier']
                       .value_counts()
                       .reindex(tier_order, fill_value=0)
                       .rename_axis('difficulty_tier')
                       .reset_index(name='events'))

        fig = px.bar(
            tier_counts,
            x='difficulty_tier',
            y='events',
            labels={'difficulty_tier': 'Difficulty Tier', 'events': 'Events'},
            color_discrete_sequence=['#8a78f0']
        )
        fig.update_layout(height=400, xaxis=dict(tickangle=45))
        st.plotly_chart(fig, use_container_width=True)
