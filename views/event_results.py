"""Event Results Page - Final placements and ratings for a single event."""

import streamlit as st

from config import Config
from event_engine import sort_events
from logo_matcher import DEFAULT_LOGO, get_logo_for_event, resolve_asset_file
from utils.formatters import format_event_date


def _get_linked_event(site_data):
    """Event chosen via ?event=<slug>, None when there is no (valid) link."""
    slug = st.query_params.get('event')
    if slug:
        event_name = site_data.find_event_by_slug(slug)
        if event_name is None:
            st.warning(f"⚠️ Event not found: '{slug}'")
        return event_name
    return None


def render(site_data):
    """Render the Event Results page."""
    events_df = sort_events(site_data.get_events())

    if len(events_df) == 0:
        st.info("No events found in the rating history.")
        return

    event_names = events_df['event_name'].tolist()
    linked_event = _get_linked_event(site_data)
    default_index = event_names.index(linked_event) if linked_event in event_names else 0

    event_name = st.selectbox("Select Event", event_names, index=default_index, key="event_results_event")
    if not event_name:
        st.info("Event not found.")
        return

    # Keep the URL shareable
    st.query_params['event'] = events_df.iloc[event_names.index(event_name)]['slug']

    results_df = site_data.get_event_results(event_name)
    if len(results_df) == 0:
        st.info("Event not found.")
        return

    event_info = events_df.iloc[event_names.index(event_name)]

    # Header: logo, name and date
    col_logo, col_title = st.columns([1, 11])
    with col_logo:
        logo_file = resolve_asset_file(get_logo_for_event(event_name), DEFAULT_LOGO, Config.ASSET_DIR)
        if logo_file is not None:
            st.image(str(logo_file), width=64)
    with col_title:
        st.header(event_name)
        event_date = format_event_date(results_df.iloc[0]['event_date'])
        if event_date:
            st.caption(event_date)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Players", int(event_info['participant_count']))
    with col2:
        st.metric("Average Rating", f"{event_info['average_rating']:.2f}")
    with col3:
        st.metric("Difficulty", event_info['difficulty_tier'])

    st.divider()

    display_df = results_df[['rank_at_event', 'player_name', 'rating_after']].copy()
    display_df['rating_after'] = display_df['rating_after'].round(2)

    # Color-code the podium
    def highlight_podium(row):
        colors = {1: 'background-color: #ffd70033', 2: 'background-color: #c0c0c033', 3: 'background-color: #cd7f3233'}
        return [colors.get(row['rank_at_event'], '')] * len(row)

    styled_df = display_df.style.apply(highlight_podium, axis=1)

    st.dataframe(
        styled_df,
        use_container_width=True,
        hide_index=True,
        height=750,
        column_config={
            "rank_at_event": st.column_config.NumberColumn("Rank", format="#%d"),
            "player_name": st.column_config.TextColumn("Player"),
            "rating_after": st.column_config.NumberColumn("Rating After", format="%.2f"),
        }
    )
