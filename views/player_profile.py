"""Player Profile Page - Current standing, rating progression and event history."""

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from config import Config
from logo_matcher import DEFAULT_AVATAR, get_avatar_for_player, resolve_asset_file
from player_engine import get_rank_medal
from utils.formatters import format_rating, format_rating_change, strip_date_from_event_name, slugify

MEDAL_COLORS = {
    'gold': 'background-color: #ffd70033',
    'silver': 'background-color: #c0c0c033',
    'bronze': 'background-color: #cd7f3233',
}


def _build_rating_chart(chart_df: pd.DataFrame) -> go.Figure:
    """Rating progression line with a range slider underneath."""
    hover_text = []
    for _, point in chart_df.iterrows():
        lines = [f"<b>{point['event_name']}</b>"]
        if pd.notna(point['rank_at_event']):
            lines.append(f"Rank: #{int(point['rank_at_event'])}")
        if pd.notna(point['rating']):
            lines.append(f"Rating After: {point['rating']:.0f}")
        change_text = format_rating_change(point['rating_change'])
        if change_text:
            color = '#10b981' if point['rating_change'] >= 0 else '#f43f5e'
            lines.append(f"Change: <span style='color:{color}'>{change_text}</span>")
        hover_text.append('<br>'.join(lines))

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=chart_df['timestamp'],
        y=chart_df['rating'],
        mode='lines',
        name='Rating',
        line=dict(color='#8a78f0', width=3, shape='spline'),
        text=hover_text,
        hovertemplate='%{text}<extra></extra>'
    ))

    ratings = chart_df['rating'].dropna()
    y_axis_range = None
    if len(ratings) > 0:
        # Same padding as the original chart: 100 points above and below
        y_axis_range = [ratings.min() - 100, ratings.max() + 100]

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Rating",
        hovermode='closest',
        height=450,
        showlegend=False,
        xaxis=dict(
            rangeslider=dict(visible=True),
            showgrid=True,
            gridcolor='lightgray',
        ),
        yaxis=dict(
            showgrid=True,
            gridcolor='lightgray',
            range=y_axis_range
        ),
        margin=dict(t=20)
    )
    return fig


def render(site_data):
    """Render the Player Profile page."""
    player_names = site_data.get_player_names()

    if len(player_names) == 0:
        st.info("No leaderboard data available.")
        return

    linked_player = st.query_params.get('player')
    if linked_player and site_data.get_player_summary(linked_player) is None:
        st.warning("Player not found.")
    default_index = player_names.index(linked_player) if linked_player in player_names else 0

    player_name = st.selectbox("Select Player", player_names, index=default_index, key="profile_player")
    summary = site_data.get_player_summary(player_name)
    if summary is None:
        st.info("Player not found.")
        return

    st.query_params['player'] = player_name
    profile = site_data.get_player_profile(player_name)

    # Header: avatar and name
    col_avatar, col_title = st.columns([1, 11])
    with col_avatar:
        avatar_file = resolve_asset_file(get_avatar_for_player(player_name), DEFAULT_AVATAR, Config.ASSET_DIR)
        if avatar_file is not None:
            st.image(str(avatar_file), width=80)
    with col_title:
        st.header(player_name)

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Current Rating", format_rating(summary.get('Rating')))
    with col2:
        st.metric("Peak Rating", profile.peak_rating_display)
    with col3:
        st.metric("Overall Rank", f"#{summary.get('Rank')}")

    st.divider()

    col_chart, col_history = st.columns([3, 2])

    with col_chart:
        st.subheader("Rating Progression")
        chart_df = profile.chart_dataframe().dropna(subset=['timestamp'])
        if len(chart_df) > 0:
            st.plotly_chart(_build_rating_chart(chart_df), use_container_width=True)
        else:
            st.info("No rating history available for this player.")

    with col_history:
        st.subheader("Event History")
        if len(profile.ranked_events) == 0:
            st.info("No events played yet.")
        else:
            history_df = pd.DataFrame([{
                'event': strip_date_from_event_name(record.get('event_name')),
                'rank': record.get('rank_at_event'),
                'medal': get_rank_medal(record.get('rank_at_event')),
                'link': f"?event={slugify(record.get('event_name'))}",
            } for record in profile.ranked_events])

            def highlight_medals(row):
                return [MEDAL_COLORS.get(row['medal'], '')] * len(row)

            styled_df = history_df.style.apply(highlight_medals, axis=1)

            st.dataframe(
                styled_df,
                use_container_width=True,
                hide_index=True,
                height=450,
                column_order=['event', 'rank', 'link'],
                column_config={
                    "event": st.column_config.TextColumn("Event", width="medium"),
                    "rank": st.column_config.NumberColumn("Rank", format="#%d", width="small"),
                    "link": st.column_config.LinkColumn("Results", display_text="View", width="small"),
                }
            )
