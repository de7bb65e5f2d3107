"""Leaderboard Page - Current ELO standings for every player."""

import streamlit as st


def render(site_data):
    """Render the Leaderboard page."""
    st.header("Player Leaderboard")

    if site_data.player_count == 0:
        st.info("No leaderboard data available.")
        return

    players_df = site_data.search_players()

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Players", len(players_df))
    with col2:
        top_player = players_df.iloc[0]
        st.metric("Top Ranked Player", top_player['Player_Name'],
                  delta=f"Rating: {top_player['Rating']:.2f}")
    with col3:
        st.metric("Average Rating", f"{players_df['Rating'].mean():.2f}")

    st.divider()

    search_player = st.text_input("🔍 Search Players", "", key="leaderboard_search")
    filtered_df = site_data.search_players(search_player)

    st.subheader(f"Rankings ({len(filtered_df)} players)")

    display_df = filtered_df.copy()
    display_df['Rating'] = display_df['Rating'].round(2)

    st.dataframe(
        display_df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "Rank": st.column_config.NumberColumn("Rank", format="%d"),
            "Player_Name": st.column_config.TextColumn("Player"),
            "Rating": st.column_config.NumberColumn("Rating", format="%.2f"),
        }
    )
    st.caption("Open a player's profile from the 👤 Player Profile page or with ?player=<name> in the URL.")

    st.divider()

    st.subheader("Export Data")
    csv = filtered_df.to_csv(index=False)
    st.download_button(
        label="📥 Download Leaderboard CSV",
        data=csv,
        file_name="minecraft_event_elo_leaderboard.csv",
        mime="text/csv"
    )
