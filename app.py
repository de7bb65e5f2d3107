import streamlit as st

from config import Config
from data_service import load_site_data
from exceptions import SiteDataError

st.set_page_config(page_title="Minecraft Event ELO", layout="wide", initial_sidebar_state="expanded")

PAGE_LEADERBOARD = "🏆 Leaderboard"
PAGE_EVENTS = "📅 Events"
PAGE_EVENT_RESULTS = "📋 Event Results"
PAGE_PLAYER_PROFILE = "👤 Player Profile"
PAGES = [PAGE_LEADERBOARD, PAGE_EVENTS, PAGE_EVENT_RESULTS, PAGE_PLAYER_PROFILE]


@st.cache_resource
def get_site_data(data_dir):
    """
    Load both JSON files once per server process.

    The returned SiteData is shared by all sessions and never modified; restart
    the app to pick up new exports.
    """
    return load_site_data(data_dir)


def get_default_page() -> str:
    """Deep links: ?player=<name> opens the profile, ?event=<slug> the event page."""
    if st.query_params.get('player'):
        return PAGE_PLAYER_PROFILE
    if st.query_params.get('event'):
        return PAGE_EVENT_RESULTS
    return PAGE_LEADERBOARD


def main():
    st.title("⛏️ Minecraft Event ELO")
    st.markdown("*ELO leaderboard, event results and player rating history*")

    try:
        Config.validate()
        site_data = get_site_data(str(Config.DATA_DIR))
    except (SiteDataError, ValueError) as e:
        st.error(getattr(e, 'user_message', str(e)))
        st.info(f"Export final_leaderboard.json and rating_history_full.json into {Config.DATA_DIR} "
                "(or set ELO_DATA_DIR) and reload the page.")
        return

    with st.sidebar:
        st.header("Navigation")

        page = st.radio(
            "Go to",
            PAGES,
            index=PAGES.index(get_default_page()),
            label_visibility="collapsed")

        st.divider()

        st.subheader("System Status")
        if site_data.player_count > 0:
            st.success("✅ Data Loaded")
            st.metric("Total Players", site_data.player_count)
            st.metric("Events Tracked", site_data.event_count)
        else:
            st.info("ℹ️ No Data Available")

    if page == PAGE_LEADERBOARD:
        from views import leaderboard
        leaderboard.render(site_data)
    elif page == PAGE_EVENTS:
        from views import events
        events.render(site_data)
    elif page == PAGE_EVENT_RESULTS:
        from views import event_results
        event_results.render(site_data)
    elif page == PAGE_PLAYER_PROFILE:
        from views import player_profile
        player_profile.render(site_data)


if __name__ == "__main__":
    main()
