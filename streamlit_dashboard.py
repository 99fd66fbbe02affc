import html

import streamlit as st
import pandas as pd
import plotly.express as px

from live_standings.config import POLL_INTERVAL_SECONDS, TOP_LIMIT
from live_standings.ingestion.event_store import (
    EventNotFoundError,
    EventStoreError,
    get_event,
    load_events,
)
from live_standings.ingestion.parser import parse_tournament_results
from live_standings.standings.frames import (
    format_rank_change,
    members_label,
    placement_range_label,
    rank_progression_frame,
)
from live_standings.standings.summary import summarize_match_timeline, summarize_standings_timeline
from live_standings.standings.timeline import (
    build_cumulative_standings_timeline,
    build_match_placements_timeline,
)

# --- Page Configuration ---
st.set_page_config(
    page_title="Live Standings",
    page_icon="🏆",
    layout="wide",
    initial_sidebar_state="collapsed"
)

# --- Design System ---
# Accent colors are the same in both themes, only text/background colors differ
ACCENT_COLORS = {
    "primary": "#FF6B6B",       # Coral red - primary accent
    "success": "#10B981",       # Green - rank gained
    "danger": "#EF4444",        # Red - rank lost
    "muted": "#9CA3AF",         # Gray - unchanged
    "chart_palette": [
        "#FF6B6B", "#3B82F6", "#10B981", "#F59E0B", "#8B5CF6",
        "#EC4899", "#06B6D4", "#84CC16", "#F97316", "#6366F1"
    ],
}

# --- Leaderboard Flourishes ---
RANK_ICONS = {
    1: {"icon": "👑", "color": "#FFD700", "label": "Champion"},
    2: {"icon": "🥈", "color": "#C0C0C0", "label": "Runner-up"},
    3: {"icon": "🥉", "color": "#CD7F32", "label": "Third Place"},
}

CARD_STYLE = "border:1px solid rgba(128,128,128,0.3);border-radius:12px;padding:0.75rem 1rem;margin-bottom:0.5rem;display:grid;grid-template-columns:4rem 1fr 6rem 6rem 6rem 5rem;align-items:center;gap:0.75rem;background:linear-gradient(135deg, var(--secondary-background-color) 0%, rgba(255,107,107,0.12) 100%);"
LABEL_STYLE = "font-size:0.7rem;text-transform:uppercase;opacity:0.7;font-weight:500;display:block;"
VALUE_STYLE = "font-size:1.3rem;font-weight:700;font-variant-numeric:tabular-nums;"


def get_rank_badge_html(rank):
    """Generate HTML for a rank badge with icon and styling."""
    if rank not in RANK_ICONS:
        return f'<span style="font-weight:800;font-size:1.6rem;font-style:italic;">{rank}</span>'

    info = RANK_ICONS[rank]
    badge_style = f'display:inline-flex;align-items:center;gap:0.3rem;font-weight:800;font-size:1.6rem;color:{info["color"]};text-shadow:0 0 10px {info["color"]}40;'
    return f'<span style="{badge_style}" title="{info["label"]}"><span style="font-size:1.2rem;">{info["icon"]}</span>{rank}</span>'


def get_rank_change_html(change):
    if change > 0:
        color = ACCENT_COLORS["success"]
    elif change < 0:
        color = ACCENT_COLORS["danger"]
    else:
        color = ACCENT_COLORS["muted"]
    return f'<span style="{VALUE_STYLE}color:{color};">{format_rank_change(change)}</span>'


def stat_html(label, value):
    return f'<div style="text-align:right;"><span style="{LABEL_STYLE}">{label}</span><span style="{VALUE_STYLE}">{value}</span></div>'


def format_points(value):
    return f"{value:g}" if isinstance(value, float) else str(value)


def team_html(team):
    name = html.escape(team.team_name or team.player_name)
    members = html.escape(members_label(team))
    return f'<div><div style="font-size:1.3rem;font-weight:700;">{name}</div><div style="opacity:0.75;">{members}</div></div>'


def generate_standings_cards(entries):
    """HTML cards for one page of the overall standings."""
    if not entries:
        return "<p>No data available</p>"

    cards = []
    for entry in entries:
        totals = entry.totals
        cards.append(
            f'<div style="{CARD_STYLE}">'
            f'{get_rank_badge_html(entry.placement)}'
            f'{team_html(entry.team)}'
            f'{stat_html("Total", format_points(totals.total_score))}'
            f'{stat_html("Placement PT", format_points(totals.placement_score))}'
            f'{stat_html("Elim PT", format_points(totals.elimination_score))}'
            f'<div style="text-align:right;"><span style="{LABEL_STYLE}">Change</span>{get_rank_change_html(entry.rank_change)}</div>'
            '</div>'
        )
    return "".join(cards)


def generate_match_cards(entries):
    """HTML cards for one page of a single game's ranking."""
    if not entries:
        return "<p>No data available</p>"

    cards = []
    for entry in entries:
        detail = entry.detail
        cards.append(
            f'<div style="{CARD_STYLE}">'
            f'{get_rank_badge_html(entry.rank)}'
            f'{team_html(entry.team)}'
            f'{stat_html("Total", format_points(detail.score))}'
            f'{stat_html("Placement PT", format_points(detail.placement_score))}'
            f'{stat_html("Elim PT", format_points(detail.elimination_score))}'
            f'{stat_html("Elims", format_points(detail.eliminations))}'
            '</div>'
        )
    return "".join(cards)


def apply_plotly_style(fig):
    """Apply consistent styling to Plotly figures.

    Text colors are NOT explicitly set, allowing Streamlit to inject theme-aware
    colors automatically. Only structural elements (grids, backgrounds) use
    explicit neutral colors.
    """
    system_font = '-apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif'
    grid_color = "rgba(128, 128, 128, 0.4)"
    line_color = "rgba(128, 128, 128, 0.3)"

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(family=system_font, size=16),
        xaxis=dict(gridcolor=grid_color, linecolor=line_color, showgrid=True, zeroline=False),
        yaxis=dict(gridcolor=grid_color, linecolor=line_color, showgrid=True, zeroline=False),
        legend=dict(title_text="", bgcolor="rgba(0,0,0,0)", borderwidth=0),
        hoverlabel=dict(
            bgcolor="rgba(50, 50, 50, 0.9)",
            bordercolor="rgba(0,0,0,0)",
            font=dict(color="#FFFFFF", family=system_font, size=14),
        ),
        dragmode=False,  # Disable pan/zoom to prevent scroll hijacking on mobile
    )
    return fig


def build_rank_progression_chart(timeline):
    """Line chart of each team's overall placement after every game (rank 1 at the top)."""
    progression_df = rank_progression_frame(timeline)
    if progression_df.empty:
        return None

    fig = px.line(
        progression_df,
        markers=True,
        color_discrete_sequence=ACCENT_COLORS["chart_palette"],
    )
    fig.update_traces(
        hovertemplate='Game %{x}<br>Rank #%{y}<extra>%{fullData.name}</extra>'
    )
    apply_plotly_style(fig)
    team_count = int(progression_df.max().max())
    fig.update_layout(
        height=420,
        margin=dict(l=20, r=20, t=30, b=20),
        xaxis=dict(title="Game", tickmode='linear', dtick=1),
        yaxis=dict(title="Overall Rank", autorange="reversed", range=[1, team_count], dtick=1),
    )
    return fig


def select_page(chunks, key, auto_rotate):
    """Pick the page to show: a manual selector, or the next page on every refresh."""
    if len(chunks) <= 1:
        return 0

    if auto_rotate:
        tick_key = f"{key}_tick"
        tick = st.session_state.get(tick_key, -1) + 1
        st.session_state[tick_key] = tick
        return tick % len(chunks)

    return st.radio(
        "Page",
        options=list(range(len(chunks))),
        format_func=lambda page: f"Page {page + 1}",
        horizontal=True,
        key=key,
    )


def render_header(heading_label, total, page, extra=None):
    range_label = placement_range_label(total, TOP_LIMIT, page)
    cols = st.columns([2, 1, 1] if extra is None else [2, 1, 1, 1])
    cols[0].subheader(heading_label)
    cols[1].metric("Placements", range_label)
    cols[2].metric("Total Teams", total)
    if extra is not None:
        cols[3].metric(*extra)


def render_overall_tab(event_id, overall_timeline, auto_rotate):
    game_options = ["Latest"] + [str(n) for n in range(1, len(overall_timeline) + 1)]
    selection = st.selectbox("Standings after game", options=game_options, key=f"overall_game_{event_id}")
    summary = summarize_standings_timeline(
        overall_timeline,
        None if selection == "Latest" else selection,
        TOP_LIMIT,
    )

    page = select_page(summary.chunked_standings, f"overall_page_{event_id}", auto_rotate)
    render_header(summary.heading_label, summary.total_teams, page, ("Games", summary.total_matches_label))

    if not summary.chunked_standings:
        st.info("No score data found for this event yet.")
        return

    st.html(generate_standings_cards(summary.chunked_standings[page]))

    fig = build_rank_progression_chart(overall_timeline)
    if fig is not None and len(overall_timeline) > 1:
        st.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False, 'scrollZoom': False})


def render_game_tab(event_id, match_timeline, auto_rotate):
    if not match_timeline:
        st.info("No games have been played yet.")
        return

    game_numbers = [str(n) for n in range(1, len(match_timeline) + 1)]
    requested = st.query_params.get("game")
    default_index = game_numbers.index(requested) if requested in game_numbers else len(game_numbers) - 1
    selection = st.selectbox("Game", options=game_numbers, index=default_index, key=f"game_{event_id}")
    st.query_params["game"] = selection
    summary = summarize_match_timeline(match_timeline, selection, TOP_LIMIT)

    page = select_page(summary.chunked_standings, f"game_page_{event_id}", auto_rotate)
    render_header(summary.heading_label, summary.total_teams, page)

    if not summary.chunked_standings:
        st.info("No results for this game.")
        return

    st.html(generate_match_cards(summary.chunked_standings[page]))


@st.fragment(run_every=POLL_INTERVAL_SECONDS)
def render_live_standings(event_id, auto_rotate):
    """Re-read the event on every poll and re-render its standings."""
    try:
        event = get_event(event_id)
    except EventNotFoundError:
        st.warning("This event could not be found.")
        return
    except EventStoreError as e:
        st.error(f"Could not load the latest standings: {e}")
        return

    updated_key = f"updated_at_{event_id}"
    previous_updated_at = st.session_state.get(updated_key)
    if previous_updated_at and event.updated_at and event.updated_at != previous_updated_at:
        st.toast("Standings updated")
    st.session_state[updated_key] = event.updated_at

    results = parse_tournament_results(event.score, {"event_id": event.id})
    overall_timeline = build_cumulative_standings_timeline(results)
    match_timeline = build_match_placements_timeline(results)

    tab_overall, tab_game = st.tabs(["Overall", "Game"])
    with tab_overall:
        render_overall_tab(event_id, overall_timeline, auto_rotate)
    with tab_game:
        render_game_tab(event_id, match_timeline, auto_rotate)

    if event.updated_at:
        updated = pd.to_datetime(event.updated_at, errors="coerce")
        label = event.updated_at if pd.isna(updated) else updated.strftime('%Y-%m-%d %H:%M:%S')
        st.caption(f"Last updated: {label}")


# --- Main App ---
def main():
    st.title("🏆 Live Standings")

    try:
        events = load_events()
    except EventStoreError as e:
        st.error(f"Could not load events: {e}")
        return

    if not events:
        st.info("No events available yet.")
        return

    event_ids = [event.id for event in events]
    titles = {event.id: event.title or event.id for event in events}
    requested = st.query_params.get("event")
    default_index = event_ids.index(requested) if requested in event_ids else 0

    event_id = st.selectbox(
        "Event",
        options=event_ids,
        index=default_index,
        format_func=lambda eid: titles[eid],
    )
    st.query_params["event"] = event_id

    auto_rotate = st.toggle("Rotate pages automatically", value=False)

    render_live_standings(event_id, auto_rotate)


if __name__ == "__main__":
    main()
