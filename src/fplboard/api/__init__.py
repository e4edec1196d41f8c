"""REST API and server-rendered dashboard for FPL player statistics."""

from __future__ import annotations

from html import escape
from typing import Mapping

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from fplboard.api.schemas import (
    ChartSeriesResponse,
    PlayerFilterRequest,
    PlayerFilterResponse,
    PlayerHistoryResponse,
    PlayerRowResponse,
)
from fplboard.config import (
    CHART_METRICS,
    DEFAULT_METRICS,
    HISTORY_COLUMNS,
    POSITIONS,
    STAT_FIELDS,
    Settings,
    get_chart_metric,
    position_name,
)
from fplboard.detail import bind_chart, render_chart_html
from fplboard.models import ElementSummary, GameweekEntry, Player
from fplboard.state import (
    DIRECTION_PARAM,
    METRIC_PARAM,
    POSITION_PARAM,
    SEARCH_PARAM,
    SORT_PARAM,
    TEAM_PARAM,
    AppState,
    clear_selection,
    decode_query,
    encode_query,
    select_player,
    state_url,
    toggle_metric,
    toggle_sort,
)
from fplboard.store import DataStore
from fplboard.table import PlayerRow, derive_rows, export_rows_to_csv
from fplboard.table.filtering import bound_param, format_number
from fplboard.upstream import UpstreamClient, UpstreamError, UpstreamResponse, UpstreamStatusError


PAGE_TITLE = "Fantasy Premier League Players"


def _relay(upstream: UpstreamResponse, settings: Settings) -> JSONResponse:
    status_code = upstream.status_code if settings.relay_upstream_status else 200
    return JSONResponse(content=upstream.payload, status_code=status_code)


def _http_error(exc: UpstreamError) -> HTTPException:
    if isinstance(exc, UpstreamStatusError) and 400 <= exc.status_code < 500:
        return HTTPException(status_code=exc.status_code, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


def _render_page(body: str, *, title: str = PAGE_TITLE) -> str:
    return f"""<!DOCTYPE html>
<html lang=\"en\">
<head>
    <meta charset=\"utf-8\">
    <title>{escape(title)}</title>
    <style>
        body {{ font-family: Arial, sans-serif; margin: 2rem; background: #f5f7fa; }}
        main {{ background: #fff; padding: 2rem; border-radius: 12px; box-shadow: 0 2px 6px rgba(0,0,0,0.08); }}
        h1 {{ font-size: 2rem; margin-bottom: 1rem; }}
        a {{ color: #2563eb; text-decoration: none; }}
        form.player-filter {{ display: grid; gap: 1rem; margin-bottom: 2rem; }}
        .filter-row {{ display: flex; gap: 1rem; flex-wrap: wrap; }}
        .filter-row input[type=\"text\"] {{ flex: 1; padding: 0.5rem; }}
        .filter-row select {{ padding: 0.5rem; }}
        .bounds-grid {{ display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 1rem; }}
        .bounds-grid .bound-inputs {{ display: flex; gap: 4px; }}
        .bounds-grid input {{ width: 50%; }}
        .form-actions {{ display: flex; gap: 1rem; align-items: center; }}
        button {{ padding: 0.6rem 1.2rem; border-radius: 6px; border: none; background: #2563eb; color: #fff; cursor: pointer; }}
        .table-wrap {{ overflow-x: auto; }}
        table {{ border-collapse: collapse; width: 100%; margin-top: 1rem; }}
        th {{ text-align: left; padding: 8px; border-bottom: 2px solid #ccc; white-space: nowrap; }}
        td {{ padding: 8px; border-bottom: 1px solid #eee; white-space: nowrap; }}
        .notice {{ padding: 1rem; border-radius: 6px; margin-bottom: 1rem; }}
        .notice.error {{ background: #fef2f2; color: #b91c1c; }}
        .metric-toggles {{ display: flex; flex-wrap: wrap; gap: 1rem; margin-bottom: 1rem; }}
    </style>
</head>
<body>
<main>
{body}
</main>
</body>
</html>
"""


def _hidden_inputs(items: list[tuple[str, str]]) -> str:
    return "".join(
        f"<input type=\"hidden\" name=\"{escape(name)}\" value=\"{escape(value)}\">" for name, value in items
    )


def _render_table_page(
    state: AppState,
    rows: list[PlayerRow],
    *,
    teams: Mapping[int, str],
    total_players: int,
) -> str:
    criteria = state.criteria

    team_options = "<option value=\"\">All Teams</option>" + "".join(
        f"<option value=\"{team_id}\"{' selected' if criteria.team == str(team_id) else ''}>{escape(name)}</option>"
        for team_id, name in sorted(teams.items())
    )
    position_options = "<option value=\"\">All Positions</option>" + "".join(
        f"<option value=\"{position_id}\"{' selected' if criteria.position == str(position_id) else ''}>{label}</option>"
        for position_id, label in POSITIONS.items()
    )

    bound_cells = []
    for stat in STAT_FIELDS:
        inputs = "".join(
            f"<input type=\"number\" step=\"any\" name=\"{bound_param(stat.key, side)}\" placeholder=\"{side.title()}\" "
            f"value=\"{escape(criteria.bounds.get(bound_param(stat.key, side), ''))}\">"
            for side in ("min", "max")
        )
        bound_cells.append(f"<div><label>{escape(stat.label)}</label><div class=\"bound-inputs\">{inputs}</div></div>")

    carried = [
        (name, value)
        for name, value in encode_query(state)
        if name in {SORT_PARAM, DIRECTION_PARAM, METRIC_PARAM}
    ]
    export_query = state_url(state).partition("?")[2]
    export_href = "/players/export.csv" + (f"?{export_query}" if export_query else "")

    invalid = criteria.invalid_bounds()
    error_html = (
        f"<p class=\"notice error\">Ignored non-numeric bounds: {escape(', '.join(invalid))}</p>" if invalid else ""
    )

    filter_form = f"""
    <form method=\"get\" action=\"/ui\" class=\"player-filter\">
        <div class=\"filter-row\">
            <input type=\"text\" name=\"{SEARCH_PARAM}\" placeholder=\"Search by name...\" value=\"{escape(criteria.search)}\">
            <select name=\"{TEAM_PARAM}\">{team_options}</select>
            <select name=\"{POSITION_PARAM}\">{position_options}</select>
        </div>
        <div class=\"bounds-grid\">{''.join(bound_cells)}</div>
        {_hidden_inputs(carried)}
        <div class=\"form-actions\">
            <button type=\"submit\">Apply</button>
            <a href=\"/ui\">Reset</a>
            <a href=\"{escape(export_href)}\">Export CSV</a>
        </div>
    </form>
    """

    header_cells = ["<th>Name</th>", "<th>Team</th>", "<th>Position</th>"]
    for stat in STAT_FIELDS:
        arrow = ""
        if state.sort.key == stat.key:
            arrow = " ▲" if state.sort.direction == "asc" else " ▼"
        href = state_url(toggle_sort(state, stat.key))
        header_cells.append(f"<th><a href=\"{escape(href)}\">{escape(stat.label)}{arrow}</a></th>")

    body_rows = []
    for row in rows:
        href = state_url(select_player(state, row.player.id))
        stat_cells = "".join(f"<td>{escape(row.display(stat))}</td>" for stat in STAT_FIELDS)
        body_rows.append(
            f"<tr><td><a href=\"{escape(href)}\">{escape(row.player.full_name)}</a></td>"
            f"<td>{escape(row.team_name)}</td><td>{escape(row.position_name)}</td>{stat_cells}</tr>"
        )
    table_body = "".join(body_rows) or f"<tr><td colspan={len(STAT_FIELDS) + 3}>No players match the current filters.</td></tr>"

    body = f"""
    <h1>{PAGE_TITLE}</h1>
    {error_html}
    {filter_form}
    <p>Showing {len(rows)} of {total_players} players</p>
    <div class=\"table-wrap\">
        <table>
            <thead><tr>{''.join(header_cells)}</tr></thead>
            <tbody>{table_body}</tbody>
        </table>
    </div>
    """
    return _render_page(body)


def _history_cell(entry: GameweekEntry, key: str) -> str:
    value = getattr(entry, key)
    if value is None:
        return ""
    if key == "value":
        return f"{value / 10:.1f}"
    return format_number(value)


def _opponent_label(entry: GameweekEntry, teams: Mapping[int, str]) -> str:
    if entry.opponent_team is None:
        return ""
    name = teams.get(entry.opponent_team, "")
    if entry.was_home is None:
        return name
    return f"{name} ({'H' if entry.was_home else 'A'})"


def _render_detail_page(
    state: AppState,
    player: Player,
    summary: ElementSummary,
    *,
    teams: Mapping[int, str],
) -> str:
    series = bind_chart(summary.history, state.metrics)

    toggles = []
    for metric in CHART_METRICS:
        checked = metric.key in state.metrics
        href = state_url(toggle_metric(state, metric.key, not checked))
        toggles.append(
            f"<label><input type=\"checkbox\"{' checked' if checked else ''} data-href=\"{escape(href)}\" "
            f"onchange=\"window.location.href = this.dataset.href\">{escape(metric.label)}</label>"
        )

    header_cells = "".join(
        ["<th>Fixture</th>", "<th>Opponent</th>"] + [f"<th>{escape(column.label)}</th>" for column in HISTORY_COLUMNS]
    )
    history_rows = "".join(
        f"<tr><td>GW {entry.round}</td><td>{escape(_opponent_label(entry, teams))}</td>"
        + "".join(f"<td>{escape(_history_cell(entry, column.key))}</td>" for column in HISTORY_COLUMNS)
        + "</tr>"
        for entry in summary.history
    ) or f"<tr><td colspan={len(HISTORY_COLUMNS) + 2}>No gameweeks played yet.</td></tr>"

    team_name = teams.get(player.team, "") if player.team is not None else ""
    back_href = state_url(clear_selection(state))
    body = f"""
    <h1>{PAGE_TITLE}</h1>
    <p><a href=\"{escape(back_href)}\">⬅ Back to All Players</a></p>
    <h2>{escape(player.full_name)}</h2>
    <p>{escape(team_name)} · {escape(position_name(player.element_type))}</p>
    <section>
        <h3>Gameweek Stats Chart</h3>
        <div class=\"metric-toggles\">{''.join(toggles)}</div>
        {render_chart_html(series)}
    </section>
    <p>Detailed stats for this player:</p>
    <div class=\"table-wrap\">
        <table>
            <thead><tr>{header_cells}</tr></thead>
            <tbody>{history_rows}</tbody>
        </table>
    </div>
    """
    return _render_page(body, title=f"{player.full_name} – {PAGE_TITLE}")


def _parse_metrics(values: list[str]) -> tuple[str, ...]:
    if not values:
        return DEFAULT_METRICS
    metrics: list[str] = []
    for value in values:
        try:
            get_chart_metric(value)
        except KeyError as exc:
            raise HTTPException(status_code=422, detail=f"Unknown chart metric {value!r}") from exc
        if value not in metrics:
            metrics.append(value)
    return tuple(metrics)


def create_app(settings: Settings | None = None, client: UpstreamClient | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    client = client or UpstreamClient.from_settings(settings)
    store = DataStore(client)

    app = FastAPI(title="fplboard")
    app.state.settings = settings
    app.state.upstream = client
    app.state.data_store = store

    async def _load_bootstrap() -> None:
        try:
            await store.load_bootstrap()
        except UpstreamError as exc:
            raise _http_error(exc) from exc

    async def _load_player(player_id: int) -> tuple[Player, ElementSummary]:
        await _load_bootstrap()
        player = store.get_player(player_id)
        if player is None:
            raise HTTPException(status_code=404, detail="Player not found")
        try:
            summary = await store.load_detail(player_id)
        except UpstreamError as exc:
            raise _http_error(exc) from exc
        return player, summary

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/bootstrap-static")
    async def bootstrap_static_proxy():
        try:
            upstream = await client.bootstrap_static()
        except UpstreamError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return _relay(upstream, settings)

    @app.get("/api/element-summary")
    async def element_summary_proxy(id: str = Query(...)):
        try:
            upstream = await client.element_summary(id)
        except UpstreamError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return _relay(upstream, settings)

    @app.post("/players/filter", response_model=PlayerFilterResponse)
    async def filter_players_endpoint(payload: PlayerFilterRequest):
        await _load_bootstrap()
        rows = derive_rows(store.players, store.teams, payload.to_criteria(), payload.to_sort())
        return PlayerFilterResponse(
            total_players=len(store.players),
            matched_players=len(rows),
            players=[PlayerRowResponse.from_row(row) for row in rows],
        )

    @app.get("/players/export.csv")
    async def export_players_csv(request: Request):
        await _load_bootstrap()
        state = decode_query(request.query_params.multi_items())
        rows = derive_rows(store.players, store.teams, state.criteria, state.sort)
        return Response(
            content=export_rows_to_csv(rows),
            media_type="text/csv",
            headers={"Content-Disposition": "attachment; filename=players.csv"},
        )

    @app.get("/players/{player_id}/history", response_model=PlayerHistoryResponse)
    async def player_history(player_id: int, request: Request):
        metrics = _parse_metrics([value for value in request.query_params.getlist(METRIC_PARAM) if value])
        _, summary = await _load_player(player_id)
        series = bind_chart(summary.history, metrics)
        return PlayerHistoryResponse(
            player_id=player_id,
            history=[entry.model_dump() for entry in summary.history],
            series=[
                ChartSeriesResponse(key=item.key, label=item.label, color=item.color, points=list(item.points))
                for item in series
            ],
        )

    @app.get("/ui", response_class=HTMLResponse)
    async def ui_index(request: Request):
        await _load_bootstrap()
        state = decode_query(request.query_params.multi_items())
        players = store.players
        rows = derive_rows(players, store.teams, state.criteria, state.sort)
        return HTMLResponse(
            _render_table_page(state, rows, teams=store.teams, total_players=len(players))
        )

    @app.get("/ui/players/{player_id}", response_class=HTMLResponse)
    async def ui_player_detail(player_id: int, request: Request):
        player, summary = await _load_player(player_id)
        state = decode_query(request.query_params.multi_items(), selected_player_id=player_id)
        return HTMLResponse(_render_detail_page(state, player, summary, teams=store.teams))

    return app


__all__ = ["PAGE_TITLE", "create_app"]
