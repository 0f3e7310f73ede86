"""
main.py
CLI entry point for the EV Charge Route Planner.

Usage:
  python main.py demo
  python main.py plan --start 41.1579 -8.6291 --dest 38.7223 -9.1393 --capacity 50 --efficiency 5
  python main.py api
"""
import argparse
import json
import sys
from pathlib import Path

# Ensure project root is on sys.path when running directly
sys.path.insert(0, str(Path(__file__).parent))

# ── Reference trip: Porto → Lisbon ────────────────────────────────────────────
DEMO_TRIP = {
    "start_latitude":   41.1579,
    "start_longitude":  -8.6291,
    "dest_latitude":    38.7223,
    "dest_longitude":   -9.1393,
    "battery_capacity": 50.0,
    "efficiency":       5.0,
}

DEMO_CATALOGUE = Path(__file__).parent / "data" / "stations.json"


def _build_planner(catalogue_path: str):
    from route_planner import PlanningConfig, RoutePlanner
    from station_catalogue import JSONStationStore
    from config.settings import settings

    store = JSONStationStore(catalogue_path)
    return RoutePlanner(catalogue=store, config=PlanningConfig.from_settings(settings)), store


# Demo mode

def run_demo(catalogue_path: str = str(DEMO_CATALOGUE)) -> None:
    from rich import box
    from rich.console import Console
    from rich.table import Table

    from route_planner import PlanRequest, PlanningError, TripContext, detour_km, score_station
    from route_planner.scoring import battery_at_station

    console = Console()
    console.print("\n[bold blue]═══ EV CHARGE ROUTE PLANNER — DEMO ═══[/bold blue]\n")

    planner, store = _build_planner(catalogue_path)
    request = PlanRequest(**DEMO_TRIP)

    console.print(f"  [bold]From:[/bold]       {request.start}")
    console.print(f"  [bold]To:[/bold]         {request.dest}")
    console.print(f"  [bold]Battery:[/bold]    {request.battery_capacity:g} kWh")
    console.print(f"  [bold]Efficiency:[/bold] {request.efficiency:g} km/kWh")
    console.print(f"  [bold]Catalogue:[/bold]  {len(store.all_stations())} stations\n")

    try:
        result = planner.plan_route(request)
    except PlanningError as exc:
        console.print(f"  [red]{exc.kind}:[/red] {exc.message}\n")
        return

    console.print(f"  [bold]Distance:[/bold]      {result.distance:,.1f} km")
    console.print(f"  [bold]Battery usage:[/bold] {result.battery_usage:,.1f} kWh "
                  f"({result.battery_usage / request.battery_capacity:.0%} of capacity)\n")

    if result.is_direct:
        console.print("  [green]No charging stop needed.[/green]\n")
        return

    trip = TripContext.from_request(request, result.distance)
    table = Table(title="Suggested charging stops", box=box.ROUNDED, show_lines=True)
    table.add_column("#", justify="right", width=3)
    table.add_column("Station", style="cyan", width=30)
    table.add_column("Detour (km)", justify="right")
    table.add_column("Power (kW)", justify="right")
    table.add_column("Chargers", justify="right")
    table.add_column("Arrival (kWh)", justify="right", style="yellow")
    table.add_column("Score", justify="right", style="green")

    for rank, station in enumerate(result.stations, start=1):
        position = (station.latitude, station.longitude)
        table.add_row(
            str(rank),
            station.name or station.id,
            f"{detour_km(request.start, request.dest, position):.1f}",
            f"{station.power_kw:g}",
            str(station.charger_count),
            f"{battery_at_station(station, trip):.1f}",
            f"{score_station(station, trip, planner.config):.1f}",
        )
    console.print(table)
    console.print()


# Plan mode

def run_plan(args: argparse.Namespace) -> int:
    from route_planner import PlanRequest, PlanningError

    planner, _ = _build_planner(args.catalogue)
    request = PlanRequest(
        start_latitude=args.start[0],
        start_longitude=args.start[1],
        dest_latitude=args.dest[0],
        dest_longitude=args.dest[1],
        battery_capacity=args.capacity,
        efficiency=args.efficiency,
    )
    try:
        result = planner.plan_route(request)
    except PlanningError as exc:
        print(json.dumps({"success": False, "error": exc.kind, "detail": exc.message}, indent=2))
        return 1

    print(json.dumps({
        "success": True,
        "distance": result.distance,
        "battery_usage": result.battery_usage,
        "stations": [s.to_dict() for s in result.stations],
    }, indent=2))
    return 0


# ── API mode ──────────────────────────────────────────────────────────────────

def run_api(reload: bool = False) -> None:
    import uvicorn
    from config.settings import settings
    from monitoring import start_metrics_server
    start_metrics_server(settings.metrics_port)
    uvicorn.run(
        "api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


def _parser() -> argparse.ArgumentParser:
    from config.settings import settings

    parser = argparse.ArgumentParser(description="EV charging-stop route planner")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Plan the Porto → Lisbon reference trip")
    demo.add_argument("--catalogue", default=str(DEMO_CATALOGUE))

    plan = sub.add_parser("plan", help="Plan a single trip and print JSON")
    plan.add_argument("--start", nargs=2, type=float, metavar=("LAT", "LON"), required=True)
    plan.add_argument("--dest", nargs=2, type=float, metavar=("LAT", "LON"), required=True)
    plan.add_argument("--capacity", type=float, required=True, help="Battery capacity (kWh)")
    plan.add_argument("--efficiency", type=float, required=True, help="km per kWh")
    plan.add_argument("--catalogue", default=settings.station_catalogue_path)

    api = sub.add_parser("api", help="Run the HTTP API")
    api.add_argument("--reload", action="store_true")
    return parser


if __name__ == "__main__":
    args = _parser().parse_args()
    if args.command == "demo":
        run_demo(args.catalogue)
    elif args.command == "plan":
        sys.exit(run_plan(args))
    else:
        run_api(reload=args.reload)
