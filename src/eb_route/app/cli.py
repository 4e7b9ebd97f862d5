# eb_route/app/cli.py
import argparse
import logging
import sys

from eb_route.app.build import build
from eb_route.domain.errors import RoutingError
from eb_route.io.export import write_routes
from eb_route.io.osm import OSMReadError
from eb_route.services.comparison import RouteComparison
from eb_route.sim.clock import minutes, parse_hour

log = logging.getLogger("eb_route.cli")


def format_comparison(cmp: RouteComparison) -> str:
    lines = [f"Route {cmp.origin} -> {cmp.destination} at {cmp.hour:02d}:00", ""]
    deltas = {d.mode: d for d in cmp.deltas()}
    for mode, r in cmp.routes.items():
        lines.append(f"+--- {mode.label} ".ljust(56, "-") + "+")
        if not r.found:
            lines.append("| no route")
            continue
        lines.append(f"| Distance:       {r.total_distance_m / 1000.0:.2f} km")
        lines.append(f"| Estimated Time: {minutes(r.estimated_time_s):.1f} minutes")
        lines.append(f"| Waypoints:      {len(r.path)} nodes")
        d = deltas.get(mode)
        if d is not None:
            pace = "FASTER" if d.time_s < 0 else "slower"
            lines.append(
                f"| vs Traditional: {minutes(abs(d.time_s)):.1f} min {pace}"
                f" ({d.distance_m / 1000.0:+.2f} km)"
            )
    lines.append("")
    if cmp.shortest_is_slower:
        lines.append("* Shortest distance != fastest time.")
    if cmp.learned_saving_s > 0:
        lines.append(f"* Learned patterns save {minutes(cmp.learned_saving_s):.1f} minutes.")
    return "\n".join(lines)


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="eb-route",
        description="Compare distance, speed-limit and learned-pattern routes on an OSM map.",
    )
    p.add_argument("osm", help="OpenStreetMap XML file")
    p.add_argument("--origin", type=int)
    p.add_argument("--destination", type=int)
    when = p.add_mutually_exclusive_group()
    when.add_argument("--hour", type=int, default=None, help="hour of day 0-23 (default 17)")
    when.add_argument("--at", help="ISO timestamp; its local hour is used")
    p.add_argument("--tz", default=None, help="IANA zone for --at, e.g. Europe/Berlin")
    p.add_argument("--seed", type=int, default=None, help="fix the crowd-pattern draw")
    p.add_argument("--out", default="routes.json", help="route export path")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = p.parse_args(argv)
    if (args.origin is None) != (args.destination is None):
        p.error("--origin and --destination must be given together")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    app = build(
        {
            "seed": args.seed,
            "log": {"level": args.log_level, "debug": args.log_level == "DEBUG"},
        }
    )
    hour = 17 if args.hour is None else args.hour
    if args.at:
        try:
            hour = parse_hour(args.at, tz=args.tz)
        except (ValueError, KeyError) as exc:  # ZoneInfoNotFoundError is a KeyError
            log.error("bad --at/--tz: %s", exc)
            return 1

    try:
        app.load_osm(args.osm)
    except (OSError, OSMReadError) as exc:
        log.error("failed to load OSM file %s: %s", args.osm, exc)
        return 1
    app.apply_patterns()

    if args.origin is None:
        ends = app.sample_endpoints(2)
        if not ends:
            log.error("not enough connected nodes to pick endpoints")
            return 1
        origin, destination = ends
    else:
        origin, destination = args.origin, args.destination

    try:
        cmp = app.compare(origin, destination, hour)
    except RoutingError as exc:
        log.error("query rejected: %s", exc)
        return 2

    print(format_comparison(cmp))
    write_routes(args.out, app.network, cmp.routes.values())
    log.info("routes exported to %s", args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
