import time
import argparse
import logging
from quakeinsight.app import create_app
from quakeinsight.configs.settings import Settings
from quakeinsight.export import to_csv, to_json
from quakeinsight.seed import seed_earthquakes
from quakeinsight.utils.duckdb import initialize, query_earthquakes


def seed(settings: Settings, years: int):
    conn = initialize(settings.database_path)
    summary = seed_earthquakes(conn, years=years, timeout=settings.usgs_timeout)
    logging.info(
        f"Seeded {summary['total_inserted']} of {summary['total_fetched']} "
        f"earthquakes for {summary['year_range']}"
    )
    conn.close()


def export(settings: Settings, export_format: str, output: str, filters: dict):
    conn = initialize(settings.database_path)
    earthquakes = query_earthquakes(conn, **filters)
    conn.close()

    if export_format == "csv":
        content = to_csv(earthquakes)
    else:
        content = to_json(earthquakes, filters)

    with open(output, "w", encoding="utf-8", newline="") as file:
        file.write(content)
    logging.info(f"Exported {len(earthquakes)} earthquakes to {output}")


def serve(settings: Settings, host: str, port: int):
    app = create_app(settings)
    app.run(host=host, port=port)


def cli(argv=None):
    start_time = time.time()

    parser = argparse.ArgumentParser(
        prog="quakeinsight", description="India earthquake information backend."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API.")
    serve_parser.add_argument("--host", default="0.0.0.0")
    serve_parser.add_argument("--port", default=10000, type=int)

    seed_parser = subparsers.add_parser(
        "seed", help="Load USGS earthquakes for India into the database."
    )
    seed_parser.add_argument(
        "--years",
        default=50,
        type=int,
        help="How many years back to fetch.",
    )

    export_parser = subparsers.add_parser(
        "export", help="Export stored earthquakes to CSV or JSON."
    )
    export_parser.add_argument(
        "--format", dest="export_format", choices=["csv", "json"], default="csv"
    )
    export_parser.add_argument("--output", default=None, help="Output file path.")
    export_parser.add_argument("--start-year", dest="start_year", type=int, default=None)
    export_parser.add_argument("--end-year", dest="end_year", type=int, default=None)
    export_parser.add_argument(
        "--min-magnitude", dest="min_magnitude", type=float, default=None
    )
    export_parser.add_argument("--state", default=None)
    export_parser.add_argument("--region", default=None)

    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.getLogger().setLevel(settings.log_level.upper())

    if args.command == "serve":
        serve(settings, args.host, args.port)
    elif args.command == "seed":
        seed(settings, args.years)
    else:
        filters = {
            "start_year": args.start_year,
            "end_year": args.end_year,
            "min_magnitude": args.min_magnitude,
            "state": args.state,
            "region": args.region,
        }
        output = args.output or f"india_earthquakes.{args.export_format}"
        export(settings, args.export_format, output, filters)

    logging.info("--- {} seconds ---".format(time.time() - start_time))


if __name__ == "__main__":
    cli()
