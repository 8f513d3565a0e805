from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter

from rich.console import Console
from rich.table import Table

from leadfinder.api import handle_request
from leadfinder.config import SOURCE_IDS, load_config
from leadfinder.models import SearchRequest, SearchResult
from leadfinder.outputs.csv_writer import read_leads_csv, write_leads_csv
from leadfinder.outputs.summary import emit_summary
from leadfinder.run import run_search
from leadfinder.scorer import Scorer


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="leadfinder", description="LeadFinder CLI")
    parser.add_argument("--config", default=None, help="Path to YAML config (defaults built in)")
    sub = parser.add_subparsers(dest="command", required=True)

    search_cmd = sub.add_parser("search", help="Search all selected sources for leads")
    search_cmd.add_argument("--action", default="scrape", help="Requested action (find|scrape|analyze)")
    search_cmd.add_argument("--source", action="append", default=None, help=f"Source to query, repeatable ({'|'.join(SOURCE_IDS)})")
    search_cmd.add_argument("--industry", default="")
    search_cmd.add_argument("--location", default="")
    search_cmd.add_argument("--signal", action="append", default=None, help="Problem signal, repeatable (e.g. no_leads)")
    search_cmd.add_argument("--custom", default="", help="Free-text custom signals")
    search_cmd.add_argument("--apollo-key", default="", help="Apollo API key for this run")
    search_cmd.add_argument("--json", action="store_true", help="Print the JSON response instead of a table")
    search_cmd.add_argument("--csv-path", default=None, help="Append leads to this CSV")
    search_cmd.add_argument("--dry-run", action="store_true", help="Do not write CSV output")

    request_cmd = sub.add_parser("request", help="Run a JSON search request from a file or stdin")
    request_cmd.add_argument("path", help="Request JSON path, or - for stdin")

    stats_cmd = sub.add_parser("stats", help="Show CSV lead statistics")
    stats_cmd.add_argument("--csv-path", default=None)

    export_cmd = sub.add_parser("export", help="Export leads from CSV")
    export_cmd.add_argument("--format", choices=["markdown"], default="markdown")
    export_cmd.add_argument("--csv-path", default=None)

    return parser


def _csv_path(cfg: dict, override: str | None) -> str:
    return override or cfg["output"]["csv"].get("path", "output/leads.csv")


def cmd_search(args: argparse.Namespace, cfg: dict) -> int:
    request = SearchRequest(
        action=args.action,
        industry=args.industry,
        location=args.location,
        problem_signals=args.signal or [],
        custom_signals=args.custom,
        sources=args.source or ["reddit"],
        credential=args.apollo_key,
    )
    result = run_search(request, config=cfg)

    csv_cfg = cfg["output"]["csv"]
    if not args.dry_run and (args.csv_path or csv_cfg.get("enabled", False)):
        write_leads_csv(_csv_path(cfg, args.csv_path), result.leads)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    _print_leads_table(Console(), result)
    summary_cfg = cfg["output"]["summary"]
    if summary_cfg.get("enabled", True):
        emit_summary(summary_cfg.get("mode", "stdout"), summary_cfg.get("discord_webhook", ""), result)
    return 0


def cmd_request(path: str, cfg: dict) -> int:
    try:
        if path == "-":
            payload = json.load(sys.stdin)
        else:
            with open(path, encoding="utf-8") as handle:
                payload = json.load(handle)
    except (OSError, json.JSONDecodeError) as exc:
        payload = None
        logging.getLogger("leadfinder.cli").error("could not read request %s: %s", path, exc)

    status, body = handle_request(payload, config=cfg)
    print(json.dumps(body, indent=2))
    return 0 if status == 200 else 1


def cmd_stats(csv_path: str) -> int:
    rows = read_leads_csv(csv_path)
    by_source = Counter(row.get("Source", "") for row in rows)

    table = Table(title="LeadFinder Stats")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("CSV Path", csv_path)
    table.add_row("Total Leads", str(len(rows)))
    table.add_row("With Email", str(sum(1 for row in rows if row.get("Email"))))
    table.add_row("With Phone", str(sum(1 for row in rows if row.get("Phone"))))
    for band in ["Hot", "Warm", "Mild", "Cold"]:
        count = sum(1 for row in rows if Scorer.band(int(row.get("Confidence Score") or 0)) == band)
        table.add_row(band, str(count))
    for source, count in sorted(by_source.items()):
        table.add_row(f"  - {source}", str(count))
    Console().print(table)
    return 0


def cmd_export_markdown(csv_path: str) -> int:
    rows = read_leads_csv(csv_path)
    rows.sort(key=lambda row: int(row.get("Confidence Score") or 0), reverse=True)

    lines = [
        "| Found At | Company | Source | Source URL | Email | Phone | Pain Summary | Score |",
        "|---|---|---|---|---|---|---|---:|",
    ]
    for row in rows:
        lines.append(
            "| {found} | {company} | {source} | {url} | {email} | {phone} | {summary} | {score} |".format(
                found=row.get("Found At", "").replace("|", " "),
                company=row.get("Company", "").replace("|", " "),
                source=row.get("Source", "").replace("|", " "),
                url=row.get("Source URL", "").replace("|", " "),
                email=row.get("Email", "").replace("|", " "),
                phone=row.get("Phone", "").replace("|", " "),
                summary=(row.get("Pain Summary", "")[:140]).replace("|", " "),
                score=row.get("Confidence Score", "0"),
            )
        )

    Console().print("\n".join(lines))
    return 0


def _print_leads_table(console: Console, result: SearchResult) -> None:
    table = Table(title=f"LeadFinder Results ({result.meta.total})")
    table.add_column("Company")
    table.add_column("Source")
    table.add_column("Score", justify="right")
    table.add_column("Urgency")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Website")

    for lead in result.leads:
        table.add_row(
            lead.company_name,
            lead.source,
            str(lead.confidence_score),
            lead.urgency,
            lead.email or "",
            lead.phone or "",
            lead.company_website or "",
        )

    console.print(table)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    parser = _build_parser()
    args = parser.parse_args()
    cfg = load_config(args.config)

    if args.command == "search":
        raise SystemExit(cmd_search(args, cfg))

    if args.command == "request":
        raise SystemExit(cmd_request(args.path, cfg))

    if args.command == "stats":
        raise SystemExit(cmd_stats(_csv_path(cfg, args.csv_path)))

    if args.command == "export":
        raise SystemExit(cmd_export_markdown(_csv_path(cfg, args.csv_path)))

    raise SystemExit(1)


if __name__ == "__main__":
    main()
