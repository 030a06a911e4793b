"""Command-line interface for atlassian-services.

Usage:
    # Tracing demo: one span per product module, printed to stdout
    atlassian-services trace-demo

    # Service calls (add --trace to print their spans)
    atlassian-services admin activity ORG-1 5b10ac8d82e05b22cc7d4ef5
    atlassian-services jira search 'project = ITI' --fields summary,status
    atlassian-services confluence comments 83820565 --expand body.storage

    # Configuration
    atlassian-services config show
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from pydantic import BaseModel

from atlassian_services.core.exceptions import AtlassianError
from atlassian_services.core.registry import get_client, list_clients
from atlassian_services.core.tracing import ModuleTracer

# (module, tracer name, span name, method, endpoint, status code)
DEMO_SPANS = [
    ("admin", "atlassian_services.admin", "test.admin.operation", "GET", "/admin/test", 200),
    ("assets", "atlassian_services.assets", "test.assets.operation", "PUT", "/assets/test", 201),
    (
        "bitbucket",
        "atlassian_services.bitbucket",
        "test.bitbucket.operation",
        "POST",
        "/bitbucket/test",
        202,
    ),
    (
        "confluence",
        "atlassian_services.confluence",
        "test.confluence.operation",
        "DELETE",
        "/confluence/test",
        204,
    ),
    (
        "confluence.v2",
        "atlassian_services.confluence.v2",
        "test.confluence.v2.operation",
        "PATCH",
        "/confluence/v2/test",
        200,
    ),
    (
        "jira.agile",
        "atlassian_services.jira.agile",
        "test.jira.agile.operation",
        "GET",
        "/jira/agile/test",
        200,
    ),
    (
        "jira.sm",
        "atlassian_services.jira.sm",
        "test.jira.sm.operation",
        "GET",
        "/jira/sm/test",
        200,
    ),
    ("jira.v2", "atlassian_services.jira.v2", "test.jira.v2.operation", "GET", "/jira/v2/test", 200),
    ("jira.v3", "atlassian_services.jira.v3", "test.jira.v3.operation", "GET", "/jira/v3/test", 200),
]


def build_tracer_provider(batch: bool = True) -> TracerProvider:
    """Create an SDK tracer provider printing spans to stdout."""
    provider = TracerProvider()
    exporter = ConsoleSpanExporter(out=sys.stdout)
    processor = BatchSpanProcessor(exporter) if batch else SimpleSpanProcessor(exporter)
    provider.add_span_processor(processor)
    return provider


def _dump(result: Any) -> str:
    if isinstance(result, BaseModel):
        return result.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    return json.dumps(result, indent=2, default=str)


def _client_config(args: argparse.Namespace) -> dict[str, Any]:
    config: dict[str, Any] = {}
    if getattr(args, "tracer_provider", None) is not None:
        config["tracer_provider"] = args.tracer_provider
    return config


# =============================================================================
# Tracing demo
# =============================================================================


def cmd_trace_demo(args: argparse.Namespace) -> int:
    """Emit one span through each module's tracing helpers."""
    provider: TracerProvider = args.tracer_provider or build_tracer_provider()

    print("=== OpenTelemetry Integration Test ===")
    try:
        for module, tracer_name, span_name, method, endpoint, status_code in DEMO_SPANS:
            tracer = ModuleTracer(module, tracer_name, provider)
            span = tracer.start_span(span_name)
            tracer.set_span_attributes(span, method, endpoint)
            tracer.set_span_response(span, status_code)
            tracer.finish_span(span)
            print(f"✓ {module} module tracer: {tracer_name}")
    finally:
        provider.shutdown()

    print("\n=== All modules successfully configured for OpenTelemetry tracing ===")
    return 0


# =============================================================================
# Service commands
# =============================================================================


def cmd_admin_activity(args: argparse.Namespace) -> int:
    """Show a user's last active dates per product."""
    with get_client("admin", _client_config(args)) as admin:
        activity, response = admin.directory.activity(args.organization_id, args.account_id)

    if args.json:
        print(_dump(activity))
        return 0

    data = activity.data if activity else None
    if data is None or not data.product_access:
        print(f"No product activity for {args.account_id}")
        return 0

    print(f"Added to org: {data.added_to_org or 'Unknown'}")
    for product in data.product_access:
        print(f"  {product.name or product.key}: {product.last_active or 'Never'}")
    return 0


def cmd_jira_search(args: argparse.Namespace) -> int:
    """Search for issues with JQL."""
    fields = args.fields.split(",") if args.fields else None

    with get_client("jira", {"version": args.version, **_client_config(args)}) as jira:
        result, response = jira.search.get(args.jql, max_results=args.max, fields=fields)

    if args.json:
        print(_dump(result))
        return 0

    issues = result.issues if result else []
    if not issues:
        print("No issues found")
        return 0

    print(f"Found {len(issues)} issue(s):\n")
    for issue in issues:
        print(f"  {issue.key}: {issue.fields.get('summary', '')}")
    return 0


def cmd_confluence_comments(args: argparse.Namespace) -> int:
    """List the comments of a piece of content."""
    expand = args.expand.split(",") if args.expand else None

    with get_client("confluence", _client_config(args)) as confluence:
        page, response = confluence.comment.gets(
            args.content_id,
            expand=expand,
            start_at=args.start,
            max_results=args.limit,
        )

    if args.json:
        print(_dump(page))
        return 0

    comments = page.results if page else []
    if not comments:
        print(f"No comments on {args.content_id}")
        return 0

    for comment in comments:
        print(f"  {comment.id}: {comment.title}")
    return 0


# =============================================================================
# Config commands
# =============================================================================


def cmd_config_show(args: argparse.Namespace) -> int:
    """Show the current configuration."""
    import os

    from atlassian_services.atlassian.credentials import (
        ENV_API_TOKEN,
        ENV_BASE_URL,
        ENV_BEARER_TOKEN,
        ENV_USER_EMAIL,
    )
    from atlassian_services.core.registry import ENV_DEFAULT_PRODUCT

    print("Atlassian Services Configuration")
    print("=" * 40)
    print(f"Base URL:        {os.environ.get(ENV_BASE_URL, 'Not set')}")
    print(f"User email:      {os.environ.get(ENV_USER_EMAIL, 'Not set')}")
    print(f"API token:       {'Set' if os.environ.get(ENV_API_TOKEN) else 'Not set'}")
    print(f"Bearer token:    {'Set' if os.environ.get(ENV_BEARER_TOKEN) else 'Not set'}")
    print(f"Default product: {os.environ.get(ENV_DEFAULT_PRODUCT, 'Not set')}")
    print(f"Clients:         {', '.join(list_clients())}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="atlassian-services",
        description="Typed Atlassian Cloud REST API client",
    )
    parser.add_argument("--trace", action="store_true", help="Print OpenTelemetry spans")
    parser.add_argument("--json", action="store_true", help="Print raw JSON results")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("trace-demo", help="Emit a demo span for every module")

    # admin
    admin_parser = subparsers.add_parser("admin", help="Atlassian Administration commands")
    admin_sub = admin_parser.add_subparsers(dest="admin_command", required=True)
    admin_activity = admin_sub.add_parser("activity", help="User last active dates")
    admin_activity.add_argument("organization_id", help="Organization ID")
    admin_activity.add_argument("account_id", help="User account ID")

    # jira
    jira_parser = subparsers.add_parser("jira", help="Jira commands")
    jira_sub = jira_parser.add_subparsers(dest="jira_command", required=True)
    jira_search = jira_sub.add_parser("search", help="Search issues with JQL")
    jira_search.add_argument("jql", help="JQL query")
    jira_search.add_argument("--fields", help="Comma-separated fields")
    jira_search.add_argument("--max", type=int, default=50, help="Max results")
    jira_search.add_argument("--version", default="3", choices=["2", "3"], help="API version")

    # confluence
    confluence_parser = subparsers.add_parser("confluence", help="Confluence commands")
    confluence_sub = confluence_parser.add_subparsers(dest="confluence_command", required=True)
    confluence_comments = confluence_sub.add_parser("comments", help="List content comments")
    confluence_comments.add_argument("content_id", help="Content ID")
    confluence_comments.add_argument("--expand", help="Comma-separated expansions")
    confluence_comments.add_argument("--start", type=int, default=0, help="First comment index")
    confluence_comments.add_argument("--limit", type=int, default=25, help="Max results")

    # config
    config_parser = subparsers.add_parser("config", help="Configuration commands")
    config_sub = config_parser.add_subparsers(dest="config_command", required=True)
    config_sub.add_parser("show", help="Show current configuration")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args.tracer_provider = None
    if args.trace or args.command == "trace-demo":
        args.tracer_provider = build_tracer_provider(batch=args.command == "trace-demo")

    try:
        if args.command == "trace-demo":
            return cmd_trace_demo(args)

        if args.command == "admin":
            return {"activity": cmd_admin_activity}[args.admin_command](args)

        if args.command == "jira":
            return {"search": cmd_jira_search}[args.jira_command](args)

        if args.command == "confluence":
            return {"comments": cmd_confluence_comments}[args.confluence_command](args)

        if args.command == "config":
            return {"show": cmd_config_show}[args.config_command](args)

    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    except AtlassianError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if args.tracer_provider is not None and args.command != "trace-demo":
            args.tracer_provider.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
