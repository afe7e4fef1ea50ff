"""
plainweb CLI - Command-line interface for the site compiler.

Usage:
    plainweb compile [--force]           Build app.txt and list the routes
    plainweb serve [--host H] [--port P] Build and serve the site
    plainweb clear-cache                 Remove the cached compiled plan
"""

import argparse
import logging
import os
import sys

from .errors import MissingCredential, UpstreamError


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="plainweb - Plain-language website compiler",
        prog="plainweb",
    )
    parser.add_argument("--root", default=".", help="Project directory (contains app.txt)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Compile command
    compile_parser = subparsers.add_parser("compile", help="Build the site and list its routes")
    compile_parser.add_argument("--force", action="store_true", help="Ignore the cached plan")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Build and serve the site")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")), help="Port")
    serve_parser.add_argument("--force", action="store_true", help="Ignore the cached plan")

    # Cache command
    subparsers.add_parser("clear-cache", help="Remove the cached compiled plan")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[plainweb] %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "compile":
        return cmd_compile(args)
    elif args.command == "serve":
        return cmd_serve(args)
    elif args.command == "clear-cache":
        return cmd_clear_cache(args)
    else:
        parser.print_help()
        return 1


def _load_compiler(args):
    from .compiler import CompilerConfig, SiteCompiler

    return SiteCompiler(CompilerConfig.load(args.root))


def _report_build_error(e: Exception):
    if isinstance(e, UpstreamError):
        print(f"Error: model request failed: {e}")
    elif isinstance(e, MissingCredential):
        print(f"Error: {e}")
    else:
        print(f"Error: cannot read source: {e}")


def cmd_compile(args):
    """Build the site once and print what was produced."""
    compiler = _load_compiler(args)
    try:
        result = compiler.build(force=args.force)
    except (MissingCredential, UpstreamError, OSError) as e:
        _report_build_error(e)
        return 1

    print(f"Build status: {result.status.value}")
    print(f"Tool calls: {len(result.plan.tool_calls)}")
    print("Routes:")
    for path in result.routes.paths():
        print(f"  {path}")

    if result.skipped:
        print("\nSkipped tool calls:")
        for skipped in result.skipped:
            print(f"  - #{skipped.index} {skipped.name or '?'}: {skipped.reason}")
    return 0


def cmd_serve(args):
    """Build the site, then serve it with uvicorn."""
    import uvicorn

    from .api import SiteService, create_app

    service = SiteService(_load_compiler(args))
    try:
        service.rebuild(force=args.force)
    except (MissingCredential, UpstreamError, OSError) as e:
        _report_build_error(e)
        return 1

    print(f"Listening on http://{args.host}:{args.port}")
    uvicorn.run(create_app(service), host=args.host, port=args.port)
    return 0


def cmd_clear_cache(args):
    """Remove the persisted plan."""
    compiler = _load_compiler(args)
    if compiler.cache.clear():
        print(f"Removed {compiler.cache.path}")
    else:
        print("No cached plan")
    return 0


if __name__ == "__main__":
    sys.exit(main())
