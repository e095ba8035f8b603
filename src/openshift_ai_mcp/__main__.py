"""Entry point for the OpenShift AI MCP server."""

import argparse
import logging
import os
import sys
from typing import Any

from openshift_ai_mcp import __version__
from openshift_ai_mcp.config import (
    AuthMode,
    AvailabilityPolicyName,
    LogLevel,
    OpenShiftAIConfig,
    TransportMode,
)
from openshift_ai_mcp.utils.errors import AuthenticationError


def _has_auth_error(exc: BaseException) -> bool:
    """Check if an exception is or contains an AuthenticationError.

    Handles both direct AuthenticationError and ExceptionGroup wrappers
    from anyio task groups.
    """
    if isinstance(exc, AuthenticationError):
        return True
    inner: tuple[BaseException, ...] = getattr(exc, "exceptions", ())
    if inner:
        return any(_has_auth_error(e) for e in inner)
    return False


def setup_logging(level: LogLevel) -> None:
    """Configure logging for the server."""
    logging.basicConfig(
        level=level.value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="openshift-ai-mcp",
        description="MCP server for Red Hat OpenShift AI",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Transport options
    parser.add_argument(
        "--transport",
        choices=[t.value for t in TransportMode],
        default=None,
        help="Transport mode (default: from config or stdio)",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host to bind HTTP server to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind HTTP server to (default: 8000)",
    )

    # Auth options
    parser.add_argument(
        "--auth-mode",
        choices=[m.value for m in AuthMode],
        default=None,
        help="Authentication mode (default: auto)",
    )
    parser.add_argument(
        "--kubeconfig",
        default=None,
        help="Path to kubeconfig file",
    )
    parser.add_argument(
        "--context",
        default=None,
        help="Kubeconfig context to use",
    )

    # Safety options
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Run in read-only mode (disable all write operations)",
    )
    parser.add_argument(
        "--enable-dangerous",
        action="store_true",
        help="Enable dangerous operations like delete",
    )

    # Detection options
    parser.add_argument(
        "--availability-policy",
        choices=[p.value for p in AvailabilityPolicyName],
        default=None,
        help="When OpenShift AI counts as available (default: core)",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Wait up to SECONDS for OpenShift AI before serving",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Logging level (default: INFO)",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> OpenShiftAIConfig:
    """Build config from args, falling back to environment/defaults."""
    config_kwargs: dict[str, Any] = {}

    if args.transport:
        config_kwargs["transport"] = TransportMode(args.transport)

    if args.host:
        config_kwargs["host"] = args.host

    if args.port:
        config_kwargs["port"] = args.port

    if args.auth_mode:
        config_kwargs["auth_mode"] = AuthMode(args.auth_mode)

    if args.kubeconfig:
        config_kwargs["kubeconfig_path"] = args.kubeconfig

    if args.context:
        config_kwargs["kubeconfig_context"] = args.context

    if args.read_only:
        config_kwargs["read_only_mode"] = True

    if args.enable_dangerous:
        config_kwargs["enable_dangerous_operations"] = True

    if args.availability_policy:
        config_kwargs["availability_policy"] = AvailabilityPolicyName(args.availability_policy)

    if args.wait is not None:
        config_kwargs["wait_for_availability"] = True
        config_kwargs["availability_timeout"] = args.wait

    if args.log_level:
        config_kwargs["log_level"] = LogLevel(args.log_level)

    return OpenShiftAIConfig(**config_kwargs)


def main() -> int:
    """Main entry point."""
    config = build_config(parse_args())

    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting OpenShift AI MCP server v{__version__}")

    try:
        warnings = config.validate_auth_config()
        for warning in warnings:
            logger.warning(warning)
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    from openshift_ai_mcp.server import create_server

    mcp = create_server(config)

    os.environ.setdefault("UVICORN_HOST", config.host)
    os.environ.setdefault("UVICORN_PORT", str(config.port))

    transport_name: str = config.transport.value
    if config.transport != TransportMode.STDIO:
        logger.info(f"Running with {transport_name} transport on {config.host}:{config.port}")
    else:
        logger.info(f"Running with {transport_name} transport")

    try:
        mcp.run(transport=transport_name)  # type: ignore[arg-type]
    except BaseException as exc:  # BaseException to catch anyio's BaseExceptionGroup
        if _has_auth_error(exc):
            logger.error(
                "Kubernetes authentication failed. Your credentials may be expired. "
                "Try re-authenticating with: oc login / kubectl config set-credentials"
            )
            return 1
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
