"""
Commands: one handler per subcommand.

Every handler follows the same contract:

    handler(argv: list[str], context: CommandContext) -> int

It parses its own flags, builds the request payload, performs at most the
requests it needs, prints the result to context.stdout and returns the
process exit code. Errors are raised as AdcircLiveError subclasses and
turned into exit codes by main().
"""

import argparse
import uuid
from dataclasses import dataclass, field
from typing import Callable, TextIO

from adcirclive.asgs import build_config_payload, submit_config
from adcirclive.config import ClientConfig
from adcirclive.defaults import FLAG_FIELDS, load_defaults
from adcirclive.logging_utils import get_logger
from adcirclive.meshes import fetch_catalog, find_mesh, format_mesh_table, parse_catalog
from adcirclive.transport import ApiResponse, Transport
from adcirclive.xdmf import (
    DEFAULT_ADCIRC_VERSION,
    DEFAULT_PARAVIEW_VERSION,
    OutputSelection,
    StaticXdmfRequest,
    TimeAxis,
    TimeVaryingXdmfRequest,
    request_xdmf,
)

logger = get_logger(__name__)


@dataclass
class CommandContext:
    """
    What a handler needs from the outside world.

    The Transport is built on first use, so commands that never touch the
    network (help, uuid) work without credentials.
    """
    config: ClientConfig
    stdout: TextIO
    stderr: TextIO
    transport_factory: Callable[[ClientConfig], Transport] = Transport.from_config
    _transport: Transport | None = field(default=None, repr=False)

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = self.transport_factory(self.config)
        return self._transport

    def out(self, text: str) -> None:
        print(text, file=self.stdout)

    def close(self) -> None:
        if self._transport is not None:
            self._transport.close()
            self._transport = None


Handler = Callable[[list[str], CommandContext], int]


@dataclass(frozen=True)
class Command:
    name: str
    summary: str
    handler: Handler
    parser: Callable[[], argparse.ArgumentParser] | None = None


# =============================================================================
# Argument Parsers
# =============================================================================

def _parser(name: str, description: str) -> argparse.ArgumentParser:
    return argparse.ArgumentParser(prog=f"adcirclive {name}", description=description)


def config_parser() -> argparse.ArgumentParser:
    parser = _parser("config", "Request an ASGS configuration file built from bundled defaults.")
    parser.add_argument(
        "--met_kind", "--met-kind", dest="met_kind", default="NAM",
        help="Meteorological forcing: NAM, ATCF or GFS (default: NAM)",
    )
    for flag in FLAG_FIELDS:
        parser.add_argument(f"--{flag}", default=None, help=f"Value for {FLAG_FIELDS[flag]}")
    parser.add_argument(
        "--as", dest="output_format", choices=("stdout", "json"), default="stdout",
        help="Print the generated file (stdout) or the raw response (json)",
    )
    return parser


def meshes_parser() -> argparse.ArgumentParser:
    parser = _parser("meshes", "List the meshes known to the service.")
    parser.add_argument(
        "--as", dest="output_format", choices=("json", "table"), default="json",
        help="Raw JSON (default) or a name/nodes/elements table",
    )
    return parser


def _add_xdmf_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--mesh", required=True, help="Mesh name as listed by 'adcirclive meshes'")
    products = parser.add_argument_group("output products")
    for name in OutputSelection.__dataclass_fields__:
        flag = name.replace("_", "-")
        products.add_argument(f"--{flag}", dest=name, action="store_true", help=f"Describe {flag} output")
    parser.add_argument("--paraview-version", default=DEFAULT_PARAVIEW_VERSION)
    parser.add_argument("--adcirc-version", default=DEFAULT_ADCIRC_VERSION)
    parser.add_argument(
        "--as", dest="output_format", choices=("stdout", "json"), default="stdout",
        help="Print the generated XDMF (stdout) or the raw response (json)",
    )


def xdmf_parser() -> argparse.ArgumentParser:
    parser = _parser("xdmf", "Request a static XDMF description for a mesh.")
    _add_xdmf_arguments(parser)
    return parser


def xdmftv_parser() -> argparse.ArgumentParser:
    parser = _parser("xdmftv", "Request a time-varying XDMF description for a mesh.")
    _add_xdmf_arguments(parser)
    parser.add_argument("--cold-start", default=None, help="Cold start date/time")
    parser.add_argument("--output-start", default=None, help="Date/time of the first output data set")
    parser.add_argument("--num-datasets", type=int, default=None, help="Number of output data sets")
    parser.add_argument("--time-increment", type=float, default=None, help="Seconds between data sets")
    return parser


# =============================================================================
# Handlers
# =============================================================================

def _print_response(context: CommandContext, response: ApiResponse, output_format: str) -> None:
    if output_format == "json":
        context.out(response.body)
    else:
        context.out(response.content)


def run_help(argv: list[str], context: CommandContext) -> int:
    """Print usage, or one command's full help, to stderr."""
    if argv and argv[0] in COMMANDS and COMMANDS[argv[0]].parser is not None:
        COMMANDS[argv[0]].parser().print_help(file=context.stderr)
    else:
        print(usage(), file=context.stderr)
    return 0


def run_uuid(argv: list[str], context: CommandContext) -> int:
    """Print a new random UUID, e.g. for naming a run."""
    context.out(str(uuid.uuid4()))
    return 0


def run_meshes(argv: list[str], context: CommandContext) -> int:
    args = meshes_parser().parse_args(argv)
    response = fetch_catalog(context.transport)
    if args.output_format == "table":
        context.out(format_mesh_table(parse_catalog(response)))
    else:
        context.out(response.body)
    return 0


def run_config(argv: list[str], context: CommandContext) -> int:
    args = config_parser().parse_args(argv)
    options = vars(args)

    # Validation happens here, before any request is made
    payload = build_config_payload(options, load_defaults())
    logger.info("Submitting ASGS config for instance %s", payload.INSTANCENAME)

    response = submit_config(context.transport, payload)
    _print_response(context, response, args.output_format)
    return 0


def _xdmf_request_fields(args: argparse.Namespace, context: CommandContext) -> dict:
    output = OutputSelection(**{name: getattr(args, name) for name in OutputSelection.__dataclass_fields__})
    if not output.any_selected():
        logger.warning("No output products selected; the description will be empty")
    return {
        "mesh": find_mesh(context.transport, args.mesh),
        "output": output,
        "paraview_version": args.paraview_version,
        "adcirc_version": args.adcirc_version,
    }


def run_xdmf(argv: list[str], context: CommandContext) -> int:
    args = xdmf_parser().parse_args(argv)
    request = StaticXdmfRequest(**_xdmf_request_fields(args, context))
    _print_response(context, request_xdmf(context.transport, request), args.output_format)
    return 0


def run_xdmftv(argv: list[str], context: CommandContext) -> int:
    args = xdmftv_parser().parse_args(argv)
    time_axis = TimeAxis(
        cold_start=args.cold_start,
        output_start=args.output_start,
        num_datasets=args.num_datasets,
        time_increment=args.time_increment,
    )
    request = TimeVaryingXdmfRequest(time=time_axis, **_xdmf_request_fields(args, context))
    _print_response(context, request_xdmf(context.transport, request), args.output_format)
    return 0


# =============================================================================
# Command Registry
# =============================================================================

COMMANDS: dict[str, Command] = {
    "config": Command("config", "request an ASGS configuration file", run_config, config_parser),
    "help": Command("help", "show this message, or 'help <command>' for details", run_help),
    "meshes": Command("meshes", "list available meshes", run_meshes, meshes_parser),
    "uuid": Command("uuid", "print a new random UUID", run_uuid),
    "xdmf": Command("xdmf", "request a static XDMF description", run_xdmf, xdmf_parser),
    "xdmftv": Command("xdmftv", "request a time-varying XDMF description", run_xdmftv, xdmftv_parser),
}

DEFAULT_COMMAND = "help"


def usage() -> str:
    width = max(len(name) for name in COMMANDS)
    lines = [
        "usage: adcirclive [--config PATH] [--verbose] <command> [options]",
        "",
        "commands:",
    ]
    lines.extend(f"  {cmd.name:<{width}}  {cmd.summary}" for cmd in COMMANDS.values())
    return "\n".join(lines)
