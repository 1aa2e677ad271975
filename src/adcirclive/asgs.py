"""
ASGS configuration requests.

Turns the `config` command's options into an AsgsConfig record: pick the
defaults template for the met kind, overlay whatever the user supplied,
and fill in the instance name when none was given.
"""

from typing import Mapping

from adcirclive.defaults import FLAG_FIELDS, AsgsConfig, ForcingKind
from adcirclive.errors import MissingOptionsError
from adcirclive.logging_utils import get_logger
from adcirclive.transport import ASGS_CONFIG_PATH, ApiResponse, Transport

logger = get_logger(__name__)

REQUIRED_OPTIONS = ("operator", "asgsadmin", "met_kind", "gridname", "ncpu")

# Fallbacks used when composing an instance name
DEFAULT_GRIDNAME = "HSOFS"
DEFAULT_MET_KIND = "NAM"
DEFAULT_MACHINE = "Linux"
DEFAULT_OPERATOR = "ukwn"


def check_required(options: Mapping[str, str | None]) -> None:
    """Raise MissingOptionsError naming every required option that is unset."""
    missing = [f"--{name}" for name in REQUIRED_OPTIONS if not options.get(name)]
    if missing:
        raise MissingOptionsError(missing)


def derive_instance_name(options: Mapping[str, str | None]) -> str:
    """gridname_metkind_machine_operator, with fallbacks for unset parts."""
    met_kind = options.get("met_kind") or DEFAULT_MET_KIND
    return "_".join([
        options.get("gridname") or DEFAULT_GRIDNAME,
        met_kind.upper(),
        options.get("machine") or DEFAULT_MACHINE,
        options.get("operator") or DEFAULT_OPERATOR,
    ])


def build_config_payload(
    options: Mapping[str, str | None],
    defaults: Mapping[ForcingKind, AsgsConfig],
) -> AsgsConfig:
    """
    Build the configuration record to submit.

    Args:
        options: Parsed command-line options keyed by flag name.
        defaults: Loaded defaults document.

    Returns:
        The selected template with user-supplied fields overlaid.

    Raises:
        MissingOptionsError: A required option is missing.
        UnknownForcingKindError: met_kind has no template.
    """
    check_required(options)
    kind = ForcingKind.parse(options["met_kind"])
    template = defaults[kind]

    overlay = {
        field_name: str(options[flag])
        for flag, field_name in FLAG_FIELDS.items()
        if options.get(flag) is not None
    }
    if not options.get("instancename"):
        overlay["INSTANCENAME"] = derive_instance_name(options)

    logger.debug("Overlaying %s onto %s defaults", sorted(overlay), kind.value)
    return template.model_copy(update=overlay)


def submit_config(transport: Transport, payload: AsgsConfig) -> ApiResponse:
    """POST the record and return the checked response."""
    return transport.post(ASGS_CONFIG_PATH, payload.model_dump()).raise_for_status()
