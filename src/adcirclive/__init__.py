"""
adcirclive: command-line client for the tools.adcirc.live API.

Modules:
- config.py: Credentials and immutable ClientConfig loaded from asgs-global.conf
- signer.py: Nonce/signature scheme and the per-request header set
- transport.py: Signed GET/POST against the service, ApiResponse
- defaults.py: Bundled ASGS defaults per forcing kind (pydantic-validated)
- asgs.py: Building and submitting ASGS configuration records
- meshes.py: Mesh catalog lookup and table formatting
- xdmf.py: Static and time-varying XDMF description requests
- commands.py: Subcommand handlers and the COMMANDS registry
- main.py: CLI entry point
"""

from adcirclive.config import ClientConfig, Credentials, load_config
from adcirclive.signer import Signer, SignedRequestContext
from adcirclive.transport import ApiResponse, Transport
from adcirclive.meshes import Mesh
from adcirclive.commands import COMMANDS
from adcirclive.main import main

__all__ = [
    # Config
    "ClientConfig",
    "Credentials",
    "load_config",
    # Signing
    "Signer",
    "SignedRequestContext",
    # Transport
    "ApiResponse",
    "Transport",
    # Catalog
    "Mesh",
    # CLI
    "COMMANDS",
    "main",
]
