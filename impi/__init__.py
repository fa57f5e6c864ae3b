"""
impi: verifies grouping and sorting of Go import declarations.
"""

from .engine import Impi, run_verify
from .errors import (
    DiscoveryError,
    FileCheckError,
    ImpiUserError,
    ImportParseError,
    ImportPolicyError,
    SetupError,
    SortError,
    StructuralError,
    VerificationFailed,
)
from .schemes import SCHEMES, STD_LOCAL_THIRD_PARTY, STD_THIRD_PARTY_LOCAL, Scheme, resolve_scheme
from .types import ErrorReporter, ImportType, VerificationError, VerifyOptions
from .verifier import Verifier

__all__ = [
    "Impi",
    "run_verify",
    "Verifier",
    "Scheme",
    "SCHEMES",
    "STD_LOCAL_THIRD_PARTY",
    "STD_THIRD_PARTY_LOCAL",
    "resolve_scheme",
    "ImportType",
    "VerifyOptions",
    "VerificationError",
    "ErrorReporter",
    "ImpiUserError",
    "SetupError",
    "DiscoveryError",
    "FileCheckError",
    "ImportParseError",
    "StructuralError",
    "SortError",
    "ImportPolicyError",
    "VerificationFailed",
]
