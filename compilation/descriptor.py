# compilation/descriptor.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CompilerDescriptor:
    """Which solc build to run for a compile step."""
    compiler_path: str
    is_solc_js: bool
    version: str
    long_version: str

    def as_dict(self) -> Dict[str, Any]:
        # key names the toolchain reads
        return {
            "compilerPath": self.compiler_path,
            "isSolcJs": self.is_solc_js,
            "version": self.version,
            "longVersion": self.long_version,
        }
