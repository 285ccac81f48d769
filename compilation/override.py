# compilation/override.py
"""
Hook for the "get solc build" step of a compile.

solc 0.5.17 has no emscripten-wasm32 build, and the native darwin build is
not found for Apple Silicon, so on darwin/arm64 a locally installed binary
is used instead (``brew install solidity@5`` puts it at LOCAL_SOLC_PATH).
Every other request goes to the fallback resolver untouched.
"""
from __future__ import annotations

import logging
import platform as _platform
import sys
from typing import Awaitable, Callable, Optional, Tuple

from compilation.descriptor import CompilerDescriptor

log = logging.getLogger(__name__)

TARGET_SOLC_VERSION = "0.5.17"
TARGET_PLATFORM = "darwin"
TARGET_ARCH = "arm64"
LOCAL_SOLC_PATH = "/opt/homebrew/bin/solc"
LOCAL_SOLC_LONG_VERSION = "0.5.17+commit.d19bba13.Darwin.appleclang"


def host_platform() -> Tuple[str, str]:
    """(platform, arch) of this process, e.g. ("darwin", "arm64")."""
    arch = _platform.machine().lower()
    if arch == "aarch64":
        arch = "arm64"
    elif arch in ("x86_64", "amd64"):
        arch = "x64"
    return sys.platform, arch


def local_solc_build(solc_version: str, platform: str, arch: str) -> Optional[CompilerDescriptor]:
    """Return the local build if this request is the one being patched, else None."""
    if solc_version == TARGET_SOLC_VERSION and platform == TARGET_PLATFORM and arch == TARGET_ARCH:
        # no existence check, a bad path fails when solc is invoked
        return CompilerDescriptor(
            compiler_path=LOCAL_SOLC_PATH,
            is_solc_js=False,
            version=solc_version,
            long_version=LOCAL_SOLC_LONG_VERSION,
        )
    return None


async def get_solc_build(
    solc_version: str,
    run_super: Callable[[], Awaitable[CompilerDescriptor]],
    platform: Optional[str] = None,
    arch: Optional[str] = None,
) -> CompilerDescriptor:
    if platform is None or arch is None:
        host_os, host_arch = host_platform()
        platform = platform or host_os
        arch = arch or host_arch

    local = local_solc_build(solc_version, platform, arch)
    if local is not None:
        log.debug("using local solc %s at %s", solc_version, local.compiler_path)
        return local

    log.debug("deferring solc %s on %s/%s to default resolver", solc_version, platform, arch)
    return await run_super()
