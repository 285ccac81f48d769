# compilation/solcx_resolver.py
"""
Default solc resolution through py-solc-x: install on first use, then
report the managed native binary.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import solcx
from solcx.install import get_executable

from compilation.descriptor import CompilerDescriptor

log = logging.getLogger(__name__)


def install_solc(version: str) -> None:
    """Install the specified solc version if not already installed."""
    installed = [str(v) for v in solcx.get_installed_solc_versions()]
    if version not in installed:
        log.info("installing solc %s", version)
        solcx.install_solc(version)


def solcx_build(version: str) -> CompilerDescriptor:
    install_solc(version)
    path = get_executable(version)
    solcx.set_solc_version(version, silent=True)
    long_version = str(solcx.get_solc_version(with_commit_hash=True))
    return CompilerDescriptor(
        compiler_path=str(path),
        is_solc_js=False,
        version=version,
        long_version=long_version,
    )


def default_fallback(version: str) -> Callable[[], Awaitable[CompilerDescriptor]]:
    """run_super for get_solc_build, resolving `version` off the event loop."""

    async def _run_super() -> CompilerDescriptor:
        return await asyncio.to_thread(solcx_build, version)

    return _run_super
