import asyncio

import pytest

from compilation import override
from compilation.descriptor import CompilerDescriptor
from compilation.override import get_solc_build, local_solc_build

FALLBACK = CompilerDescriptor(
    compiler_path="/home/u/.solcx/solc-v0.8.20",
    is_solc_js=False,
    version="0.8.20",
    long_version="0.8.20+commit.a1b79de6",
)


def test_local_build_on_darwin_arm64():
    desc = local_solc_build("0.5.17", "darwin", "arm64")
    assert desc == CompilerDescriptor(
        compiler_path="/opt/homebrew/bin/solc",
        is_solc_js=False,
        version="0.5.17",
        long_version="0.5.17+commit.d19bba13.Darwin.appleclang",
    )
    assert desc.as_dict() == {
        "compilerPath": "/opt/homebrew/bin/solc",
        "isSolcJs": False,
        "version": "0.5.17",
        "longVersion": "0.5.17+commit.d19bba13.Darwin.appleclang",
    }


@pytest.mark.parametrize("version,plat,arch", [
    ("0.5.16", "darwin", "arm64"),
    ("0.8.20", "darwin", "arm64"),
    ("0.5.17", "darwin", "x64"),
    ("0.5.17", "linux", "arm64"),
    ("0.5.17", "win32", "x64"),
])
def test_other_requests_not_patched(version, plat, arch):
    assert local_solc_build(version, plat, arch) is None


def test_hook_returns_local_build_without_calling_fallback():
    calls = []

    async def run_super():
        calls.append(1)
        return FALLBACK

    desc = asyncio.run(get_solc_build("0.5.17", run_super, platform="darwin", arch="arm64"))
    assert desc.compiler_path == "/opt/homebrew/bin/solc"
    assert desc.is_solc_js is False
    assert calls == []


def test_hook_returns_fallback_result_unmodified():
    async def run_super():
        return FALLBACK

    desc = asyncio.run(get_solc_build("0.5.17", run_super, platform="linux", arch="x64"))
    assert desc is FALLBACK


def test_hook_passes_through_any_fallback_value():
    sentinel = object()

    async def run_super():
        return sentinel

    assert asyncio.run(get_solc_build("0.4.24", run_super, platform="darwin", arch="arm64")) is sentinel


def test_hook_uses_host_platform(monkeypatch):
    monkeypatch.setattr(override, "host_platform", lambda: ("darwin", "arm64"))

    async def run_super():
        return FALLBACK

    desc = asyncio.run(get_solc_build("0.5.17", run_super))
    assert desc.long_version == "0.5.17+commit.d19bba13.Darwin.appleclang"


def test_host_platform_normalises_arch(monkeypatch):
    monkeypatch.setattr(override._platform, "machine", lambda: "aarch64")
    monkeypatch.setattr(override.sys, "platform", "linux")
    assert override.host_platform() == ("linux", "arm64")

    monkeypatch.setattr(override._platform, "machine", lambda: "x86_64")
    assert override.host_platform() == ("linux", "x64")

