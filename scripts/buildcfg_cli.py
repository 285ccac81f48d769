from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from common.logging_setup import setup_logging
from common.settings import MISSING_PLACEHOLDER, BuildConfig, get_config, load_config

# values that carry no key material
_UNMASKED = {"0x", "0x" + MISSING_PLACEHOLDER}


def mask_key(value: str) -> str:
    """0x…(64 chars) for anything that may hold a key."""
    if value in _UNMASKED:
        return value
    return f"0x…({len(value) - 2} chars)"


def _config(args) -> BuildConfig:
    if args.config:
        return load_config(args.config)
    return get_config()


def render_config(cfg: BuildConfig, reveal: bool = False) -> dict:
    data = cfg.model_dump(exclude={"missing_env"})
    if not reveal:
        for net in data["networks"].values():
            net["accounts"] = [mask_key(a) for a in net["accounts"]]
    return data


def _cmd_show(args) -> int:
    cfg = _config(args)
    print(json.dumps(render_config(cfg, reveal=args.reveal), indent=2, ensure_ascii=False))
    return 0


def _cmd_settings(args) -> int:
    cfg = _config(args)
    print(json.dumps(cfg.solc_settings(), indent=2))
    return 0


def _cmd_resolve(args) -> int:
    import asyncio
    from compilation.override import get_solc_build
    from compilation.solcx_resolver import default_fallback

    version = args.solc_version or _config(args).solidity.version
    desc = asyncio.run(
        get_solc_build(version, default_fallback(version), platform=args.platform, arch=args.arch)
    )
    print(json.dumps(desc.as_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="buildcfg", description="Inspect the Solidity build configuration")
    p.add_argument("--config", default=None, help="Path to config.yaml (default: project root)")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="Print the loaded configuration")
    show.add_argument("--reveal", action="store_true", help="Do not mask account keys")
    show.set_defaults(func=_cmd_show)

    settings = sub.add_parser("settings", help="Print solc standard-JSON settings")
    settings.set_defaults(func=_cmd_settings)

    resolve = sub.add_parser("resolve", help="Print the compiler build used for a version")
    resolve.add_argument("--solc-version", dest="solc_version", default=None,
                         help="Compiler version (default: the configured one)")
    resolve.add_argument("--platform", default=None, help="Override host platform, e.g. darwin")
    resolve.add_argument("--arch", default=None, help="Override host architecture, e.g. arm64")
    resolve.set_defaults(func=_cmd_resolve)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        return args.func(args)
    except RuntimeError as e:
        print(f"ERROR {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
